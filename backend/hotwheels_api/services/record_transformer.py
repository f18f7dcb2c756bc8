"""
HotWheels API — Record Transformer
====================================

What:  Turns one raw catalog row into the record returned to clients.
Why:   Rows store only an image *filename* and a JSON-encoded category list;
       clients want a full image URL and a single category label.
How:   Pure functions, no I/O. The input mapping is copied, never mutated.
Who:   Used identically by the list and detail handlers in catalog_service.

Transformation:
    portada   = "ID000209.webp"   →  portada_url = "<image_base_url>/ID000209.webp"
    portada   = "" / null / absent →  portada_url = null
    categoria = '["TH"]'           →  categoria   = "TH"
    categoria = '[]' / 'not json'  →  categoria   = null
    categoria = null / absent      →  left as-is

Every other column passes through untouched.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

IMAGE_FIELD = "portada"
IMAGE_URL_FIELD = "portada_url"
CATEGORY_FIELD = "categoria"


def build_image_url(filename: Optional[str], image_base_url: str) -> Optional[str]:
    """
    Join the storage base URL and an image filename.

    The filename is used as stored: no escaping, no slash normalization.
    Returns None when there is no filename.
    """
    if not filename:
        return None
    return f"{image_base_url}/{filename}"


def normalize_category(raw: Any) -> Optional[str]:
    """
    Reduce a JSON-encoded category list to its first label.

    Never raises. Anything that is not a JSON array whose first element is a
    non-empty string (invalid or pathologically nested JSON, an object, a bare
    string or number, `[]`, `[""]`, `[5]`) degrades to None.
    """
    try:
        categories = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        logger.debug("Unparseable category value %.80r", raw)
        return None

    if not isinstance(categories, list) or not categories:
        return None
    first = categories[0]
    if not isinstance(first, str) or not first:
        return None
    return first


def transform_record(row: Mapping[str, Any], image_base_url: str) -> Dict[str, Any]:
    """
    Build the client-facing form of one catalog row.

    Args:
        row: Raw row as returned by the database (any mapping).
        image_base_url: Storage prefix, see Settings.image_base_url.

    Returns:
        A new dict with every column of `row`, plus `portada_url`, and with
        `categoria` rewritten when it held a value.
    """
    record = dict(row)
    record[IMAGE_URL_FIELD] = build_image_url(record.get(IMAGE_FIELD), image_base_url)

    if record.get(CATEGORY_FIELD):
        record[CATEGORY_FIELD] = normalize_category(record[CATEGORY_FIELD])

    return record
