"""
HotWheels API — Path Classification
=====================================

What:  Decides which catalog operation a request path asks for.
Why:   The API is matched by segment *containment*, not by prefix:
       /all-models, /v1/all-models and /all-models/extra all list the
       catalog, and /anything/modelo/ID000209 fetches one model.
       FastAPI's prefix router can't express that, so a single catch-all
       route hands the path to classify_path().

Priority:
    1. any segment == "all-models"                   → LIST
    2. first "modelo" segment followed by a segment  → DETAIL(<that segment>)
    3. anything else (including "/modelo" alone)     → DEFAULT (welcome payload)
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

LIST_MARKER = "all-models"
DETAIL_MARKER = "modelo"


class RouteKind(str, Enum):
    LIST = "list"
    DETAIL = "detail"
    DEFAULT = "default"


@dataclass(frozen=True)
class RouteIntent:
    """Result of classifying a path. `model_id` is only set for DETAIL."""

    kind: RouteKind
    model_id: Optional[str] = None


def split_path(path: str) -> List[str]:
    """Split on '/' and drop empty segments ('//a/' → ['a'])."""
    return [segment for segment in path.split("/") if segment]


def classify_path(path: str) -> RouteIntent:
    """
    Classify a request path into exactly one RouteIntent.

    The identifier after the detail marker is returned verbatim; it is not
    validated or normalized here or anywhere downstream.
    """
    segments = split_path(path)

    if LIST_MARKER in segments:
        return RouteIntent(RouteKind.LIST)

    if DETAIL_MARKER in segments:
        index = segments.index(DETAIL_MARKER)
        if index + 1 < len(segments):
            return RouteIntent(RouteKind.DETAIL, model_id=segments[index + 1])

    return RouteIntent(RouteKind.DEFAULT)
