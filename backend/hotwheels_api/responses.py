"""
HotWheels API — Response Classes
==================================

The list endpoint answers with compact JSON (Starlette's JSONResponse,
no whitespace). The detail endpoint answers with indented, human-readable
JSON. Clients have been written against both formats, so they stay
different on purpose.
"""

import json
from typing import Any

from starlette.responses import JSONResponse, PlainTextResponse

INTERNAL_ERROR_BODY = "Error 500: Fallo interno del servidor."


class PrettyJSONResponse(JSONResponse):
    """JSONResponse rendered with two-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode("utf-8")


def internal_error_response() -> PlainTextResponse:
    """The one response every unexpected fault turns into. Carries no detail."""
    return PlainTextResponse(INTERNAL_ERROR_BODY, status_code=500)
