"""
HotWheels API — Catalog Dispatcher
====================================

What:  The single route of the API: GET on every path.
Why:   Endpoints are selected by path segment containment (see
       services/path_router.py), so one catch-all route classifies the
       path and dispatches instead of one FastAPI route per endpoint.
How:   classify → call the matching CatalogService operation → serialize.

Responses:
    LIST    → 200 compact JSON array          | 404 {"error": ...}
    DETAIL  → 200 indented JSON object        | 404 {"error": "... <id> ..."}
    DEFAULT → 200 {"message": "Bienvenido ..."}
    fault   → 500 text/plain "Error 500: Fallo interno del servidor."

Error boundary:
    This route is the one place faults are caught. NotFoundError is an
    expected outcome and becomes a 404. Everything else (database errors,
    a row that fails to transform, a bug in classification) is logged with
    its traceback and answered with the opaque 500; nothing internal is
    returned to the client.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from hotwheels_api.database import get_db_session
from hotwheels_api.exceptions import NotFoundError
from hotwheels_api.middleware.request_id import request_id_var
from hotwheels_api.responses import PrettyJSONResponse, internal_error_response
from hotwheels_api.schemas.catalog import ErrorResponse, WelcomeResponse
from hotwheels_api.services.catalog_service import catalog_service
from hotwheels_api.services.path_router import RouteKind, classify_path

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Catalog"])


def undecoded_path(request: Request, full_path: str) -> str:
    """
    The request path exactly as the client sent it, percent-escapes intact.

    Starlette's path parameters are percent-decoded, which would turn an
    encoded slash into a segment separator: /modelo/ID%2Fall-models must
    look up the identifier "ID%2Fall-models", not list the catalog.
    ASGI servers put the raw bytes in scope["raw_path"]; some clients
    (httpx's ASGITransport) append the query string there, so it is cut off.
    Servers that omit raw_path fall back to the decoded path parameter.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return "/" + full_path
    # latin-1 maps every byte, so a non-ASCII byte can't fail routing
    return raw_path.split(b"?", 1)[0].decode("latin-1")


def not_found_response(exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=ErrorResponse(error=exc.message).model_dump())


@router.get(
    "/{full_path:path}",
    responses={
        200: {"description": "Catalog list, one model, or the welcome message"},
        404: {"description": "No catalog rows / no model with that ID", "model": ErrorResponse},
        500: {"description": "Unexpected failure (plain text body)"},
    },
    summary="Catalog dispatcher",
    description=(
        "Paths containing the segment 'all-models' return the whole catalog. "
        "Paths containing 'modelo/<ID>' return one model. Any other path "
        "returns a welcome message."
    ),
)
async def dispatch(
    request: Request,
    full_path: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Classify the request path and produce exactly one response.

    Routing works on the path as sent, still percent-encoded (see
    undecoded_path); the query string plays no part in routing.
    """
    path = undecoded_path(request, full_path)
    try:
        intent = classify_path(path)

        if intent.kind is RouteKind.LIST:
            models = await catalog_service.list_models(db)
            return JSONResponse(content=jsonable_encoder(models))

        if intent.kind is RouteKind.DETAIL:
            model = await catalog_service.get_model(db, intent.model_id)
            return PrettyJSONResponse(content=jsonable_encoder(model))

        return JSONResponse(content=WelcomeResponse().model_dump())

    except NotFoundError as exc:
        return not_found_response(exc)
    except Exception as exc:
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unhandled error serving %s: %s | Context: %s",
            rid,
            path,
            str(exc),
            getattr(exc, "context", {}),
            exc_info=True,
        )
        return internal_error_response()
