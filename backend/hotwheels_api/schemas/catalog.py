"""
HotWheels API — Pydantic Response Schemas
===========================================

What:  Models for the fixed-shape payloads of the API.
Why:   The welcome and error bodies have a stable contract; declaring them
       documents the API (OpenAPI, when docs are enabled) and keeps the
       key names in one place.

Catalog records themselves are NOT modelled here: the table's columns are
maintained outside this service and every column is passed through, so
records travel as plain dicts (see services/record_transformer.py).
"""

from pydantic import BaseModel, Field

WELCOME_MESSAGE = (
    "Bienvenido a HotWheels API. Usa /all-models para la colección completa "
    "o /modelo/{ID} para detalles."
)


class WelcomeResponse(BaseModel):
    """Returned for any path that names neither the list nor the detail marker."""
    message: str = Field(default=WELCOME_MESSAGE, description="Usage hint")


class ErrorResponse(BaseModel):
    """
    404 body for empty results.

    Example:
        {"error": "Coche con ID 'ID999999' no encontrado."}
    """
    error: str = Field(description="Human-readable explanation, may include the requested ID")
