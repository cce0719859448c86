"""Kiosk endpoints: derender, foundation try-on, and the shade catalog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from foundation_mirror.api.models import (
    ApplyFoundationRequest,
    DerenderRequest,
    FoundationSelection,
)
from foundation_mirror.domain.catalog import CATALOG, Shade, find_shade
from foundation_mirror.domain.images import ImagePayload, NoImageProduced
from foundation_mirror.services.errors import ConfigurationError

if TYPE_CHECKING:
    from foundation_mirror.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["kiosk"])

NO_IMAGE_ERROR = "No image generated by model"
IMAGE_REQUIRED_ERROR = "Image data is required"
_KIOSK_PATHS = frozenset({"/derender", "/apply-foundation"})


@router.get("/foundations")
async def list_foundations() -> dict[str, object]:
    """Return the shade catalog for client-side pickers."""
    return {"foundations": [shade.to_dict() for shade in CATALOG]}


@router.post("/derender", response_model=None)
async def derender(
    body: DerenderRequest, request: Request
) -> dict[str, object] | JSONResponse:
    """Remove makeup from a portrait and open a session for it."""
    if not body.image:
        return _error(status.HTTP_400_BAD_REQUEST, IMAGE_REQUIRED_ERROR)

    container: AppContainer = request.app.state.container
    try:
        image = ImagePayload.from_base64(body.image, body.mime_type)
        result = await container.derender_service.derender(image)
    except ConfigurationError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except Exception as exc:
        logger.exception("Derender request failed")
        return _internal_error(exc)

    if isinstance(result, NoImageProduced):
        return {"error": NO_IMAGE_ERROR, "rawText": result.raw_text}

    payload: dict[str, object] = {
        "image": result.image.to_base64(),
        "mimeType": result.image.mime_type,
        "suggestedFoundations": result.suggested_foundations,
    }
    if result.session_id is not None:
        payload["sessionId"] = result.session_id
    return payload


@router.post("/apply-foundation", response_model=None)
async def apply_foundation(
    body: ApplyFoundationRequest, request: Request
) -> dict[str, object] | JSONResponse:
    """Render a foundation shade onto a derendered face."""
    if not body.image:
        return _error(status.HTTP_400_BAD_REQUEST, IMAGE_REQUIRED_ERROR)
    if body.foundation is None or not body.foundation.sku:
        return _error(status.HTTP_400_BAD_REQUEST, "Foundation selection is required")
    if not body.session_id:
        return _error(status.HTTP_400_BAD_REQUEST, "Session ID is required")

    container: AppContainer = request.app.state.container
    shade = _resolve_shade(body.foundation)
    try:
        image = ImagePayload.from_base64(body.image, body.mime_type)
        result = await container.tryon_service.apply(
            image=image, shade=shade, session_id=body.session_id
        )
    except ConfigurationError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except Exception as exc:
        logger.exception(
            "Apply foundation request failed",
            extra={"session_id": body.session_id, "sku": shade.sku},
        )
        return _internal_error(exc)

    if isinstance(result, NoImageProduced):
        return {"error": NO_IMAGE_ERROR, "rawText": result.raw_text}
    return {
        "image": result.image.to_base64(),
        "mimeType": result.image.mime_type,
        "foundation": result.sku,
    }


async def kiosk_validation_error(
    request: Request, exc: RequestValidationError
) -> Response:
    """Report unreadable kiosk bodies with the same 400 shape as missing fields.

    A body that is not a JSON object carries no image, so the first check fails.
    """
    if request.url.path not in _KIOSK_PATHS:
        return await request_validation_exception_handler(request, exc)
    return _error(status.HTTP_400_BAD_REQUEST, IMAGE_REQUIRED_ERROR)


def _resolve_shade(selection: FoundationSelection) -> Shade:
    """Build the shade to render; blank fields fall back to the catalog entry."""
    sku = selection.sku or ""
    known = find_shade(sku)
    return Shade(
        sku=sku,
        name=selection.name or (known.name if known else ""),
        hex=selection.hex or (known.hex if known else ""),
        undertone=selection.undertone or (known.undertone if known else ""),
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _internal_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", "details": str(exc)},
    )
