"""
Connector Route

Single entry point used by the CMS admin UI. Validates the ``action``
parameter, dispatches to the matching processor and returns its JSON
envelope. Nothing raised below this route escapes as an HTML error page.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from extrafields.exceptions import ErrorCode
from extrafields.host import Host, get_host
from extrafields.processors import ProcessorRegistry, is_valid_action, processor_registry
from extrafields.processors.base import exception_location

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Connector"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_processor_registry() -> ProcessorRegistry:
    return processor_registry


def error_envelope(status_code: int, message: str, error: ErrorCode, **extra: Any) -> JSONResponse:
    content = {"success": False, "message": message, "error": error.value, **extra}
    return JSONResponse(status_code=status_code, content=content)


async def request_properties(request: Request) -> dict[str, Any]:
    """Merge query parameters with a JSON or form body."""
    properties: dict[str, Any] = dict(request.query_params)
    if request.method != "POST":
        return properties

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        body = await request.json()
        if isinstance(body, dict):
            properties.update(body)
    elif content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        properties.update({key: value for key, value in form.items()})
    return properties


@router.api_route("/connector", methods=["GET", "POST"])
async def connector(
    request: Request,
    host: Host = Depends(get_host),
    registry: ProcessorRegistry = Depends(get_processor_registry),
) -> JSONResponse:
    try:
        properties = await request_properties(request)
        action = str(properties.pop("action", "") or "")

        if not is_valid_action(action):
            logger.warning(f"Rejected connector action {action!r}")
            return error_envelope(status.HTTP_400_BAD_REQUEST, "Invalid action specified.", ErrorCode.INVALID_ACTION)

        processor_class = registry.get(action)
        if processor_class is None:
            return error_envelope(
                status.HTTP_404_NOT_FOUND,
                f"Could not execute processor: {action}",
                ErrorCode.PROCESSOR_NOT_FOUND,
            )

        result = await processor_class(host, properties).run()
        return JSONResponse(content=result.to_envelope())
    except Exception as e:
        location = exception_location(e)
        logger.error(f"Connector error: {e} | Location: {location}", exc_info=True)
        return error_envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"An error occurred processing your request: {e}",
            ErrorCode.EXCEPTION_CAUGHT,
            details=location,
        )
