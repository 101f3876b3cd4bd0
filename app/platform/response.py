from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[dict[str, Any]] = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Single source of truth for ALL API responses.

    Bodies are flat: ``message`` (when given) sits next to the keys of ``data``,
    e.g. ``{"message": "..."}`` or ``{"count": 3}``.
    """
    content: dict[str, Any] = {}
    if message is not None:
        content["message"] = message
    if data:
        content.update(jsonable_encoder(data))

    return JSONResponse(status_code=status_code, content=content)
