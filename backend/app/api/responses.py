from typing import Any
from fastapi import Response, status
from fastapi.responses import JSONResponse
from app.core.config import settings

NO_LOG_MESSAGE = "There is no log"
NO_LOGS_MESSAGE = "There are no logs"


def empty_signal(message: str) -> Response:
    """
    "Nothing matched" response, not an error.

    Depending on EMPTY_RESULT_STYLE this is a 204 with no body or a 200
    carrying `message`.
    """
    if settings.EMPTY_RESULT_STYLE == "message":
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": message})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def or_empty(result: Any, message: str = NO_LOGS_MESSAGE) -> Any:
    """Pass a service result through, or the empty signal when it is None"""
    if result is None:
        return empty_signal(message)
    return result
