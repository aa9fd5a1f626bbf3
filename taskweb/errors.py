from typing import Any

from fastapi import HTTPException
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_502_BAD_GATEWAY


class TaskWebApiError(HTTPException):
    """
    Base taskweb API Error
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *args: Any,
        **kwargs: Any,
    ):
        detail = {"message": message}
        super().__init__(status_code=status_code, detail=detail, **kwargs)


class Unauthorized(TaskWebApiError):
    def __init__(self, message: str = "Unauthorized", **kwargs: Any):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, message=message, **kwargs)


class BadGateway(TaskWebApiError):
    def __init__(self, message: str = "Bad Gateway", **kwargs: Any):
        super().__init__(status_code=HTTP_502_BAD_GATEWAY, message=message, **kwargs)
