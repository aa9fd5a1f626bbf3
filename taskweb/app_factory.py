import logging
from typing import Any, TypedDict

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.responses import JSONResponse

from taskweb.api import root_router
from taskweb.app import TaskWeb
from taskweb.config import Config
from taskweb.errors import BadGateway
from taskweb.graph.errors import GraphApiError, GraphError
from taskweb.lifespan import lifespan


logger = logging.getLogger(__name__)


class AppConfig(TypedDict):
    default_response_class: type[JSONResponse]
    openapi_url: str | None
    docs_url: str | None
    redoc_url: str | None
    lifespan: Any
    redirect_slashes: bool


async def graph_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status = exc.status if isinstance(exc, GraphApiError) else None
    logger.error(f"Directory request failed for {request.url.path}: {exc}")
    error = BadGateway("Error calling the directory service")
    return ORJSONResponse(
        status_code=error.status_code,
        content={"detail": {**error.detail, "status": status}},
    )


def create_app(config: Config) -> TaskWeb:
    app_kwargs: AppConfig = {
        "default_response_class": ORJSONResponse,
        "openapi_url": "/openapi/openapi.json",
        "docs_url": "/openapi/v1/docs",
        "redoc_url": "/openapi/v1/redoc",
        "lifespan": lifespan,
        "redirect_slashes": False,
    }

    app = TaskWeb(**app_kwargs)
    app.config = config
    app.include_router(root_router)
    app.add_exception_handler(GraphError, graph_error_handler)
    return app
