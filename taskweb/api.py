import logging

from fastapi import APIRouter
from starlette.responses import Response

from taskweb.claims.api import claims_router


logger = logging.getLogger(__name__)

root_router = APIRouter()

root_router.include_router(claims_router, prefix="/claims")


@root_router.get("/ping")
async def ping() -> Response:
    return Response("Pong", status_code=200)


@root_router.get("/")
async def view_index() -> dict[str, str]:
    return {"message": "Welcome to the task web app."}


@root_router.get("/error")
async def view_error(message: str = "") -> dict[str, str]:
    return {"message": message}
