import logging
import typing as t
from contextlib import AsyncExitStack, asynccontextmanager

import aiohttp

from taskweb.app import TaskWeb
from taskweb.graph.auth import GraphTokenProvider
from taskweb.graph.client import B2CGraphClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_aiohttp_session(app: TaskWeb) -> t.AsyncIterator[None]:
    app.http = aiohttp.ClientSession()
    try:
        yield
    finally:
        await app.http.close()


@asynccontextmanager
async def lifespan(app: TaskWeb) -> t.AsyncIterator[None]:
    async with AsyncExitStack() as stack:
        await stack.enter_async_context(create_aiohttp_session(app))
        app.graph_token_provider = GraphTokenProvider(
            b2c_config=app.config.b2c,
            graph_config=app.config.graph,
        )
        app.graph_client = B2CGraphClient(
            http=app.http,
            graph_config=app.config.graph,
            tenant=app.config.b2c.tenant,
            token_provider=app.graph_token_provider,
        )
        logger.info(f"Directory client ready for tenant {app.config.b2c.tenant}")
        yield
