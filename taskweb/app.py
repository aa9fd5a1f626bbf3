import aiohttp
from fastapi import FastAPI

from taskweb.config import Config
from taskweb.graph.auth import GraphTokenProvider
from taskweb.graph.client import B2CGraphClient


class TaskWeb(FastAPI):
    config: Config
    http: aiohttp.ClientSession
    graph_token_provider: GraphTokenProvider
    graph_client: B2CGraphClient
