from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from yarl import URL

APP_DIR = Path(__file__).parent
ROOT_DIR = APP_DIR.parent


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class B2CConfig:
    client_id: str
    client_secret: str
    tenant: str
    authority_base: str = "https://login.microsoftonline.com/"

    @property
    def authority(self) -> str:
        return f"{self.authority_base.rstrip('/')}/{self.tenant}"


@dataclass(frozen=True)
class GraphConfig:
    endpoint: str = "https://graph.windows.net/"
    resource_id: str = "https://graph.windows.net/"
    api_version: str = "api-version=1.6"

    @property
    def scopes(self) -> list[str]:
        return [f"{self.resource_id.rstrip('/')}/.default"]


@dataclass(frozen=True)
class AuthConfig:
    jwks_url: URL
    issuer: str
    audience: str


@dataclass(frozen=True)
class Config:
    b2c: B2CConfig
    auth: AuthConfig
    graph: GraphConfig = GraphConfig()
    server: ServerConfig = ServerConfig()


class EnvironConfigFactory:
    def __init__(self, environ: dict[str, str] | None = None) -> None:
        if environ is None:
            # load a .env file for local development
            load_dotenv(dotenv_path=ROOT_DIR / ".env")
            self._environ: dict[str, str] = dict(os.environ)
        else:
            self._environ = environ

    def create(self) -> Config:
        return Config(
            server=self.create_server(),
            b2c=self.create_b2c(),
            graph=self.create_graph(),
            auth=self.create_auth(),
        )

    def create_server(self) -> ServerConfig:
        return ServerConfig(
            host=self._environ.get("HOST", ServerConfig.host),
            port=int(self._environ.get("PORT", ServerConfig.port)),
        )

    def create_b2c(self) -> B2CConfig:
        return B2CConfig(
            client_id=self._environ["B2C_CLIENT_ID"],
            client_secret=self._environ["B2C_CLIENT_SECRET"],
            tenant=self._environ["B2C_TENANT"],
            authority_base=self._environ.get(
                "B2C_AUTHORITY_BASE", B2CConfig.authority_base
            ),
        )

    def create_graph(self) -> GraphConfig:
        return GraphConfig(
            endpoint=self._environ.get("GRAPH_ENDPOINT", GraphConfig.endpoint),
            resource_id=self._environ.get(
                "GRAPH_RESOURCE_ID", GraphConfig.resource_id
            ),
            api_version=self._environ.get(
                "GRAPH_API_VERSION", GraphConfig.api_version
            ),
        )

    def create_auth(self) -> AuthConfig:
        return AuthConfig(
            jwks_url=URL(self._environ["AUTH_JWKS_URL"]),
            issuer=self._environ["AUTH_ISSUER"],
            audience=self._environ["AUTH_AUDIENCE"],
        )
