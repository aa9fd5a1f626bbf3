import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import msal

from taskweb.config import B2CConfig, GraphConfig
from taskweb.graph.errors import GraphAuthError


logger = logging.getLogger(__name__)


class GraphTokenProvider:
    """Acquires app-only directory tokens with the client-credentials flow."""

    def __init__(self, b2c_config: B2CConfig, graph_config: GraphConfig) -> None:
        self._scopes = graph_config.scopes
        self._app = msal.ConfidentialClientApplication(
            client_id=b2c_config.client_id,
            client_credential=b2c_config.client_secret,
            authority=b2c_config.authority,
        )

    async def acquire_token(self) -> str:
        # msal is blocking; its in-memory cache serves repeated calls
        result = await asyncio.to_thread(
            self._app.acquire_token_for_client, scopes=self._scopes
        )
        self._raise_if_error(result)
        return str(result["access_token"])

    @staticmethod
    def _raise_if_error(result: Mapping[str, Any] | None) -> None:
        if not result:
            raise GraphAuthError("no_result", "msal returned an empty result")
        if "error" in result:
            logger.error(
                f"Unable to acquire directory token: {result.get('error')}"
            )
            raise GraphAuthError(
                result["error"], result.get("error_description", "unknown error")
            )
        if "access_token" not in result:
            raise GraphAuthError("no_access_token", "access_token missing in result")
