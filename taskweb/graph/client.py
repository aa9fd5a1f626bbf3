import json
import logging
from typing import Any

from aiohttp import ClientSession

from taskweb.config import GraphConfig
from taskweb.graph.auth import GraphTokenProvider
from taskweb.graph.errors import GraphApiError
from taskweb.graph.models import Group, GroupListResponse, MemberGroupsResponse


logger = logging.getLogger(__name__)


class B2CGraphClient:
    def __init__(
        self,
        http: ClientSession,
        graph_config: GraphConfig,
        tenant: str,
        token_provider: GraphTokenProvider,
    ):
        self._http = http
        self._endpoint = graph_config.endpoint.rstrip("/")
        self._api_version = graph_config.api_version
        self._tenant = tenant
        self._token_provider = token_provider

    @property
    def tenant_url(self) -> str:
        return f"{self._endpoint}/{self._tenant}"

    async def get_all_groups(self) -> str:
        # first page only, the listing is not paginated
        return await self.send_graph_get_request("/groups")

    async def get_user_groups(self, user_id: str) -> list[Group]:
        """
        Resolve the groups a user belongs to.

        The full group listing is fetched first, then the user's membership ids.
        Each membership id is matched against the listing; unmatched ids are
        skipped and the result follows the membership order.
        """
        groups = GroupListResponse.model_validate_json(await self.get_all_groups())

        response = await self.send_graph_post_request(
            f"/users/{user_id}/getMemberGroups",
            json.dumps({"securityEnabledOnly": True}),
        )
        membership = MemberGroupsResponse.model_validate_json(response)

        groups_by_id: dict[str, Group] = {}
        for group in groups.groups:
            groups_by_id.setdefault(group.object_id, group)

        result: list[Group] = []
        seen: set[str] = set()
        for group_id in membership.group_ids:
            group = groups_by_id.get(group_id)
            if group is None:
                logger.debug(f"Group {group_id} is not present in the group listing")
                continue
            if group_id in seen:
                continue
            seen.add(group_id)
            result.append(group)
        return result

    async def send_graph_get_request(self, api: str, query: str | None = None) -> str:
        url = self._build_url(api)
        if query:
            url += f"&{query}"
        return await self._request(method="GET", url=url)

    async def send_graph_post_request(self, api: str, payload: str) -> str:
        return await self._request(method="POST", url=self._build_url(api), body=payload)

    async def send_graph_patch_request(self, api: str, payload: str) -> str:
        return await self._request(method="PATCH", url=self._build_url(api), body=payload)

    async def send_graph_delete_request(self, api: str) -> str:
        return await self._request(method="DELETE", url=self._build_url(api))

    def _build_url(self, api: str) -> str:
        return f"{self.tenant_url}{api}?{self._api_version}"

    async def _request(self, method: str, url: str, body: str | None = None) -> str:
        access_token = await self._token_provider.acquire_token()
        headers = {"Authorization": f"Bearer {access_token}"}
        kwargs: dict[str, Any] = {}
        if body is not None:
            headers["Content-Type"] = "application/json"
            kwargs["data"] = body.encode("utf-8")

        logger.debug(f"{method} {url}")
        async with self._http.request(
            method, url, headers=headers, **kwargs
        ) as response:
            raw_response = await response.text(errors="ignore")
            if not 200 <= response.status < 300:
                logger.error(
                    f"Graph API {method} {url} failed with {response.status}: "
                    f"{raw_response}"
                )
                raise GraphApiError(
                    status=response.status, body=_parse_error_body(raw_response)
                )
            logger.debug(f"{response.status}: {response.reason}")
            return raw_response


def _parse_error_body(raw_response: str) -> Any:
    try:
        return json.loads(raw_response)
    except ValueError:
        return raw_response
