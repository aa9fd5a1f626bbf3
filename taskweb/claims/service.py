import logging
from typing import Annotated

from fastapi import Depends
from starlette.requests import Request

from taskweb.auth.models import OBJECT_ID_CLAIM_TYPE, Claim, Principal
from taskweb.graph.client import B2CGraphClient


logger = logging.getLogger(__name__)

USER_GROUPS_CLAIM_TYPE = "USER_GROUPS"


class ClaimsPresenter:
    def __init__(self, graph_client: B2CGraphClient) -> None:
        self._graph_client = graph_client

    async def render_claims(self, principal: Principal) -> list[Claim]:
        """
        Copies the principal's claims and, when the principal carries an
        object identifier, appends a USER_GROUPS claim holding the
        space-separated display names of the user's groups.
        """
        user_object_id = principal.find_first(OBJECT_ID_CLAIM_TYPE)
        claims = [Claim(type=claim.type, value=claim.value) for claim in principal]

        if user_object_id is None:
            logger.info("No object identifier claim found, skipping group lookup")
            return claims

        user_groups = await self._graph_client.get_user_groups(user_object_id)
        aggregated_groups = " ".join(group.display_name for group in user_groups)
        claims.append(Claim(type=USER_GROUPS_CLAIM_TYPE, value=aggregated_groups))
        return claims


def dep_claims_presenter(request: Request) -> ClaimsPresenter:
    return ClaimsPresenter(graph_client=request.app.graph_client)


DepClaimsPresenter = Annotated[ClaimsPresenter, Depends(dep_claims_presenter)]
