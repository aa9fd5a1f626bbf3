import logging

from fastapi import APIRouter

from taskweb.auth.dependencies import CurrentPrincipal
from taskweb.claims.resources import ClaimRead, ClaimsView
from taskweb.claims.service import DepClaimsPresenter


logger = logging.getLogger(__name__)

claims_router = APIRouter()


@claims_router.get("", response_model=ClaimsView)
async def view_get_claims(
    principal: CurrentPrincipal,
    presenter: DepClaimsPresenter,
) -> ClaimsView:
    """
    Claims of the current principal, with the directory groups of the user
    appended as a USER_GROUPS claim.
    """
    claims = await presenter.render_claims(principal)
    logger.info(f"Rendering {len(claims)} claims")
    return ClaimsView(
        message="Your application description page.",
        claims=[ClaimRead(type=claim.type, value=claim.value) for claim in claims],
    )
