import logging
from typing import Annotated, Any

import aiohttp
import backoff
import jwt
from aiohttp import ClientSession
from asyncache import cached
from cachetools import LRUCache
from fastapi import Depends
from starlette.requests import Request

from taskweb.auth.claims import claims_from_token
from taskweb.auth.models import Principal
from taskweb.config import AuthConfig
from taskweb.errors import Unauthorized

logger = logging.getLogger(__name__)


async def auth_required(
    request: Request,
) -> Principal:
    """
    JWT authentication entry-point
    """
    decoded_token = await _token_from_request(request)
    return Principal(claims=claims_from_token(decoded_token))


async def _token_from_request(request: Request) -> dict[str, Any]:
    try:
        scheme, access_token = request.headers["Authorization"].split(" ")
    except Exception:
        raise Unauthorized()
    if scheme.lower() != "bearer":
        raise Unauthorized()
    return await token_from_string(
        http=request.app.http,
        auth_config=request.app.config.auth,
        access_token=access_token,
    )


async def token_from_string(
    http: ClientSession, auth_config: AuthConfig, access_token: str
) -> dict[str, Any]:
    """
    Validates the token signature against the issuer's JWKS and decodes it
    """
    try:
        header = jwt.get_unverified_header(access_token)
    except jwt.PyJWTError:
        logger.exception("can't get token header")
        raise Unauthorized()

    try:
        kid, alg = header["kid"], header["alg"]
        alg_obj = jwt.get_algorithm_by_name(alg)
    except (KeyError, NotImplementedError):
        logger.error("token header has no usable kid/alg")
        raise Unauthorized()

    try:
        jwks = await _get_jwks(http=http, auth_config=auth_config, kid=kid)
    except Exception:
        logger.exception("can't obtain JWKS")
        raise Unauthorized()

    for key in jwks["keys"]:
        if key.get("kid") == kid:
            secret_key = alg_obj.from_jwk(key)
            break
    else:
        logger.error(
            "unable to match a KID between a token and a JWKS",
            extra={"kid": kid},
        )
        raise Unauthorized()

    try:
        token: dict[str, Any] = jwt.decode(
            access_token,
            secret_key,
            algorithms=[alg],
            issuer=auth_config.issuer,
            audience=auth_config.audience,
        )
        return token
    except jwt.ExpiredSignatureError:
        raise Unauthorized()
    except jwt.PyJWTError:
        logger.exception("unable to decode a token")
        raise Unauthorized()


def cache_key_getter(*args: Any, **kwargs: str) -> str:
    """
    JWKS cache key getter which considers only the `kid`
    """
    return kwargs["kid"]


@backoff.on_exception(wait_gen=backoff.expo, exception=aiohttp.ClientError, max_tries=5)
@cached(cache=LRUCache(maxsize=32), key=cache_key_getter)  # type: ignore[misc]
async def _get_jwks(
    *,
    http: ClientSession,
    auth_config: AuthConfig,
    kid: str,
) -> Any:
    """
    Returns JWKS.
    Signing keys rotate rarely, so the response is cached by a token `kid`.
    """
    async with http.get(auth_config.jwks_url) as response:
        response.raise_for_status()
        return await response.json()


CurrentPrincipal = Annotated[Principal, Depends(auth_required)]
