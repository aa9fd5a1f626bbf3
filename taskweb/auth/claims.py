import json
from collections.abc import Iterator, Mapping
from typing import Any

from taskweb.auth.models import OBJECT_ID_CLAIM_TYPE, Claim

_SOAP_CLAIMS = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims"
_IDENTITY_CLAIMS = "http://schemas.microsoft.com/identity/claims"

# short JWT claim names mapped to the well-known claim type URIs
INBOUND_CLAIM_TYPE_MAP: dict[str, str] = {
    "oid": OBJECT_ID_CLAIM_TYPE,
    "tid": f"{_IDENTITY_CLAIMS}/tenantid",
    "scp": f"{_IDENTITY_CLAIMS}/scope",
    "sub": f"{_SOAP_CLAIMS}/nameidentifier",
    "name": f"{_SOAP_CLAIMS}/name",
    "given_name": f"{_SOAP_CLAIMS}/givenname",
    "family_name": f"{_SOAP_CLAIMS}/surname",
    "email": f"{_SOAP_CLAIMS}/emailaddress",
    "emails": f"{_SOAP_CLAIMS}/emailaddress",
    "idp": "http://schemas.microsoft.com/identity/claims/identityprovider",
}


def claims_from_token(decoded_token: Mapping[str, Any]) -> tuple[Claim, ...]:
    """
    Flattens decoded token claims into type/value pairs, in token order.
    List-valued claims yield one pair per item.
    """
    return tuple(
        Claim(type=INBOUND_CLAIM_TYPE_MAP.get(name, name), value=value)
        for name, raw in decoded_token.items()
        for value in _claim_values(raw)
    )


def _claim_values(raw: Any) -> Iterator[str]:
    if raw is None:
        return
    if isinstance(raw, list):
        for item in raw:
            yield from _claim_values(item)
    elif isinstance(raw, str):
        yield raw
    elif isinstance(raw, bool):
        yield "true" if raw else "false"
    elif isinstance(raw, dict):
        yield json.dumps(raw, separators=(",", ":"))
    else:
        yield str(raw)
