import dataclasses
from collections.abc import Iterator

OBJECT_ID_CLAIM_TYPE = "http://schemas.microsoft.com/identity/claims/objectidentifier"


@dataclasses.dataclass(frozen=True)
class Claim:
    type: str
    value: str


@dataclasses.dataclass(frozen=True)
class Principal:
    claims: tuple[Claim, ...] = ()

    def __iter__(self) -> Iterator[Claim]:
        return iter(self.claims)

    def find_first(self, claim_type: str) -> str | None:
        for claim in self.claims:
            if claim.type == claim_type:
                return claim.value
        return None
