from pydantic import BaseModel, Field


class ClaimRead(BaseModel):
    type: str = Field(..., description="Claim type")
    value: str = Field(..., description="Claim value")


class ClaimsView(BaseModel):
    """Claims of the authenticated caller, augmented with group membership"""

    message: str
    claims: list[ClaimRead]
