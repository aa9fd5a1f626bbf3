from pydantic import BaseModel, ConfigDict, Field


class Group(BaseModel):
    """A directory group as returned by the ``/groups`` listing"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    object_id: str = Field(..., alias="objectId", description="Group identifier")
    display_name: str = Field(..., alias="displayName", description="Group name")


class GroupListResponse(BaseModel):
    groups: list[Group] = Field(default_factory=list, alias="value")


class MemberGroupsResponse(BaseModel):
    group_ids: list[str] = Field(default_factory=list, alias="value")
