# app/follows/schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FollowToggleOut(BaseModel):
    message: str


class FollowCountsOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    followers_count: int
    following_count: int
