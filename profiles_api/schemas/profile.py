"""
Pydantic models for profile payloads.

JSON keys are camelCase (``userId``, ``avatarURL``...) as the web client
expects; Python attribute names stay snake_case and either form is accepted
on input.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profiles_api.domain.profiles import MAX_USER_ID, NewProfile, ProfileView, ShortProfile


class ProfileCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", ge=1, le=MAX_USER_ID, examples=[1])
    user_name: str = Field(..., alias="userName", examples=["alice"])
    description: str = ""
    avatar_url: str = Field("", alias="avatarURL")
    birthday: Optional[date] = Field(None, examples=["1990-05-17"])

    @field_validator("birthday", mode="before")
    @classmethod
    def _blank_birthday(cls, value):
        # the web client sends "" when the field is left empty
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_domain(self) -> NewProfile:
        return NewProfile(
            user_id=self.user_id,
            username=self.user_name,
            description=self.description,
            avatar_url=self.avatar_url,
            birthday=self.birthday,
        )


class ProfileRead(BaseModel):
    """Schema for reading a profile as seen by the caller."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: int = Field(..., alias="userId")
    user_name: str = Field(..., alias="userName")
    description: str = ""
    avatar_url: str = Field("", alias="avatarURL")
    birthday: Optional[date] = None
    followers_count: int = Field(0, alias="followersCount")
    is_own_profile: bool = Field(False, alias="isOwnProfile")
    is_followed: bool = Field(False, alias="isFollowed")

    @classmethod
    def from_view(cls, view: ProfileView) -> "ProfileRead":
        profile = view.profile
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            user_name=profile.username,
            description=profile.description,
            avatar_url=profile.avatar_url,
            birthday=profile.birthday,
            followers_count=profile.followers_count,
            is_own_profile=view.is_own_profile,
            is_followed=view.is_followed,
        )


class ShortProfileRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(..., alias="userName")
    avatar_url: str = Field("", alias="avatarURL")

    @classmethod
    def from_domain(cls, item: ShortProfile) -> "ShortProfileRead":
        return cls(user_name=item.username, avatar_url=item.avatar_url)
