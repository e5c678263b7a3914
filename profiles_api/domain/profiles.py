"""Plain records passed between the store, the services and the routers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

# user ids are stored in a 32-bit INTEGER column
MAX_USER_ID = 2**31 - 1


@dataclass(frozen=True)
class NewProfile:
    user_id: int
    username: str
    description: str = ""
    avatar_url: str = ""
    birthday: Optional[date] = None


@dataclass(frozen=True)
class ProfileRecord:
    id: int
    user_id: int
    username: str
    description: str
    avatar_url: str
    birthday: Optional[date]
    followers_count: int


@dataclass(frozen=True)
class ShortProfile:
    username: str
    avatar_url: str


@dataclass(frozen=True)
class ProfileView:
    """A profile as seen by a particular viewer."""

    profile: ProfileRecord
    is_own_profile: bool
    is_followed: bool
