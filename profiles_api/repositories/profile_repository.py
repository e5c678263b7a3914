"""High-level data access helpers for profiles backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from profiles_api.core.errors import ConstraintViolationError, InvalidProfileError, NotFoundError
from profiles_api.db.models import Profile
from profiles_api.db.session import Database
from profiles_api.domain.profiles import MAX_USER_ID, NewProfile, ProfileRecord, ShortProfile
from profiles_api.domain.usernames import ascii_lower, is_valid_username
from profiles_api.repositories.subscription_repository import SubscriptionRepository

logger = logging.getLogger(__name__)


def _to_record(entity: Profile) -> ProfileRecord:
    return ProfileRecord(
        id=entity.id,
        user_id=entity.user_id,
        username=entity.username,
        description=entity.description or "",
        avatar_url=entity.avatar_url or "",
        birthday=entity.birthday,
        followers_count=int(entity.followers_count or 0),
    )


class ProfileRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def __init__(self, database: Database, subscriptions: Optional[SubscriptionRepository] = None) -> None:
        self.database = database
        self.subscriptions = subscriptions or SubscriptionRepository()

    # -------------------------- writes --------------------------
    def create_profile(self, profile: NewProfile) -> ProfileRecord:
        username = (profile.username or "").strip()
        if not is_valid_username(username):
            raise InvalidProfileError("Username must be 3-64 characters of [A-Za-z0-9_.-]")
        if not 1 <= profile.user_id <= MAX_USER_ID:
            raise InvalidProfileError(f"User id must be between 1 and {MAX_USER_ID}")
        entity = Profile(
            user_id=profile.user_id,
            username=username,
            description=profile.description or "",
            avatar_url=profile.avatar_url or "",
            birthday=profile.birthday,
            followers_count=0,
        )
        try:
            with self.database.transaction() as session:
                session.add(entity)
                session.flush()
                record = _to_record(entity)
        except IntegrityError as exc:
            raise ConstraintViolationError(
                f"Profile for user {profile.user_id} or username '{username}' already exists"
            ) from exc
        logger.info("Created profile %s for user %s", record.username, record.user_id)
        return record

    def delete_profile_by_id(self, profile_id: int) -> None:
        """Delete a profile by surrogate id; NotFoundError when it does not exist."""
        with self.database.transaction() as session:
            entity = session.get(Profile, profile_id)
            if entity is None:
                raise NotFoundError(f"Profile {profile_id} not found")
            user_id = entity.user_id
            self.subscriptions.detach_user(session, user_id)
            session.delete(entity)
        logger.info("Deleted profile %s (user %s)", profile_id, user_id)

    # -------------------------- reads --------------------------
    def find_profile_by_id(self, user_id: int) -> ProfileRecord:
        with self.database.session() as session:
            entity = session.execute(select(Profile).where(Profile.user_id == user_id)).scalar_one_or_none()
            if entity is None:
                raise NotFoundError(f"Profile for user {user_id} not found")
            return _to_record(entity)

    def find_profile_by_username(self, username: str) -> ProfileRecord:
        with self.database.session() as session:
            entity = session.execute(select(Profile).where(Profile.username == username)).scalar_one_or_none()
            if entity is None:
                raise NotFoundError(f"Profile '{username}' not found")
            return _to_record(entity)

    def resolve_user_id(self, username: str) -> int:
        with self.database.session() as session:
            user_id = session.execute(
                select(Profile.user_id).where(Profile.username == username)
            ).scalar_one_or_none()
        if user_id is None:
            raise NotFoundError(f"Profile '{username}' not found")
        return int(user_id)

    def find_profiles_by_pattern(self, pattern: str) -> list[ShortProfile]:
        """Profiles whose username contains ``pattern``, ASCII case-insensitive."""
        needle = ascii_lower(pattern or "")
        stmt = (
            select(Profile.username, Profile.avatar_url)
            .where(func.lower(Profile.username).contains(needle, autoescape=True))
            .order_by(Profile.username)
        )
        with self.database.session() as session:
            return [ShortProfile(username=row.username, avatar_url=row.avatar_url or "") for row in session.execute(stmt)]
