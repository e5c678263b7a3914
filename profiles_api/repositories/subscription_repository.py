"""Subscription edge and follower counter statements.

Every method runs on a session owned by the caller so that the edge change
and the counter change land in the same transaction.
"""
from __future__ import annotations

import enum

from sqlalchemy import delete, exists, insert, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from profiles_api.db.models import Profile, Subscription
from profiles_api.domain.profiles import ShortProfile

_edges = Subscription.__table__
_profiles = Profile.__table__

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class EdgeInsert(enum.Enum):
    INSERTED = "inserted"
    DUPLICATE = "duplicate"


class SubscriptionRepository:
    """Statements over the ``subscriptions`` table and ``followers_count``."""

    def insert_edge(self, session: Session, follower_id: int, followee_id: int) -> EdgeInsert:
        values = {"follower_id": follower_id, "followee_id": followee_id}
        dialect = session.get_bind().dialect.name
        upsert = _UPSERT_INSERTS.get(dialect)
        if upsert is not None:
            stmt = upsert(_edges).values(**values).on_conflict_do_nothing(
                index_elements=["follower_id", "followee_id"]
            )
            result = session.execute(stmt)
            return EdgeInsert.INSERTED if result.rowcount == 1 else EdgeInsert.DUPLICATE

        # other backends: unique constraint is the only one a valid pair can hit
        try:
            with session.begin_nested():
                session.execute(insert(_edges).values(**values))
        except IntegrityError:
            return EdgeInsert.DUPLICATE
        return EdgeInsert.INSERTED

    def delete_edge(self, session: Session, follower_id: int, followee_id: int) -> bool:
        stmt = delete(_edges).where(
            _edges.c.follower_id == follower_id,
            _edges.c.followee_id == followee_id,
        )
        return session.execute(stmt).rowcount == 1

    def adjust_followers_count(self, session: Session, user_id: int, delta: int) -> bool:
        """Add ``delta`` to the counter in SQL; False when no profile matched."""
        stmt = (
            update(_profiles)
            .where(_profiles.c.user_id == user_id)
            .values(followers_count=_profiles.c.followers_count + delta)
        )
        return session.execute(stmt).rowcount == 1

    def edge_exists(self, session: Session, follower_id: int, followee_id: int) -> bool:
        stmt = select(
            exists().where(
                _edges.c.follower_id == follower_id,
                _edges.c.followee_id == followee_id,
            )
        )
        return bool(session.execute(stmt).scalar())

    def list_followers(self, session: Session, user_id: int) -> list[ShortProfile]:
        stmt = (
            select(Profile.username, Profile.avatar_url)
            .join(Subscription, Subscription.follower_id == Profile.user_id)
            .where(Subscription.followee_id == user_id)
            .order_by(Subscription.id)
        )
        return [ShortProfile(username=row.username, avatar_url=row.avatar_url or "") for row in session.execute(stmt)]

    def list_followees(self, session: Session, user_id: int) -> list[ShortProfile]:
        stmt = (
            select(Profile.username, Profile.avatar_url)
            .join(Subscription, Subscription.followee_id == Profile.user_id)
            .where(Subscription.follower_id == user_id)
            .order_by(Subscription.id)
        )
        return [ShortProfile(username=row.username, avatar_url=row.avatar_url or "") for row in session.execute(stmt)]

    def detach_user(self, session: Session, user_id: int) -> None:
        """Drop every edge touching ``user_id`` and release the counters it held."""
        followees = select(_edges.c.followee_id).where(
            _edges.c.follower_id == user_id,
            _edges.c.followee_id != user_id,
        )
        session.execute(
            update(_profiles)
            .where(_profiles.c.user_id.in_(followees))
            .values(followers_count=_profiles.c.followers_count - 1)
        )
        session.execute(
            delete(_edges).where(
                or_(_edges.c.follower_id == user_id, _edges.c.followee_id == user_id)
            )
        )
