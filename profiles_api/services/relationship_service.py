"""Follow/unfollow use cases.

Each operation resolves the followee username first and then runs the edge
change and the ``followers_count`` change in one transaction. A failure at any
step rolls the transaction back before the error reaches the caller, so an
edge without its counter bump (or the reverse) is never committed.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from profiles_api.core.errors import ConstraintViolationError, DuplicateRelationshipError, NotFoundError
from profiles_api.db.session import Database
from profiles_api.repositories.profile_repository import ProfileRepository
from profiles_api.repositories.subscription_repository import EdgeInsert, SubscriptionRepository

logger = logging.getLogger(__name__)


class RelationshipService:
    """Maintains subscription edges and the denormalized follower counter."""

    def __init__(
        self,
        database: Database,
        profiles: Optional[ProfileRepository] = None,
        subscriptions: Optional[SubscriptionRepository] = None,
    ) -> None:
        self.database = database
        self.subscriptions = subscriptions or SubscriptionRepository()
        self.profiles = profiles or ProfileRepository(database, self.subscriptions)

    def subscribe(self, follower_id: int, followee_username: str) -> None:
        followee_id = self.profiles.resolve_user_id(followee_username)
        # raises NotFoundError for callers without a profile of their own
        self.profiles.find_profile_by_id(follower_id)

        try:
            with self.database.transaction() as session:
                outcome = self.subscriptions.insert_edge(session, follower_id, followee_id)
                if outcome is EdgeInsert.DUPLICATE:
                    logger.info("User %s already follows %s", follower_id, followee_username)
                    raise DuplicateRelationshipError(f"Already following '{followee_username}'")
                if not self.subscriptions.adjust_followers_count(session, followee_id, 1):
                    raise NotFoundError(f"Profile '{followee_username}' not found")
        except IntegrityError as exc:
            # profile removed between resolution and insert (foreign key)
            raise ConstraintViolationError("Subscription rejected by the database") from exc

        logger.info("User %s subscribed to %s", follower_id, followee_username)

    def unsubscribe(self, follower_id: int, followee_username: str) -> None:
        followee_id = self.profiles.resolve_user_id(followee_username)

        try:
            with self.database.transaction() as session:
                if not self.subscriptions.delete_edge(session, follower_id, followee_id):
                    logger.info("User %s does not follow %s", follower_id, followee_username)
                    raise NotFoundError(f"Not following '{followee_username}'")
                if not self.subscriptions.adjust_followers_count(session, followee_id, -1):
                    raise NotFoundError(f"Profile '{followee_username}' not found")
        except IntegrityError as exc:
            raise ConstraintViolationError("Unsubscription rejected by the database") from exc

        logger.info("User %s unsubscribed from %s", follower_id, followee_username)
