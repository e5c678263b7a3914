"""Read-side use cases composing the profile store and the edge set."""

from __future__ import annotations

from typing import Optional

from profiles_api.db.session import Database
from profiles_api.domain.profiles import ProfileView, ShortProfile
from profiles_api.repositories.profile_repository import ProfileRepository
from profiles_api.repositories.subscription_repository import SubscriptionRepository


class QueryService:
    """Answers "who follows whom" and builds profile views for a viewer."""

    def __init__(
        self,
        database: Database,
        profiles: Optional[ProfileRepository] = None,
        subscriptions: Optional[SubscriptionRepository] = None,
    ) -> None:
        self.database = database
        self.subscriptions = subscriptions or SubscriptionRepository()
        self.profiles = profiles or ProfileRepository(database, self.subscriptions)

    def is_follow(self, follower_id: int, followee_id: int) -> bool:
        with self.database.session() as session:
            return self.subscriptions.edge_exists(session, follower_id, followee_id)

    def get_followers(self, username: str) -> list[ShortProfile]:
        user_id = self.profiles.resolve_user_id(username)
        with self.database.session() as session:
            return self.subscriptions.list_followers(session, user_id)

    def get_followees(self, username: str) -> list[ShortProfile]:
        user_id = self.profiles.resolve_user_id(username)
        with self.database.session() as session:
            return self.subscriptions.list_followees(session, user_id)

    def get_profile(self, viewer_id: int, username: str) -> ProfileView:
        profile = self.profiles.find_profile_by_username(username)
        if profile.user_id == viewer_id:
            return ProfileView(profile=profile, is_own_profile=True, is_followed=True)
        return ProfileView(
            profile=profile,
            is_own_profile=False,
            is_followed=self.is_follow(viewer_id, profile.user_id),
        )

    def get_own_profile(self, viewer_id: int) -> ProfileView:
        profile = self.profiles.find_profile_by_id(viewer_id)
        return ProfileView(profile=profile, is_own_profile=True, is_followed=True)

    def search_profiles(self, pattern: str) -> list[ShortProfile]:
        return self.profiles.find_profiles_by_pattern(pattern)
