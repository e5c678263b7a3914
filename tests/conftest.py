from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy import func, select

# Make the profiles_api package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from profiles_api.db.models import Subscription  # noqa: E402
from profiles_api.db.session import Database  # noqa: E402
from profiles_api.domain.profiles import NewProfile  # noqa: E402
from profiles_api.repositories.profile_repository import ProfileRepository  # noqa: E402
from profiles_api.repositories.subscription_repository import SubscriptionRepository  # noqa: E402
from profiles_api.services.query_service import QueryService  # noqa: E402
from profiles_api.services.relationship_service import RelationshipService  # noqa: E402


@pytest.fixture()
def database(tmp_path):
    """Temporary SQLite file database with the schema created."""
    db_file = tmp_path / "test.db"
    db = Database(f"sqlite:///{db_file}")
    db.create_all()

    yield db

    db.dispose()


@pytest.fixture()
def subscriptions():
    return SubscriptionRepository()


@pytest.fixture()
def profiles(database, subscriptions):
    return ProfileRepository(database, subscriptions)


@pytest.fixture()
def relationships(database, profiles, subscriptions):
    return RelationshipService(database, profiles, subscriptions)


@pytest.fixture()
def queries(database, profiles, subscriptions):
    return QueryService(database, profiles, subscriptions)


@pytest.fixture()
def make_profile(profiles):
    def _make(user_id: int, username: str, **fields):
        return profiles.create_profile(NewProfile(user_id=user_id, username=username, **fields))

    return _make


@pytest.fixture()
def edge_count(database):
    """Number of edges pointing at ``user_id``, read straight from the table."""

    def _count(user_id: int) -> int:
        stmt = select(func.count()).select_from(Subscription).where(Subscription.followee_id == user_id)
        with database.session() as session:
            return session.execute(stmt).scalar_one()

    return _count


@pytest.fixture()
def followers_count(profiles):
    def _count(username: str) -> int:
        return profiles.find_profile_by_username(username).followers_count

    return _count
