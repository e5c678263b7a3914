"""
Profile store tests against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import date

import pytest

from profiles_api.core.errors import ConstraintViolationError, InvalidProfileError, NotFoundError
from profiles_api.domain.profiles import NewProfile, ShortProfile


def test_create_profile_assigns_id_and_zero_followers(make_profile):
    record = make_profile(1, "alice", description="hi", avatar_url="/a.png", birthday=date(1990, 5, 17))

    assert record.id is not None
    assert record.user_id == 1
    assert record.username == "alice"
    assert record.description == "hi"
    assert record.avatar_url == "/a.png"
    assert record.birthday == date(1990, 5, 17)
    assert record.followers_count == 0


def test_create_profile_rejects_duplicate_user_id(make_profile):
    make_profile(1, "alice")
    with pytest.raises(ConstraintViolationError):
        make_profile(1, "alice2")


def test_create_profile_rejects_duplicate_username(make_profile, profiles):
    make_profile(1, "alice")
    with pytest.raises(ConstraintViolationError):
        make_profile(2, "alice")
    with pytest.raises(NotFoundError):
        profiles.find_profile_by_id(2)


@pytest.mark.parametrize("username", ["", "ab", "has space", "x" * 65])
def test_create_profile_validates_username(profiles, username):
    with pytest.raises(InvalidProfileError):
        profiles.create_profile(NewProfile(user_id=1, username=username))


@pytest.mark.parametrize("user_id", [0, -1, 2**31, 2**70])
def test_create_profile_validates_user_id(profiles, user_id):
    with pytest.raises(InvalidProfileError):
        profiles.create_profile(NewProfile(user_id=user_id, username="alice"))


def test_point_lookups(make_profile, profiles):
    created = make_profile(7, "bob")

    assert profiles.find_profile_by_id(7) == created
    assert profiles.find_profile_by_username("bob") == created
    assert profiles.resolve_user_id("bob") == 7

    with pytest.raises(NotFoundError):
        profiles.find_profile_by_id(8)
    with pytest.raises(NotFoundError):
        profiles.find_profile_by_username("nobody")
    with pytest.raises(NotFoundError):
        profiles.resolve_user_id("nobody")


def test_find_by_pattern_is_ascii_case_insensitive_substring(make_profile, profiles):
    make_profile(1, "alice", avatar_url="/alice.png")
    make_profile(2, "Malik")
    make_profile(3, "bob")

    found = profiles.find_profiles_by_pattern("ALI")

    assert {p.username for p in found} == {"alice", "Malik"}
    assert ShortProfile(username="alice", avatar_url="/alice.png") in found


def test_find_by_pattern_treats_wildcards_literally(make_profile, profiles):
    make_profile(1, "al_x")
    make_profile(2, "alax")

    assert [p.username for p in profiles.find_profiles_by_pattern("l_")] == ["al_x"]
    assert profiles.find_profiles_by_pattern("%") == []


def test_find_by_pattern_without_match_returns_empty(make_profile, profiles):
    make_profile(1, "alice")
    assert profiles.find_profiles_by_pattern("zzz") == []


def test_delete_profile_is_strict(make_profile, profiles):
    record = make_profile(1, "alice")

    profiles.delete_profile_by_id(record.id)

    with pytest.raises(NotFoundError):
        profiles.find_profile_by_username("alice")
    with pytest.raises(NotFoundError):
        profiles.delete_profile_by_id(record.id)


def test_delete_profile_releases_counters_and_edges(
    make_profile, profiles, relationships, queries, followers_count, edge_count
):
    make_profile(1, "alice")
    bob = make_profile(2, "bob")
    make_profile(3, "carol")
    relationships.subscribe(2, "alice")
    relationships.subscribe(2, "carol")
    relationships.subscribe(1, "bob")
    relationships.subscribe(3, "alice")

    profiles.delete_profile_by_id(bob.id)

    assert followers_count("alice") == 1 == edge_count(1)
    assert followers_count("carol") == 0 == edge_count(3)
    assert queries.get_followees("alice") == []
    assert [p.username for p in queries.get_followers("alice")] == ["carol"]
