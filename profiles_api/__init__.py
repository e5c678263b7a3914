"""Profiles API: user profiles and follower/followee subscriptions."""

__version__ = "0.1.0"
