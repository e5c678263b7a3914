"""
High-level use cases for the profiles API.

Each service orchestrates repositories to implement the business rules
(follow, unfollow, profile views). Routers call these services instead of
touching sessions directly.
"""
