"""
Persistence adapters.

Services depend on these repositories rather than building SQL themselves.
"""
