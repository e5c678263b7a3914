"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter that the app factory (app.py) includes.
"""
