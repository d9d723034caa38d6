"""
FastAPI routers grouped by domain (auth, members).

Each module exposes an APIRouter included by ``gym_api.app.create_app``.
"""
