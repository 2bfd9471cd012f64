"""
FastAPI routers grouped by audience (auth, admin catalog, public store).

Each module exposes an APIRouter that create_app() includes.
"""
