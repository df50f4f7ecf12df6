# Router aggregator – import each route module here and expose ``api_router``
# (mounted under ``/api``) and ``page_router`` (public HTML pages) for
# convenient inclusion in the FastAPI app.

from fastapi import APIRouter

from . import routes_email, routes_share, routes_summarize
from .routes_share import page_router

api_router = APIRouter()
api_router.include_router(routes_summarize.router, tags=["summarize"])
api_router.include_router(routes_share.create_router, tags=["share"])
api_router.include_router(routes_email.router, tags=["email"])

__all__ = ["api_router", "page_router"]
