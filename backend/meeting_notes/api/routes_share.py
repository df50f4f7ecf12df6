"""Share-link endpoints.

``create_router`` is mounted under ``/api``; ``page_router`` serves the
public ``/share/{share_id}`` pages outside the API prefix.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse

from ..config import settings
from ..exceptions import NotFoundError
from ..models.share import CreateShareRequest, CreateShareResponse
from ..services.share_store import ShareStore
from ..utils.html import NOT_FOUND_HTML

create_router = APIRouter()
page_router = APIRouter()
logger = logging.getLogger(__name__)


def get_share_store(request: Request) -> ShareStore:
    return request.app.state.share_store


@create_router.post("/create-share", response_model=CreateShareResponse)
async def create_share(
    body: CreateShareRequest,
    store: ShareStore = Depends(get_share_store),
) -> CreateShareResponse:
    share_id = store.create(body.content)
    return CreateShareResponse(id=share_id, url=settings.share_url(share_id))


@page_router.get("/share/{share_id}", response_class=HTMLResponse)
async def view_share(share_id: str, store: ShareStore = Depends(get_share_store)) -> HTMLResponse:
    try:
        html = store.render(share_id)
    except NotFoundError:
        logger.info("Share %s not found", share_id)
        return HTMLResponse(NOT_FOUND_HTML, status_code=status.HTTP_404_NOT_FOUND)
    return HTMLResponse(html)
