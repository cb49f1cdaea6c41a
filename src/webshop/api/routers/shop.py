"""
webshop.api.routers.shop

Catch-all route handing every remaining request to the shop dispatcher.

FastAPI's per-route validation is not used here: method, path and
header checks happen in `webshop.routing` in a fixed order.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from webshop.api.deps import dispatcher_dep
from webshop.routing.dispatcher import Dispatcher

SHOP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()


@router.api_route("/{path:path}", methods=SHOP_METHODS, include_in_schema=False)
async def shop(request: Request, dispatcher: Dispatcher = Depends(dispatcher_dep)) -> Response:
    return await dispatcher.dispatch(request)
