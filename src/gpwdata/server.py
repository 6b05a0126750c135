"""aiohttp host exposing the service operations as JSON POST endpoints.

Routes are ``POST /<OperationName>``; every successful call answers
``{"result": ...}`` with HTTP 200. Only request problems (invalid JSON,
invalid inputs) produce HTTP 400.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gpwdata._constants import (
    OP_CREATE_LOCATION_CONTENT_VIEWS,
    OP_GET_LOCATION_CONTENT_VIEWS,
    OP_HAS_LOCATION_CONTENT_VIEWS,
    OP_IS_SERVICE_READY,
    OP_IS_STORAGE_READY,
    OPERATIONS,
)
from gpwdata.models import LocationData, ProductData
from gpwdata.service import GpwDataService

_logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("service", GpwDataService)

Handler = Callable[[web.Request], Awaitable[web.Response]]


class CreateLocationContentViewsRequest(BaseModel):
    """Body of ``POST /CreateLocationContentViews``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    location_datas: list[LocationData] = Field(default_factory=list, alias="locationDatas")
    product_datas: list[ProductData] = Field(default_factory=list, alias="productDatas")


def _result(value: Any) -> web.Response:
    return web.json_response({"result": value})


def _bad_request(message: str) -> web.Response:
    return web.json_response({"error": message}, status=400)


async def _read_json(request: web.Request) -> Any:
    text = (await request.read()).decode("utf-8")
    if not text.strip():
        return {}
    return json.loads(text)


async def _is_service_ready(request: web.Request) -> web.Response:
    return _result(request.app[SERVICE_KEY].is_service_ready())


async def _is_storage_ready(request: web.Request) -> web.Response:
    return _result(request.app[SERVICE_KEY].is_storage_ready())


async def _has_location_content_views(request: web.Request) -> web.Response:
    return _result(await request.app[SERVICE_KEY].has_location_content_views())


async def _get_location_content_views(request: web.Request) -> web.Response:
    collection = await request.app[SERVICE_KEY].get_location_content_views()
    return _result(collection.to_document())


async def _create_location_content_views(request: web.Request) -> web.Response:
    try:
        body = await _read_json(request)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return _bad_request(f"Invalid JSON body: {exc}")
    if not isinstance(body, dict):
        return _bad_request("Request body must be a JSON object")
    try:
        parsed = CreateLocationContentViewsRequest.model_validate(body)
    except ValidationError as exc:
        return _bad_request(f"Invalid inputs: {exc.error_count()} error(s): {exc.errors()[0]['msg']}")

    success = await request.app[SERVICE_KEY].create_location_content_views(
        parsed.location_datas,
        parsed.product_datas,
    )
    return _result(success)


async def _health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "operations": list(OPERATIONS)})


_ROUTES: dict[str, Handler] = {
    OP_IS_SERVICE_READY: _is_service_ready,
    OP_IS_STORAGE_READY: _is_storage_ready,
    OP_HAS_LOCATION_CONTENT_VIEWS: _has_location_content_views,
    OP_GET_LOCATION_CONTENT_VIEWS: _get_location_content_views,
    OP_CREATE_LOCATION_CONTENT_VIEWS: _create_location_content_views,
}


def create_app(service: GpwDataService) -> web.Application:
    """Build the aiohttp application serving *service*."""
    app = web.Application()
    app[SERVICE_KEY] = service
    for operation, handler in _ROUTES.items():
        app.router.add_post(f"/{operation}", handler)
    app.router.add_get("/health", _health)
    _logger.debug("Registered operations: %s", ", ".join(_ROUTES))
    return app
