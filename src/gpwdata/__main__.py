"""Command-line entry point.

Subcommands:

* ``serve``  - host the operations over HTTP
* ``status`` - print readiness and whether data exists
* ``dump``   - print the stored content views as JSON
* ``seed``   - create content views from a JSON file holding
  ``locationDatas`` and ``productDatas``
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from aiohttp import web
from pydantic import ValidationError

from gpwdata.config import GpwDataConfig
from gpwdata.exceptions import GpwConfigError
from gpwdata.server import CreateLocationContentViewsRequest, create_app
from gpwdata.service import GpwDataService
from gpwdata.storage import build_storage

_logger = logging.getLogger("gpwdata")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gpwdata", description="GPW location content view data service")
    parser.add_argument("--storage-path", type=Path, help="JSON storage root (default: GPW_STORAGE_PATH or memory)")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Serve the operations over HTTP")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Bind port")
    serve.add_argument("--memory", action="store_true", help="Use in-memory storage even if a path is configured")

    sub.add_parser("status", help="Print readiness and data presence")
    sub.add_parser("dump", help="Print stored content views as JSON")

    seed = sub.add_parser("seed", help="Create content views from a JSON input file")
    seed.add_argument("input", type=Path, help="JSON file with locationDatas and productDatas")
    return parser


def _config_from_args(args: argparse.Namespace) -> GpwDataConfig:
    overrides: dict[str, Any] = {}
    if args.storage_path is not None:
        overrides["storage_path"] = args.storage_path
    if getattr(args, "memory", False):
        overrides["storage_path"] = None
    if getattr(args, "host", None) is not None:
        overrides["host"] = args.host
    if getattr(args, "port", None) is not None:
        overrides["port"] = args.port
    return GpwDataConfig.from_env(**overrides)


def _service(config: GpwDataConfig) -> GpwDataService:
    return GpwDataService(build_storage(config), config=config)


async def _status(service: GpwDataService) -> int:
    report = {
        "service_ready": service.is_service_ready(),
        "storage_ready": service.is_storage_ready(),
        "has_data": await service.has_location_content_views(),
    }
    print(json.dumps(report, indent=2))
    return 0


async def _dump(service: GpwDataService) -> int:
    collection = await service.get_location_content_views()
    print(json.dumps(collection.to_document(), indent=2))
    return 0


async def _seed(service: GpwDataService, path: Path) -> int:
    try:
        request = CreateLocationContentViewsRequest.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        _logger.error("Cannot read seed input %s: %s", path, exc)
        return 1
    success = await service.create_location_content_views(request.location_datas, request.product_datas)
    print(json.dumps({"result": success}))
    return 0 if success else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = _config_from_args(args)
    except GpwConfigError as exc:
        _logger.error("%s", exc)
        return 2

    service = _service(config)
    if args.command == "serve":
        web.run_app(create_app(service), host=config.host, port=config.port)
        return 0
    if args.command == "status":
        return asyncio.run(_status(service))
    if args.command == "dump":
        return asyncio.run(_dump(service))
    return asyncio.run(_seed(service, args.input))


if __name__ == "__main__":
    sys.exit(main())
