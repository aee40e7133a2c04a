# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import MapperConfig
from site_mapper.logger import init_logging

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]
Route = Union[str, Handler]


def html_handler(body: str) -> Handler:
    async def handle(_):
        return web.Response(text=body, content_type="text/html")

    return handle


@pytest_asyncio.fixture
async def serve_site(unused_tcp_port: int) -> AsyncIterator[Callable[[Dict[str, Route]], Awaitable[str]]]:
    """
    Start an aiohttp app built from ``{path: html or handler}`` and return its base URL.

    ``{base}`` inside HTML strings is replaced by the base URL, so pages can
    reference absolute URLs of the same server.
    """
    runners: list[web.AppRunner] = []
    base = f"http://127.0.0.1:{unused_tcp_port}"

    async def _serve(routes: Dict[str, Route]) -> str:
        app = web.Application()
        for path, route in routes.items():
            handler = html_handler(route.replace("{base}", base)) if isinstance(route, str) else route
            app.router.add_get(path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return base

    yield _serve
    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def make_config() -> Callable[..., MapperConfig]:
    """Config factory with fast, test-friendly defaults."""

    def _make(root_url: str, **overrides) -> MapperConfig:
        values = dict(
            root_url=root_url,
            rate_limit=50,
            timeout=2.0,
            retry_times=0,
            retry_backoff=0.0,
            user_agent="TestAgent/1.0",
        )
        values.update(overrides)
        return MapperConfig(**values)

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner swaps stderr; rebind the project logger to the real stream afterwards."""
    yield
    init_logging()
