# File: tests/conftest.py
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from keyscout.config import ScanConfig

BUNDLE_A = (
    "var api = {};\n"
    "api.send = function (x) {\n"
    "  return req.post('https://api.example.com/v1/a').set(\"x-api-key\", 'KEY-A');\n"
    "};\n"
    "api.again = function () { return req.post('https://api.example.com/v1/a').set('x-api-key', 'KEY-A'); };\n"
)
BUNDLE_B = 'foo.post("https://b.example.com/upload") .set( "X-API-KEY" , "KEY-B" )bar'


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def basic_config() -> ScanConfig:
    """
    Return a ScanConfig suitable for talking to local test servers.
    """
    return ScanConfig(timeout=2.0, user_agent="TestAgent/1.0", concurrency=2)


@pytest_asyncio.fixture
async def script_server(unused_tcp_port: int) -> AsyncIterator[str]:
    """
    Page with three script tags (one duplicated by query string) and one broken script.
    """
    app = web.Application()

    async def handle_root(_):
        html = (
            "<html><head>"
            '<script src="/static/a.js?v=1"></script>'
            "<SCRIPT type='text/javascript' src='/static/b.js#main'></SCRIPT>"
            '<script src="/static/a.js?v=2"></script>'
            '<script src="/static/missing.js"></script>'
            "<script>inline();</script>"
            "</head><body></body></html>"
        )
        return web.Response(text=html, content_type="text/html")

    async def handle_a(_):
        return web.Response(text=BUNDLE_A, content_type="application/javascript")

    async def handle_b(_):
        return web.Response(text=BUNDLE_B, content_type="application/javascript")

    app.router.add_get("/", handle_root)
    app.router.add_get("/static/a.js", handle_a)
    app.router.add_get("/static/b.js", handle_b)

    async for url in serve_app(app, unused_tcp_port):
        yield url
