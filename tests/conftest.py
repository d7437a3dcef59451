"""Shared pytest fixtures for memegen tests.

A fake meme-generator API is served with aiohttp.web so the real
MemeService talks HTTP to it.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import web

from memebot.config.settings import MemeEntry
from memebot.plugins.memegen.config import MemegenConfig
from memebot.plugins.memegen.models import MemeParamSchema
from memebot.plugins.memegen.service import MemeService
from memebot.plugins.memegen.signature import build_command_spec

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png"
GIF_BYTES = b"GIF89afake-gif"


def info_body(key: str, **params) -> dict:
    """Build an `/info` response body."""
    defaults = {
        "min_images": 0,
        "max_images": 0,
        "min_texts": 1,
        "max_texts": 1,
        "default_texts": ["hello"],
        "args": [],
    }
    defaults.update(params)
    return {"key": key, "keywords": [key], "patterns": [], "params": defaults}


class FakeMemeApi:
    """In-memory stand-in for the meme-generator HTTP API."""

    def __init__(self):
        self.infos: dict[str, dict] = {}
        self.requests: list[tuple[str, str]] = []
        self.forms: list[dict] = []
        self.preview_response = web.Response(body=GIF_BYTES, content_type="image/gif")
        self.render_status = 200
        self.render_body = PNG_BYTES
        self.render_content_type = "image/png"

    async def info(self, request: web.Request) -> web.Response:
        key = request.match_info["key"]
        self.requests.append(("GET", request.path))
        if key not in self.infos:
            return web.json_response({"detail": "NoSuchMeme"}, status=404)
        body = self.infos[key]
        if isinstance(body, str):
            return web.Response(text=body, content_type="application/json")
        return web.json_response(body)

    async def preview(self, request: web.Request) -> web.Response:
        self.requests.append(("GET", request.path))
        return self.preview_response

    async def render(self, request: web.Request) -> web.Response:
        self.requests.append(("POST", request.path))
        form = await request.post()
        self.forms.append({
            "texts": form.getall("texts", []),
            "args": form.getall("args", []),
        })
        if self.render_status != 200:
            return web.Response(status=self.render_status, text=self.render_body)
        return web.Response(body=self.render_body, content_type=self.render_content_type)

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/memes/{key}/info", self.info)
        app.router.add_get("/memes/{key}/preview", self.preview)
        app.router.add_post("/memes/{key}", self.render)
        return app


@pytest.fixture
def meme_api() -> FakeMemeApi:
    return FakeMemeApi()


@pytest.fixture
async def service(meme_api, aiohttp_server):
    """A MemeService connected to the fake API."""
    server = await aiohttp_server(meme_api.make_app())
    config = MemegenConfig(endpoint=str(server.make_url("/")), bot_name="memebot")
    svc = MemeService(None, config)
    await svc.initialize()
    yield svc
    await svc.cleanup()


@pytest.fixture
def drake_spec():
    """Spec with one required image, one required and one optional text, two options."""
    schema = MemeParamSchema(
        min_images=1,
        max_images=1,
        min_texts=1,
        max_texts=2,
        default_texts=["a", "b"],
        args=[
            {"name": "circle", "type": "bool", "description": "是否圆形头像", "default": "false"},
            {"name": "direction", "type": "str", "description": "方向", "default": "left"},
        ],
    )
    return build_command_spec(MemeEntry(key="drake_like", name="foo"), schema, "memebot")


@pytest.fixture
def session():
    """Invoker session double recording sends."""
    fake = MagicMock()
    fake.send_image = AsyncMock()
    fake.send_text = AsyncMock()
    fake.send_help = AsyncMock()
    return fake
