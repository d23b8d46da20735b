"""Shared fixtures for resume_maker tests."""

import json
import sys

import httpx
import pytest
from loguru import logger
from PIL import Image

from resume_maker.contexts.editing import default_document
from resume_maker.contexts.persistence import LocalStore, RemoteStore

API_URL = "http://resumes.test"


@pytest.fixture(autouse=True)
def reset_logger():
    """Route logs to the current stderr and drop handlers added by the test."""
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="WARNING")


@pytest.fixture
def document():
    return default_document()


@pytest.fixture
def local_store(tmp_path):
    return LocalStore(tmp_path / "store" / "local_storage.json")


class FakeResumeServer:
    """In-memory publish API served through httpx.MockTransport."""

    def __init__(self):
        self.resumes = {}
        self.requests = []
        self.fail_with = None
        self.raise_with = None
        self._next = 1

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_with is not None:
            raise self.raise_with

        if request.method == "GET" and request.url.path.startswith("/api/public/"):
            slug = request.url.path.rsplit("/", 1)[-1]
            for resume in self.resumes.values():
                if resume["slug"] == slug:
                    return httpx.Response(200, json={"data": resume["data"]})
            return httpx.Response(404, json={"error": "Not found"})

        if request.method == "POST" and request.url.path == "/api/resumes":
            if self.fail_with is not None:
                status, body = self.fail_with
                return httpx.Response(status, json=body)

            body = json.loads(request.content)
            resume_id = body.get("id")
            if resume_id is None:
                resume_id = f"id-{self._next}"
                self.resumes[resume_id] = {"slug": f"slug-{self._next}"}
                self._next += 1
            self.resumes[resume_id].update(data=body["data"], title=body["title"])
            return httpx.Response(200, json={"id": resume_id, "slug": self.resumes[resume_id]["slug"]})

        return httpx.Response(405, json={"error": "Method not allowed"})

    def publish(self, data, slug="shared-slug"):
        """Seed a published resume directly."""
        self.resumes[f"seed-{slug}"] = {"slug": slug, "data": data, "title": "seeded"}

    def post_bodies(self):
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def server():
    return FakeResumeServer()


@pytest.fixture
def remote_store(server):
    client = httpx.Client(transport=httpx.MockTransport(server.handler))
    store = RemoteStore(base_url=API_URL, client=client)
    yield store
    store.close()


def make_rasterizer(height_ratio: float = 1.0, color=(20, 20, 20)):
    """
    Build a capture stand-in producing a bitmap of the given height.

    height_ratio is the bitmap height relative to its width, so the placed image
    height in points is height_ratio * 595.28.
    """
    calls = []

    def rasterize(surface, scale):
        calls.append((surface, scale))
        width = int(surface.width * scale)
        return Image.new("RGB", (width, int(width * height_ratio)), color)

    rasterize.calls = calls
    return rasterize


@pytest.fixture
def rasterizer_factory():
    return make_rasterizer
