"""
Shared fixtures: a fake Affinity API behind httpx.MockTransport.
"""
import asyncio
import json

import httpx
import pytest

from core.config import Settings
from core.context import build_context
from core.dispatch import Dispatcher


class FakeAffinity:
    """Records every request and answers from a (method, path) route table."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, body=None, status=200, error=None):
        self.routes[(method, path)] = (status, body, error)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        status, body, error = route
        if error is not None:
            raise error
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method=None):
        return [r for r in self.requests if method is None or r.method == method]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content)


@pytest.fixture
def affinity():
    return FakeAffinity()


@pytest.fixture
def settings():
    return Settings(api_key="test-key", base_url="https://affinity.test")


@pytest.fixture
def context(settings, affinity):
    return build_context(settings, transport=httpx.MockTransport(affinity))


@pytest.fixture
def dispatcher(context):
    return Dispatcher(context)


@pytest.fixture
def call(dispatcher):
    """Run one operation synchronously and return its Reply."""

    def _call(name, args=None):
        return asyncio.run(dispatcher.handle(name, args))

    return _call


def text_of(reply) -> str:
    assert len(reply.content) == 1
    assert reply.content[0].type == "text"
    return reply.content[0].text
