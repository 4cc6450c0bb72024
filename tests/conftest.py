"""Pytest fixtures and Gemini client stand-ins for the storefront tests."""

import asyncio
import json
from types import SimpleNamespace

import pytest


def make_books(count=12):
    return [
        {
            "title": f"The Starfall Codex {i}",
            "author": f"Mira Thorne {i}",
            "description": "A smuggler finds a map written in starlight.",
            "price": 4.99 + i,
        }
        for i in range(count)
    ]


class DummyModels:
    def __init__(self, text=None, error=None, delay=0.0):
        self.text = text
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class DummyClient:
    def __init__(self, text=None, error=None, delay=0.0):
        self.models = DummyModels(text=text, error=error, delay=delay)
        self.aio = SimpleNamespace(models=self.models)


@pytest.fixture
def books_json():
    return json.dumps(make_books())


@pytest.fixture
def book_factory():
    return make_books


@pytest.fixture
def dummy_client():
    return DummyClient
