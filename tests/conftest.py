"""Shared fixtures: an app whose post store lives in a temporary directory."""

from __future__ import annotations

import pytest

from app import create_app
from config import Config
from store import PostStore


@pytest.fixture
def config(tmp_path):
    return Config(posts_file=str(tmp_path / "data" / "posts.json"), secret_key="test")


@pytest.fixture
def store(config):
    return PostStore(config.posts_file)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
