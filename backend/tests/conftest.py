"""
Shared fixtures: a temporary database and an API client with fake outbound services.
"""
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from core.database import Database
from models.transcript_models import Chapter, Segment


@pytest.fixture
def db(tmp_path):
    return Database(db_path=tmp_path / "test.db")


@pytest.fixture
def transcript_client():
    client = Mock()
    client.fetch_title.return_value = "Test video"
    client.fetch_raw.return_value = '[{"title": "Test video"}]'
    client.fetch_transcript.return_value = [
        Segment(start_sec=0.0, start="00:00", text="hello there"),
        Segment(start_sec=95.0, start="01:35", text="main part"),
    ]
    return client


@pytest.fixture
def chapter_generator():
    generator = Mock()
    generator.generate_from_segments.return_value = [
        Chapter(start="00:00", title="Intro"),
        Chapter(start="01:35", title="Main part"),
    ]
    return generator


@pytest.fixture
def api(db, transcript_client, chapter_generator):
    from api import dependencies
    from api.main import app

    app.dependency_overrides[dependencies.get_db] = lambda: db
    app.dependency_overrides[dependencies.get_transcript_client] = lambda: transcript_client
    app.dependency_overrides[dependencies.get_chapter_generator] = lambda: chapter_generator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def logged_in(api):
    response = api.post("/auth/signup", json={"email": "Ada@Example.com", "password": "secret1"})
    assert response.json()["ok"] is True
    return api
