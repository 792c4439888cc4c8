"""
Tests for the HTTP API.
"""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi.testclient import TestClient

from clipper.api.app import create_app
from clipper.api.dependencies import get_clip_maker, get_media_tool, get_pipeline
from clipper.core.clipper import ClipMaker
from clipper.core.pipeline import HighlightPipeline
from clipper.core.process import ProcessResult
from clipper.models.schemas import AnalysisResult
from clipper.utils.error_handling import ApiFailure, MediaNotFound, ParseFailure

from conftest import FakeMediaTool, FakeReasoner, FakeTranscoder, FakeTranscriber


@pytest.fixture
def app(test_config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    return TestClient(app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Highlight Clipper"


def test_health_ai_enabled(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "online", "ai": "enabled"}


def test_health_ai_disabled(test_config):
    config = test_config.model_copy(update={"groq_api_key": None})
    response = TestClient(create_app(config)).get("/api/health")
    assert response.json() == {"status": "online", "ai": "disabled"}


@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}])
def test_video_info_missing_url(app, client, body):
    media_tool = MagicMock()
    media_tool.probe = AsyncMock()
    app.dependency_overrides[get_media_tool] = lambda: media_tool

    response = client.post("/api/video-info", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "URL missing"}
    media_tool.probe.assert_not_called()


def test_video_info(app, client, test_video_url):
    app.dependency_overrides[get_media_tool] = lambda: FakeMediaTool()

    response = client.post("/api/video-info", json={"url": test_video_url})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "title": "Test Video",
        "duration": 120,
        "thumbnail": "https://img/t.jpg",
        "author": "Test Author",
    }


def test_video_info_malformed_metadata_output(client, test_video_url):
    with patch("clipper.core.media_tool.run_process", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = ProcessResult(0, b"<html>not json</html>", b"")
        response = client.post("/api/video-info", json={"url": test_video_url})

    assert response.status_code == 500
    assert response.json() == {"error": "Parsing error"}

    # The service keeps answering afterwards
    assert client.get("/api/health").status_code == 200


def test_video_info_not_found(app, client, test_video_url):
    media_tool = MagicMock()
    media_tool.probe = AsyncMock(side_effect=MediaNotFound("Video not found"))
    app.dependency_overrides[get_media_tool] = lambda: media_tool

    response = client.post("/api/video-info", json={"url": test_video_url})

    assert response.status_code == 500
    assert response.json() == {"error": "Video not found"}


def test_video_info_invalid_body(client):
    response = client.post("/api/video-info", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_analyze_missing_url(app, client):
    pipeline = MagicMock()
    pipeline.analyze = AsyncMock()
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    response = client.post("/api/analyze-video", json={})

    assert response.status_code == 400
    pipeline.analyze.assert_not_called()


def test_analyze_not_configured(app, client, test_video_url):
    app.dependency_overrides[get_pipeline] = lambda: None

    response = client.post("/api/analyze-video", json={"url": test_video_url})

    assert response.status_code == 500
    assert response.json() == {"error": "AI not configured"}


def test_analyze_video(app, client, test_video_url):
    pipeline = MagicMock()
    pipeline.analyze = AsyncMock(return_value=AnalysisResult(
        transcription="Hallo zusammen.",
        highlights=[{"start": 10, "end": 40, "title": "Intro", "reason": "Stark", "score": 88}],
    ))
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    response = client.post("/api/analyze-video", json={"url": test_video_url})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "transcription": "Hallo zusammen.",
        "highlights": [{"start": 10, "end": 40, "title": "Intro", "reason": "Stark", "score": 88}],
    }
    pipeline.analyze.assert_awaited_once_with(test_video_url)


@pytest.mark.parametrize("error", [ApiFailure("Transcription failed: boom"), ParseFailure("Could not parse highlights")])
def test_analyze_video_failures(app, client, test_video_url, error):
    pipeline = MagicMock()
    pipeline.analyze = AsyncMock(side_effect=error)
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    response = client.post("/api/analyze-video", json={"url": test_video_url})

    assert response.status_code == 500
    assert response.json() == {"error": error.message}


def test_analyze_video_without_highlights_end_to_end(app, client, test_config, test_video_url):
    media_tool = FakeMediaTool()
    pipeline = HighlightPipeline(
        media_tool=media_tool,
        transcriber=FakeTranscriber(),
        reasoner=FakeReasoner("Keine guten Stellen gefunden."),
        temp_dir=test_config.temp_dir,
    )
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    response = client.post("/api/analyze-video", json={"url": test_video_url})

    assert response.status_code == 200
    assert response.json()["highlights"] == []
    assert response.json()["transcription"] == "Hallo zusammen. Heute geht es um Clips."
    assert not media_tool.audio_paths[0].exists()


@pytest.mark.parametrize("body", [
    {},
    {"startTime": 0, "duration": 10},
    {"url": "https://youtu.be/x", "duration": 10},
    {"url": "https://youtu.be/x", "startTime": 0},
    {"url": "https://youtu.be/x", "startTime": 0, "duration": 0},
    {"url": "https://youtu.be/x", "startTime": -5, "duration": 10},
])
def test_create_clip_missing_parameters(app, client, body):
    clip_maker = MagicMock()
    clip_maker.create = AsyncMock()
    app.dependency_overrides[get_clip_maker] = lambda: clip_maker

    response = client.post("/api/create-clip", json=body)

    assert response.status_code == 400
    clip_maker.create.assert_not_called()


def test_create_clip_and_download(app, client, test_config, test_video_url):
    app.dependency_overrides[get_clip_maker] = lambda: ClipMaker(
        FakeMediaTool(), FakeTranscoder(), test_config.downloads_dir
    )

    response = client.post(
        "/api/create-clip",
        json={"url": test_video_url, "startTime": 0, "duration": 30, "clipName": "My Clip! @2024"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["filename"].startswith("My_Clip___2024-")
    assert data["downloadUrl"] == f"/downloads/{data['filename']}"

    download = client.get(data["downloadUrl"])
    assert download.status_code == 200
    assert download.content == b"fake mp4 data"


def test_create_clip_default_name(app, client, test_config, test_video_url):
    app.dependency_overrides[get_clip_maker] = lambda: ClipMaker(
        FakeMediaTool(), FakeTranscoder(), test_config.downloads_dir
    )

    response = client.post("/api/create-clip", json={"url": test_video_url, "startTime": 5, "duration": 20})

    assert response.status_code == 200
    assert response.json()["filename"].startswith("clip-")


def test_create_clip_output_missing(app, client, test_config, test_video_url):
    app.dependency_overrides[get_clip_maker] = lambda: ClipMaker(
        FakeMediaTool(), FakeTranscoder(write_output=False), test_config.downloads_dir
    )

    response = client.post("/api/create-clip", json={"url": test_video_url, "startTime": 0, "duration": 30})

    assert response.status_code == 500
    assert response.json() == {"error": "File not created"}
    assert list(test_config.downloads_dir.iterdir()) == []


@pytest.mark.parametrize("raw_body", [
    b'{"url": "https://youtu.be/x", "startTime": 0, "duration": Infinity}',
    b'{"url": "https://youtu.be/x", "startTime": 0, "duration": NaN}',
    b'{"url": "https://youtu.be/x", "startTime": Infinity, "duration": 10}',
])
def test_create_clip_non_finite_numbers(app, client, raw_body):
    clip_maker = MagicMock()
    clip_maker.create = AsyncMock()
    app.dependency_overrides[get_clip_maker] = lambda: clip_maker

    response = client.post(
        "/api/create-clip", content=raw_body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    clip_maker.create.assert_not_called()
