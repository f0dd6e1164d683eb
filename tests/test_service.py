"""Tests for the narrative relay service."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from compute_router.config import BUNDLED_TEMPLATES_DIR, Settings
from compute_router.narrative import TemplateCache
from compute_router.service import INTERNAL_ERROR, POLICY_VIOLATION, create_app


@pytest.fixture
def client():
    return TestClient(create_app(Settings(templates_dir=BUNDLED_TEMPLATES_DIR)))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "narrative-service"}


def test_relays_mapped_event(client):
    with client.websocket_connect("/?sessionId=abc&modality=oct") as ws:
        ws.send_json({"step": "focus_left", "progress": 20})
        data = ws.receive_json()
    assert data["step"] == "focus_left"
    assert data["plainText"] == "We're focusing on your left eye."
    assert data["progress"] == 20
    assert data["privacyBadge"] == "processing_local"


def test_modality_defaults_to_oct(client):
    with client.websocket_connect("/?sessionId=abc") as ws:
        ws.send_json({"step": "sending_summary", "privacy": "cloud_processing"})
        data = ws.receive_json()
    assert data["progress"] == 0
    assert data["privacyBadge"] == "cloud_processing"
    assert data["etaHint"] == "~30 seconds"


def test_bad_messages_keep_connection_open(client):
    with client.websocket_connect("/?sessionId=abc") as ws:
        ws.send_text("not json")
        assert "error" in ws.receive_json()
        ws.send_json({"step": "unknown_step"})
        assert 'Step "unknown_step" not found' in ws.receive_json()["error"]
        ws.send_json({"step": "complete", "progress": 100})
        assert ws.receive_json()["plainText"] == "All done!"


def test_missing_session_id_closes_with_policy_violation(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/?modality=oct") as ws:
            ws.receive_json()
    assert exc.value.code == POLICY_VIOLATION


def test_unknown_modality_closes_with_internal_error(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/?sessionId=abc&modality=dexa") as ws:
            ws.receive_json()
    assert exc.value.code == INTERNAL_ERROR


def test_each_app_owns_its_cache(tmp_path: Path):
    cache = TemplateCache(BUNDLED_TEMPLATES_DIR)
    app = create_app(Settings(templates_dir=tmp_path), cache=cache)
    assert app.state.templates is cache
    other = create_app(Settings(templates_dir=tmp_path))
    assert other.state.templates is not cache

    with TestClient(app).websocket_connect("/?sessionId=s1") as ws:
        ws.send_json({"step": "focus_left"})
        ws.receive_json()
    assert len(cache) == 1
    assert len(other.state.templates) == 0


def test_binary_frames_are_decoded(client):
    with client.websocket_connect("/?sessionId=abc") as ws:
        ws.send_bytes(b'{"step": "focus_left", "progress": 5}')
        data = ws.receive_json()
        assert data["plainText"] == "We're focusing on your left eye."
        assert data["progress"] == 5
        ws.send_bytes(b"\xff\xfe")
        assert "error" in ws.receive_json()
        ws.send_json({"step": "complete"})
        assert ws.receive_json()["step"] == "complete"


def test_undecodable_template_closes_with_internal_error(tmp_path: Path):
    (tmp_path / "vis.v1.yaml").write_bytes(b"modality: vis\nversion: \xff\n")
    client = TestClient(create_app(Settings(templates_dir=tmp_path)))
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/?sessionId=abc&modality=vis") as ws:
            ws.receive_json()
    assert exc.value.code == INTERNAL_ERROR


def test_injected_empty_cache_is_kept(tmp_path: Path):
    cache = TemplateCache(BUNDLED_TEMPLATES_DIR)
    assert len(cache) == 0
    assert create_app(Settings(templates_dir=tmp_path), cache=cache).state.templates is cache
