import pytest
from fastapi.testclient import TestClient
from api.main import app
import api.routes as routes


def _client():
    client = TestClient(app)
    client.post("/mood/reset")
    routes.mood_queue.clear()
    return client


def test_health():
    r = TestClient(app).get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["categories"] == ["happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral"]


def test_mood_frame_and_duplicate(smiling_face):
    client = _client()
    r = client.post("/mood/frame", json={"timestamp": 1.0, "blendshapes": smiling_face})
    assert r.status_code == 200
    j = r.json()
    assert j["mood"] == "happy" and j["raw_mood"] == "happy"
    assert j["music_query"] == "upbeat happy music playlist"

    r = client.post("/mood/frame", json={"timestamp": 1.0, "blendshapes": smiling_face})
    assert r.status_code == 200
    assert r.json() == {"skipped": True, "timestamp": 1.0}


def test_mood_frame_no_face():
    client = _client()
    r = client.post("/mood/frame", json={"timestamp": 2.0})
    assert r.status_code == 200
    assert r.json()["flag"] == "NO_FACE"


def test_mood_frame_invalid():
    client = _client()
    r = client.post("/mood/frame", json={"timestamp": 3.0, "blendshapes": {"jawOpen": "wide"}})
    assert r.status_code == 422


@pytest.mark.parametrize("value", ["0.6", True])
def test_mood_frame_rejects_coercible_scores(value):
    client = _client()
    frame = {"mouthSmileLeft": value, "mouthSmileRight": value}
    r = client.post("/mood/frame", json={"timestamp": 4.0, "blendshapes": frame})
    assert r.status_code == 422
    r = client.post("/mood/frame", json={"timestamp": 5.0, "blendshapes": [
        {"categoryName": "mouthSmileLeft", "score": value},
    ]})
    assert r.status_code == 422
    assert client.get("/mood/status").json()["frames_processed"] == 0


@pytest.mark.parametrize("value", ["0.6", True])
def test_mood_classify_rejects_coercible_scores(value):
    r = _client().post("/mood/classify", json={"blendshapes": {"mouthSmileLeft": value, "mouthSmileRight": value}})
    assert r.status_code == 422


def test_integer_scores_are_accepted():
    r = _client().post("/mood/classify", json={"blendshapes": {"mouthSmileLeft": 1, "mouthSmileRight": 1}})
    assert r.status_code == 200
    assert r.json()["mood"] == "happy"


def test_mood_classify_is_stateless(sad_face):
    client = _client()
    r = client.post("/mood/classify", json={"blendshapes": sad_face})
    assert r.status_code == 200
    assert r.json()["mood"] == "sad"
    assert client.get("/mood/status").json()["frames_processed"] == 0


def test_mood_status_and_reset(still_face):
    client = _client()
    for i in range(6):
        client.post("/mood/frame", json={"timestamp": float(i), "blendshapes": still_face})
    body = client.get("/mood/status").json()
    assert body["frames_processed"] == 6
    assert body["warming_up"] is False
    assert body["last_reading"]["mood"] == "neutral"

    assert client.post("/mood/reset").json() == {"status": "reset"}
    body = client.get("/mood/status").json()
    assert body["frames_processed"] == 0 and body["history"] == []


def test_queue_endpoints(smiling_face):
    client = _client()
    client.post("/mood/frame", json={"timestamp": 0.0, "blendshapes": smiling_face})

    r = client.post("/queue")
    assert r.status_code == 200
    first = r.json()
    assert first["mood"] == "happy"

    r = client.post("/queue", json={"mood": "fearful"})
    assert r.json()["music_query"] == "calming soothing music"
    assert [i["mood"] for i in client.get("/queue").json()] == ["happy", "fearful"]

    assert client.delete(f"/queue/{first['id']}").status_code == 200
    assert client.delete(f"/queue/{first['id']}").status_code == 404
    assert len(client.get("/queue").json()) == 1

    assert client.post("/queue", json={"mood": "bored"}).status_code == 422
