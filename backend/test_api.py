"""
APIエンドポイントのテスト（/health, /judge, /quiz/generate-from-image, /sessions）

Gemini は呼ばず、VisionLLMClient に準拠した偽クライアントに差し替える。
"""
import base64
import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# app モジュールをインポート可能にする
sys.path.insert(0, str(Path(__file__).parent))

from app.core.settings import settings
from app.llm.base import LLMInternalError, LLMTimeoutError
from app.main import app
from app.routers.quiz import llm_client_dependency

IMAGE_BASE64 = base64.b64encode(b"\x89PNG fake image bytes " * 4).decode()

GENERATED = {
    "title": "De zon",
    "questions": [
        {
            "type": "true_false",
            "difficulty": "easy",
            "question": "De zon is een ster.",
            "answer": "waar",
            "explanation": "De zon is een ster.",
            "evidence": "De zon is de dichtstbijzijnde ster.",
        },
        {
            "type": "short_answer",
            "difficulty": "hard",
            "question": "Wat is de bron van de energie van de zon?",
            "answer": "kernfusie",
            "explanation": "Waterstof fuseert tot helium.",
            "evidence": "... door kernfusie ...",
        },
    ],
}


class FakeLLM:
    """VisionLLMClient の偽実装"""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_from_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        self.calls.append({"prompt": prompt, "image_bytes": image_bytes, "mime_type": mime_type})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_llm(fake: FakeLLM) -> FakeLLM:
    app.dependency_overrides[llm_client_dependency] = lambda: fake
    return fake


def _error_code(resp) -> str:
    return resp.json()["detail"]["error"]["code"]


# --- /health ---

def test_health(client, monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    assert client.get("/health").json() == {"ok": True, "has_gemini_key": False}

    monkeypatch.setattr(settings, "gemini_api_key", "secret")
    assert client.get("/health").json() == {"ok": True, "has_gemini_key": True}


# --- /judge ---

def test_judge_multiple_choice(client):
    body = {
        "question": {"type": "multiple_choice", "answer": "Paris", "choices": ["Paris", "London"]},
        "userAnswer": "paris",
    }
    resp = client.post("/judge", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["points"] == 1
    assert data["label"] == "correct"


def test_judge_accepts_snake_case_and_empty_answer(client):
    body = {"question": {"type": "short_answer", "answer": "Paris"}, "user_answer": ""}
    data = client.post("/judge", json=body).json()
    assert data["points"] == 0
    assert data["label"] == "wrong"


def test_judge_short_answer_reason_has_metrics(client):
    body = {"question": {"type": "short_answer", "answer": "photosynthesis"}, "userAnswer": "photosintesis"}
    data = client.post("/judge", json=body).json()
    assert data["points"] == 0.5
    assert data["label"] == "partial"
    assert "0.86" in data["reason"]


def test_judge_rejects_unknown_type(client):
    body = {"question": {"type": "essay", "answer": "x"}, "userAnswer": "x"}
    assert client.post("/judge", json=body).status_code == 422


def test_judge_batch(client):
    body = {
        "questions": GENERATED["questions"],
        "answers": {"0": "juist", "1": "kernsplijting"},
    }
    resp = client.post("/judge/batch", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["results"]["0"]["label"] == "correct"
    assert data["results"]["1"]["label"] != "correct"
    assert data["summary"]["max_score"] == 2
    assert data["summary"]["checked"] == 2
    assert data["summary"]["finished"] is True
    assert data["retry_indexes"] == [1]
    assert [q["answer"] for q in data["retry_questions"]] == ["kernfusie"]


def test_judge_batch_out_of_range(client):
    body = {"questions": GENERATED["questions"], "answers": {"5": "waar"}}
    resp = client.post("/judge/batch", json=body)
    assert resp.status_code == 400
    assert _error_code(resp) == "INVALID_INPUT"


# --- /quiz/generate-from-image ---

def test_generate_from_image(client):
    fake = _use_llm(FakeLLM(text="```json\n" + json.dumps(GENERATED) + "\n```"))
    body = {"imageBase64": IMAGE_BASE64, "mimeType": "image/png", "shuffle": False}

    resp = client.post("/quiz/generate-from-image", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["title"] == "De zon"
    assert [q["type"] for q in data["questions"]] == ["true_false", "short_answer"]

    call = fake.calls[0]
    assert call["mime_type"] == "image/png"
    assert call["image_bytes"] == base64.b64decode(IMAGE_BASE64)
    assert f"exact {settings.quiz_question_count} oefenvragen" in call["prompt"]


def test_generate_from_image_shuffles_by_default(client):
    _use_llm(FakeLLM(text=json.dumps(GENERATED)))
    body = {"image_base64": IMAGE_BASE64, "mime_type": "image/jpeg"}
    data = client.post("/quiz/generate-from-image", json=body).json()
    assert sorted(q["answer"] for q in data["questions"]) == ["kernfusie", "waar"]


def test_generate_from_image_question_count(client):
    fake = _use_llm(FakeLLM(text=json.dumps(GENERATED)))
    body = {"imageBase64": IMAGE_BASE64, "mimeType": "image/png", "shuffle": False, "questionCount": 1}

    data = client.post("/quiz/generate-from-image", json=body).json()
    assert [q["answer"] for q in data["questions"]] == ["waar"]
    assert "exact 1 oefenvragen" in fake.calls[0]["prompt"]


def test_generate_from_image_question_count_is_clamped(client):
    fake = _use_llm(FakeLLM(text=json.dumps(GENERATED)))
    body = {"image_base64": IMAGE_BASE64, "mime_type": "image/png", "question_count": 500}

    data = client.post("/quiz/generate-from-image", json=body).json()
    # 生成された2問しかないので2問だけ
    assert len(data["questions"]) == 2
    assert f"exact {settings.quiz_max_questions} oefenvragen" in fake.calls[0]["prompt"]

    body["question_count"] = 0
    data = client.post("/quiz/generate-from-image", json=body).json()
    assert len(data["questions"]) == 1


def test_generate_from_image_rejects_bad_image(client):
    fake = _use_llm(FakeLLM(text=json.dumps(GENERATED)))

    resp = client.post("/quiz/generate-from-image", json={"imageBase64": "abc", "mimeType": "image/png"})
    assert resp.status_code == 400
    assert _error_code(resp) == "INVALID_INPUT"

    resp = client.post("/quiz/generate-from-image", json={"imageBase64": "!" * 80, "mimeType": "image/png"})
    assert resp.status_code == 400

    resp = client.post("/quiz/generate-from-image", json={"imageBase64": IMAGE_BASE64, "mimeType": "x"})
    assert resp.status_code == 400

    assert fake.calls == []


def test_generate_from_image_llm_timeout(client):
    _use_llm(FakeLLM(error=LLMTimeoutError("timeout")))
    resp = client.post("/quiz/generate-from-image", json={"imageBase64": IMAGE_BASE64, "mimeType": "image/png"})
    assert resp.status_code == 408
    assert _error_code(resp) == "TIMEOUT"


def test_generate_from_image_llm_error(client):
    _use_llm(FakeLLM(error=LLMInternalError("quota")))
    resp = client.post("/quiz/generate-from-image", json={"imageBase64": IMAGE_BASE64, "mimeType": "image/png"})
    assert resp.status_code == 500
    assert _error_code(resp) == "INTERNAL_ERROR"


def test_generate_from_image_unparseable_output(client):
    _use_llm(FakeLLM(text="Sorry, ik kan de foto niet lezen."))
    resp = client.post("/quiz/generate-from-image", json={"imageBase64": IMAGE_BASE64, "mimeType": "image/png"})
    assert resp.status_code == 500
    assert _error_code(resp) == "INTERNAL_ERROR"


def test_generate_from_image_without_api_key(client, monkeypatch):
    from app.llm import gemini

    monkeypatch.setattr(settings, "gemini_api_key", "")
    gemini.get_gemini_client.cache_clear()

    resp = client.post("/quiz/generate-from-image", json={"imageBase64": IMAGE_BASE64, "mimeType": "image/png"})
    assert resp.status_code == 500
    assert _error_code(resp) == "INTERNAL_ERROR"


# --- /sessions ---

def test_sessions_roundtrip(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "sessions_dir", str(tmp_path))
    body = {"mode": "normal", "score": 8.5, "max_score": 10, "total_questions": 10, "topic": "De zon", "runId": "run-1"}

    first = client.post("/sessions", json=body).json()
    second = client.post("/sessions", json=body).json()
    assert first["id"] == second["id"]

    listing = client.get("/sessions").json()
    assert listing["total"] == 1
    assert listing["sessions"][0]["topic"] == "De zon"

    assert client.get(f"/sessions/{first['id']}").json()["score"] == 8.5

    assert client.delete(f"/sessions/{first['id']}").status_code == 200
    resp = client.get(f"/sessions/{first['id']}")
    assert resp.status_code == 404
    assert _error_code(resp) == "NOT_FOUND"


def test_sessions_validation(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "sessions_dir", str(tmp_path))
    assert client.post("/sessions", json={"score": -1, "max_score": 1, "total_questions": 1}).status_code == 422
    assert client.get("/sessions", params={"limit": 0}).status_code == 422


def test_sessions_keep_separate_runs_with_same_score(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "sessions_dir", str(tmp_path))
    body = {"score": 10, "max_score": 10, "total_questions": 10, "topic": "Quiz"}

    client.post("/sessions", json={**body, "runId": "run-1"})
    client.post("/sessions", json={**body, "runId": "run-2"})

    assert client.get("/sessions").json()["total"] == 2
