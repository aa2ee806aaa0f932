"""
Tests for the chat completion API.
"""

import json

from chat_emulator.entities import ChatMessageEntity
from chat_emulator.repositories import PlaceholderCompletionGenerator


def parse_events(body: str) -> list[str]:
    """Split an SSE body into the payloads of its ``data:`` events."""
    events = [event for event in body.split("\n\n") if event]
    assert all(event.startswith("data: ") for event in events)
    return [event[len("data: "):] for event in events]


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "/chat/completions" in response.text


def test_unknown_path_is_plain_404(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Not Found"


def test_wrong_method_is_404(client):
    response = client.get("/chat/completions")
    assert response.status_code == 404
    assert response.text == "Not Found"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["conversations"] == 0
    assert data["cache_entries"] == 0


def test_empty_body_object_is_rejected(client):
    response = client.post("/chat/completions", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Messages array is required"}


def test_missing_messages_is_rejected(client):
    response = client.post("/chat/completions", json={"error_field": 1})
    assert response.status_code == 400
    assert response.json() == {"error": "Messages array is required"}


def test_non_array_messages_is_rejected(client):
    response = client.post("/chat/completions", json={"messages": "hi"})
    assert response.status_code == 400
    assert response.json() == {"error": "Messages array is required"}


def test_empty_messages_is_rejected(client):
    response = client.post("/chat/completions", json={"messages": []})
    assert response.status_code == 400
    assert response.json() == {"error": "Messages array is required"}


def test_unparseable_body_is_rejected(client):
    response = client.post(
        "/chat/completions",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_malformed_message_is_rejected(client):
    response = client.post(
        "/chat/completions",
        json={"messages": [{"role": "robot", "content": "beep"}]},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_rejected_requests_leave_no_state(client):
    client.post("/chat/completions", json={})
    client.post("/chat/completions", json={"messages": [{"role": "robot", "content": "x"}]})

    stats = client.get("/stats").json()
    assert stats["conversations"] == 0
    assert stats["cache_entries"] == 0
    assert stats["total_requests"] == 0


def test_single_user_message(client):
    """A one-message conversation gets a deterministic reply mentioning the count."""
    response = client.post(
        "/chat/completions",
        json={"messages": [{"role": "user", "content": "hi"}]},
    )
    assert response.status_code == 200
    data = response.json()

    assert data["object"] == "chat.completion"
    assert data["id"].startswith("chatcmpl-")
    assert isinstance(data["created"], int)
    assert data["model"] == "gpt-3.5-turbo"

    choice = data["choices"][0]
    assert choice["index"] == 0
    assert choice["finish_reason"] == "stop"
    assert choice["message"]["role"] == "assistant"
    assert "1 message" in choice["message"]["content"]


def test_model_is_echoed(client):
    response = client.post(
        "/chat/completions",
        json={
            "model": "gpt-4o-mini",
            "messages": [{"role": "user", "content": "hi"}],
            "temperature": 0.2,
            "max_tokens": 64,
        },
    )
    assert response.status_code == 200
    assert response.json()["model"] == "gpt-4o-mini"


def test_v1_prefix_alias(client):
    response = client.post(
        "/v1/chat/completions",
        json={"messages": [{"role": "user", "content": "hi"}]},
    )
    assert response.status_code == 200
    assert response.json()["object"] == "chat.completion"


def test_repeated_request_is_served_from_cache(client):
    body = {"messages": [{"role": "system", "content": "terse"}, {"role": "user", "content": "hi"}]}

    first = client.post("/chat/completions", json=body).json()
    second = client.post("/chat/completions", json=body).json()

    assert first["choices"][0]["message"]["content"] == second["choices"][0]["message"]["content"]
    assert first["id"] != second["id"]

    stats = client.get("/stats").json()
    assert stats["generations"] == 1
    assert stats["cache_hits"] == 1
    assert stats["cache_misses"] == 1
    assert stats["cache_entries"] == 1
    # One conversation per request, hit or miss
    assert stats["conversations"] == 2


def test_role_order_does_not_change_cache_key(client):
    client.post(
        "/chat/completions",
        json={"messages": [{"role": "user", "content": "hi"}, {"role": "system", "content": "terse"}]},
    )
    client.post(
        "/chat/completions",
        json={"messages": [{"role": "system", "content": "terse"}, {"role": "user", "content": "hi"}]},
    )

    stats = client.get("/stats").json()
    assert stats["cache_hits"] == 1
    assert stats["generations"] == 1


def test_streaming_envelope(client):
    response = client.post(
        "/chat/completions",
        json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["cache-control"] == "no-cache"
    assert response.text.endswith("data: [DONE]\n\n")
    assert response.text.count("data: [DONE]") == 1

    payloads = parse_events(response.text)
    assert payloads[-1] == "[DONE]"
    chunks = [json.loads(payload) for payload in payloads[:-1]]

    terminal = chunks[-1]
    assert terminal["choices"][0]["finish_reason"] == "stop"
    assert terminal["choices"][0]["delta"] == {}

    content_chunks = chunks[:-1]
    assert len(content_chunks) > 1
    for chunk in chunks:
        assert chunk["object"] == "chat.completion.chunk"
        assert chunk["id"] == terminal["id"]
        assert chunk["created"] == terminal["created"]
        assert chunk["model"] == "gpt-3.5-turbo"
    for chunk in content_chunks:
        assert chunk["choices"][0]["finish_reason"] is None
        assert "content" in chunk["choices"][0]["delta"]

    text = "".join(chunk["choices"][0]["delta"]["content"] for chunk in content_chunks)
    generator = PlaceholderCompletionGenerator(token_delay=0.0)
    assert text == generator.compose([ChatMessageEntity(role="user", content="hi")])


def test_streamed_cache_hit_is_replayed_in_one_chunk(client):
    body = {"messages": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hey"}]}

    miss = client.post("/chat/completions", json={**body, "stream": True})
    hit = client.post("/chat/completions", json={**body, "stream": True})

    miss_chunks = [json.loads(p) for p in parse_events(miss.text)[:-1]]
    hit_chunks = [json.loads(p) for p in parse_events(hit.text)[:-1]]

    assert len(hit_chunks) == 2
    assert hit_chunks[0]["choices"][0]["delta"]["content"] == "".join(
        chunk["choices"][0]["delta"].get("content", "") for chunk in miss_chunks
    )
    assert hit_chunks[1]["choices"][0]["finish_reason"] == "stop"


def test_stream_and_non_stream_share_the_cache(client):
    body = {"messages": [{"role": "user", "content": "shared"}]}

    streamed = client.post("/chat/completions", json={**body, "stream": True})
    text = "".join(
        json.loads(p)["choices"][0]["delta"].get("content", "")
        for p in parse_events(streamed.text)[:-1]
    )
    completion = client.post("/chat/completions", json=body).json()

    assert completion["choices"][0]["message"]["content"] == text
    assert client.get("/stats").json()["cache_hits"] == 1


def test_get_stats(client):
    """Test get stats endpoint."""
    response = client.get("/stats")
    assert response.status_code == 200
    data = response.json()
    for key in (
        "conversations",
        "cache_entries",
        "total_requests",
        "cache_hits",
        "cache_misses",
        "generations",
        "hit_rate",
        "avg_lookup_time_ms",
    ):
        assert key in data


def test_stream_null_is_treated_as_false(client):
    response = client.post(
        "/chat/completions",
        json={"messages": [{"role": "user", "content": "hi"}], "stream": None},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["object"] == "chat.completion"


def test_generation_failure_returns_502(failing_client):
    response = failing_client.post(
        "/chat/completions", json={"messages": [{"role": "user", "content": "hi"}]}
    )
    assert response.status_code == 502
    assert response.json() == {"error": "backend unavailable"}


def test_streamed_generation_failure_ends_with_error_event(failing_client):
    response = failing_client.post(
        "/chat/completions",
        json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
    )
    assert response.status_code == 200
    assert response.text.count("data: [DONE]") == 1

    payloads = parse_events(response.text)
    assert len(payloads) == 3
    assert payloads[-1] == "[DONE]"

    first = json.loads(payloads[0])
    assert first["object"] == "chat.completion.chunk"
    assert first["choices"][0]["delta"] == {"content": "partial"}
    assert first["choices"][0]["finish_reason"] is None

    assert json.loads(payloads[1]) == {"error": {"message": "backend unavailable"}}
    assert '"finish_reason":"stop"' not in response.text


def test_failed_generation_is_not_cached(failing_client):
    body = {"messages": [{"role": "user", "content": "hi"}]}
    failing_client.post("/chat/completions", json=body)
    failing_client.post("/chat/completions", json={**body, "stream": True})

    stats = failing_client.get("/stats").json()
    assert stats["cache_entries"] == 0
    assert stats["cache_hits"] == 0
    assert stats["generations"] == 0
