import httpx


def test_chat_endpoint_without_api_key_fails(configured_app):
    """Given no API key, when /chat is called, it should return 401 Unauthorized."""
    response = configured_app.post("/chat", json={"message": "Hello"})
    assert response.status_code == 401


def test_chat_endpoint_returns_result_and_conversation_id(configured_app, auth_headers, llm_client):
    """Given a valid first message, /chat should return the reply and a fresh conversation id."""
    response = configured_app.post("/chat", json={"message": "What does Jordan do?"}, headers=auth_headers)

    assert response.status_code == 200
    payload = response.json()
    assert payload["result"] == "default response"
    assert payload["conversationId"]
    assert "Jordan Reyes" in llm_client.last_messages[0]["content"]
    assert llm_client.call_history[0]["headers"]["Authorization"] == "Bearer sk-or-test"


def test_chat_endpoint_continues_conversation(configured_app, auth_headers, make_relay, llm_client_builder, store):
    """Given a returned conversation id, a second call should extend the same history."""
    client = llm_client_builder.reply("Python and Go.").reply("Five years.").build()
    configured_app.app.state.relay = make_relay(client)

    first = configured_app.post("/chat", json={"message": "Skills?"}, headers=auth_headers).json()
    second = configured_app.post(
        "/chat",
        json={"message": "Experience?", "conversationId": first["conversationId"]},
        headers=auth_headers
    ).json()

    assert second == {"result": "Five years.", "conversationId": first["conversationId"]}
    assert len(store.get(first["conversationId"])) == 4


def test_chat_endpoint_empty_message_returns_400(configured_app, auth_headers, store):
    """Given an empty message, /chat should respond 400 with the error payload."""
    response = configured_app.post("/chat", json={"message": ""}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing chat message...", "status": 400}
    assert len(store) == 0


def test_chat_endpoint_upstream_failure_returns_500(configured_app, auth_headers, make_relay, llm_client_builder, store):
    """Given an upstream outage, /chat should respond 500 and keep the user turn."""
    client = llm_client_builder.fail(httpx.ConnectError("down")).build()
    configured_app.app.state.relay = make_relay(client)

    response = configured_app.post(
        "/chat", json={"message": "Hello", "conversationId": "retry-me"}, headers=auth_headers
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process your request.", "status": 500}
    assert [m.role for m in store.get("retry-me")] == ["user"]


def test_chat_endpoint_uses_request_overrides(configured_app, auth_headers, llm_client):
    """Given model, endpoint and credential in the request, they should be used for the upstream call."""
    response = configured_app.post(
        "/chat",
        json={
            "message": "Hi",
            "name": "Sam Lee",
            "model": "openai/gpt-4o-mini",
            "endpoint": "https://llm.example.com/v1/chat/completions",
            "credential": "sk-other",
            "temperature": 0.5,
        },
        headers=auth_headers
    )

    assert response.status_code == 200
    call = llm_client.call_history[0]
    assert call["url"] == "https://llm.example.com/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-other"
    assert call["json"]["model"] == "openai/gpt-4o-mini"
    assert call["json"]["temperature"] == 0.5
    assert "Sam Lee" in call["json"]["messages"][0]["content"]


def test_chat_endpoint_rejects_malformed_conversation_id(configured_app, auth_headers, llm_client):
    """Given a conversation id with path characters, /chat should fail validation."""
    response = configured_app.post(
        "/chat", json={"message": "Hi", "conversationId": "../../etc/passwd"}, headers=auth_headers
    )

    assert response.status_code == 422
    assert llm_client.call_history == []


def test_app_lifespan_creates_relay(monkeypatch):
    """Given the real app, startup should attach a relay and the health check should respond."""
    from fastapi.testclient import TestClient
    from auth import APIKeyMiddleware
    from main import app
    from services.chat_relay import ChatRelay

    monkeypatch.setattr(APIKeyMiddleware, "API_KEY", "")
    with TestClient(app) as client:
        assert isinstance(app.state.relay, ChatRelay)
        assert client.get("/").json() == {"message": "Resume Chat Relay is running"}

        response = client.post("/chat", json={"message": "Hi", "conversationId": "bad id!"})
        assert response.status_code == 422
        assert response.json() == {"error": "Field 'conversationId' has an invalid format", "status": 422}


def test_auth_rejection_carries_cors_headers(monkeypatch):
    """Given a cross-origin request without an API key, the 401 should still include CORS headers."""
    from fastapi.testclient import TestClient
    from auth import APIKeyMiddleware
    from main import app

    monkeypatch.setattr(APIKeyMiddleware, "API_KEY", "test-key")
    with TestClient(app) as client:
        response = client.post("/chat", json={"message": "Hi"}, headers={"Origin": "https://portfolio.example"})

    assert response.status_code == 401
    assert response.headers["access-control-allow-origin"] == "*"
