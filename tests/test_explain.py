"""
Tests for POST /api/explain-code.
"""
import httpx
import openai

from conftest import make_completion


def test_explains_code(client, upstream):
    r = client.post("/api/explain-code", json={"code": "print(1)", "language": "python"})

    assert r.status_code == 200
    assert r.json() == {"explanation": "This code prints 1.", "language": "python"}
    assert len(upstream.calls) == 1
    user_message = upstream.calls[0]["messages"][1]
    assert user_message["role"] == "user"
    assert "print(1)" in user_message["content"]
    assert "python" in user_message["content"]


def test_language_defaults_to_unknown(client):
    r = client.post("/api/explain-code", json={"code": "print(1)"})

    assert r.status_code == 200
    assert r.json()["language"] == "unknown"


def test_missing_code_is_rejected_without_upstream_call(client, upstream):
    for body in ({}, {"language": "python"}, {"code": ""}, {"code": "   \n"}):
        r = client.post("/api/explain-code", json=body)

        assert r.status_code == 400
        assert r.json() == {"error": "Code is required"}

    assert upstream.calls == []


def test_malformed_body_is_rejected(client, upstream):
    r = client.post(
        "/api/explain-code",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request body"
    assert upstream.calls == []


def test_non_string_code_is_rejected(client, upstream):
    r = client.post("/api/explain-code", json={"code": ["print(1)"]})

    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request body"
    assert upstream.calls == []


def test_empty_choices_returns_500(client, upstream):
    upstream.response = type("Response", (), {"choices": []})()

    r = client.post("/api/explain-code", json={"code": "print(1)"})

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to generate explanation"}


def test_empty_content_returns_500(client, upstream):
    upstream.response = make_completion("")

    r = client.post("/api/explain-code", json={"code": "print(1)"})

    assert r.status_code == 500
    assert r.json()["error"] == "Failed to generate explanation"


def test_network_failure_returns_500_with_details(client, upstream):
    request = httpx.Request("POST", "https://llm.example.test/v1/chat/completions")
    upstream.error = openai.APITimeoutError(request=request)

    r = client.post("/api/explain-code", json={"code": "print(1)"})

    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Server error"
    assert body["details"] == "Request timed out."
    assert len(upstream.calls) == 1


def test_identical_requests_are_relayed_independently(client, upstream):
    payload = {"code": "print(1)", "language": "python"}

    first = client.post("/api/explain-code", json=payload)
    upstream.response = make_completion("Prints the number one.")
    second = client.post("/api/explain-code", json=payload)

    assert first.json()["explanation"] == "This code prints 1."
    assert second.json()["explanation"] == "Prints the number one."
    assert len(upstream.calls) == 2
    assert upstream.calls[0] == upstream.calls[1]


def test_code_field_alias_is_not_accepted(client, upstream):
    r = client.post("/api/explain-code", json={"codeSnippet": "print(1)"})

    assert r.status_code == 400
    assert upstream.calls == []
