import asyncio

import httpx
import pytest

from app.core.exceptions import DependencyFailureException
from app.services import identity as identity_module
from app.services.identity import IdentityService
from app.services.text_generation import TextGenerationService

MESSAGES = [{"role": "user", "content": "Is this review safe?"}]


def make_service(handler, api_key="test-key"):
    return TextGenerationService(
        api_url="https://llm.test/v1/chat/completions",
        api_key=api_key,
        model="test-model",
        transport=httpx.MockTransport(handler),
    )


def test_generate_returns_reply_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = request.read()
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": '{"isSafe": true}'}}]}
        )

    reply = asyncio.run(make_service(handler).generate(MESSAGES))

    assert reply == '{"isSafe": true}'
    assert seen["auth"] == "Bearer test-key"
    assert b'"model":"test-model"' in seen["body"].replace(b" ", b"")
    assert b"Is this review safe?" in seen["body"]


def test_generate_without_api_key_fails():
    service = make_service(lambda request: httpx.Response(200, json={}), api_key="")
    with pytest.raises(DependencyFailureException):
        asyncio.run(service.generate(MESSAGES))


def test_generate_error_status_fails():
    service = make_service(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(DependencyFailureException) as exc_info:
        asyncio.run(service.generate(MESSAGES))
    assert exc_info.value.details == {"status_code": 502}


def test_generate_response_without_choices_fails():
    service = make_service(lambda request: httpx.Response(200, json={"choices": []}))
    with pytest.raises(DependencyFailureException):
        asyncio.run(service.generate(MESSAGES))


def test_generate_non_json_body_fails():
    service = make_service(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(DependencyFailureException):
        asyncio.run(service.generate(MESSAGES))


def test_verify_token_returns_claims(monkeypatch):
    service = IdentityService()
    monkeypatch.setattr(service, "_get_app", lambda: object())
    monkeypatch.setattr(
        identity_module.auth, "verify_id_token", lambda token, app=None: {"uid": "u1", "token": token}
    )

    claims = asyncio.run(service.verify_token("good-token"))

    assert claims == {"uid": "u1", "token": "good-token"}


def test_verify_token_rejects_bad_token(monkeypatch):
    def reject(token, app=None):
        raise ValueError("Token expired")

    service = IdentityService()
    monkeypatch.setattr(service, "_get_app", lambda: object())
    monkeypatch.setattr(identity_module.auth, "verify_id_token", reject)

    assert asyncio.run(service.verify_token("expired-token")) is None
