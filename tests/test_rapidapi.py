"""Tests for the RapidAPI upscaler client."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
import requests

from image_upscaler.models.state import Scale
from image_upscaler.uploaders.rapidapi import (
    API_KEY_ENV,
    RapidApiUpscaler,
    UpscaleRequestError,
    UpscaleResponseError,
)


def make_response(status: int = 200, body: object | str = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    response.url = "https://ai-image-upscaler1.p.rapidapi.com/v1"
    if isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    return response


@pytest.fixture
def client():
    return RapidApiUpscaler(api_key="test-key", timeout=12)


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    with patch("image_upscaler.uploaders.rapidapi.load_dotenv"):
        with pytest.raises(ValueError, match=API_KEY_ENV):
            RapidApiUpscaler()


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "env-key")
    with patch("image_upscaler.uploaders.rapidapi.load_dotenv"):
        assert RapidApiUpscaler().api_key == "env-key"


def test_build_payload_has_single_image_part(client):
    payload = client.build_payload("a.png", b"PNGDATA", "image/png")

    assert [name for name, _ in payload.fields] == ["image"]
    body = payload.to_string()
    assert b'name="image"; filename="a.png"' in body
    assert b"Content-Type: image/png" in body
    assert b"PNGDATA" in body


def test_build_payload_with_scale(client):
    payload = client.build_payload("a.png", b"x", "image/png", Scale.X4)

    assert ("scale", "4") in payload.fields


def test_upscale_sends_rapidapi_headers(client):
    payload = client.build_payload("a.png", b"x", "image/png")

    with patch("image_upscaler.uploaders.rapidapi.requests.request") as request:
        request.return_value = make_response(body={"result_base64": "QUJD"})
        result = client.upscale(payload)

    assert result == "QUJD"
    args, kwargs = request.call_args
    assert args == ("POST", "https://ai-image-upscaler1.p.rapidapi.com/v1")
    assert kwargs["headers"]["x-rapidapi-key"] == "test-key"
    assert kwargs["headers"]["x-rapidapi-host"] == "ai-image-upscaler1.p.rapidapi.com"
    assert kwargs["headers"]["Content-Type"].startswith("multipart/form-data; boundary=")
    assert kwargs["data"] is payload
    assert kwargs["timeout"] == 12


def test_error_status_raises_with_response_text(client):
    payload = client.build_payload("a.png", b"x", "image/png")

    with patch("image_upscaler.uploaders.rapidapi.requests.request") as request:
        request.return_value = make_response(403, {"message": "You are not subscribed"})
        with pytest.raises(UpscaleRequestError, match="not subscribed"):
            client.upscale(payload)


def test_non_json_body_raises(client):
    payload = client.build_payload("a.png", b"x", "image/png")

    with patch("image_upscaler.uploaders.rapidapi.requests.request") as request:
        request.return_value = make_response(body="<html>oops</html>")
        with pytest.raises(UpscaleResponseError, match="not valid JSON"):
            client.upscale(payload)


def test_missing_result_field_raises(client):
    payload = client.build_payload("a.png", b"x", "image/png")

    with patch("image_upscaler.uploaders.rapidapi.requests.request") as request:
        request.return_value = make_response(body={"status": "ok"})
        with pytest.raises(UpscaleResponseError, match="result_base64"):
            client.upscale(payload)


def test_client_errors_are_request_exceptions():
    assert issubclass(UpscaleRequestError, requests.RequestException)
    assert issubclass(UpscaleResponseError, requests.RequestException)
