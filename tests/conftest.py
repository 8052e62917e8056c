"""Shared fixtures for the image upscaler tests."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable

import pytest
from rich.console import Console

from image_upscaler.models.upload import UploadCandidate


class FakeUploader:
    """Stands in for RapidApiUpscaler, answering per file name."""

    def __init__(self, responses: dict[str, str | BaseException] | None = None) -> None:
        self.responses = responses or {}
        self.payloads: list[dict[str, Any]] = []

    def build_payload(self, name, content, media_type, scale=None):
        payload = {"name": name, "content": content, "media_type": media_type, "scale": scale}
        self.payloads.append(payload)
        return payload

    def upscale(self, payload):
        response = self.responses.get(payload["name"], f"UPSCALED-{payload['name']}")
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., UploadCandidate]:
    """Write a file and return a candidate for it."""

    def _make(name: str, content: bytes = b"\x89PNG-data", media_type: str = "image/png") -> UploadCandidate:
        path = tmp_path / name
        _ = path.write_bytes(content)
        return UploadCandidate(name=name, size=len(content), media_type=media_type, path=path)

    return _make
