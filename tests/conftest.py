"""Shared pytest fixtures for thumbstudio tests."""

from __future__ import annotations

import io
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from thumbstudio.studio import Studio
from thumbstudio.thumbnail_engine.generator import GeneratedImage, GenerationResult


def make_png(color=(255, 255, 255), size=(1280, 720)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, "PNG")
    return buf.getvalue()


def decode_png(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data)).convert("RGB")


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def white_png() -> bytes:
    return make_png((255, 255, 255))


@pytest.fixture
def black_png() -> bytes:
    return make_png((0, 0, 0))


@pytest.fixture
def square_png() -> bytes:
    """Non 16:9 source to exercise the cover fit."""
    return make_png((200, 40, 40), size=(512, 512))


# ============================================================================
# Gemini Fixtures
# ============================================================================


def text_response(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(text=text, parts=[SimpleNamespace(text=text, inline_data=None)])


def image_response(data: bytes | None, mime_type: str = "image/png") -> SimpleNamespace:
    if data is None:
        return SimpleNamespace(text="Sorry, I can't do that.", parts=[
            SimpleNamespace(text="Sorry, I can't do that.", inline_data=None),
        ])
    return SimpleNamespace(text=None, parts=[
        SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ])


@pytest.fixture
def genai_client() -> SimpleNamespace:
    """Stand-in for genai.Client exposing client.aio.models.generate_content."""
    models = SimpleNamespace(generate_content=AsyncMock())
    return SimpleNamespace(aio=SimpleNamespace(models=models))


# ============================================================================
# Studio Fixtures
# ============================================================================


@pytest.fixture
def fake_client(black_png: bytes) -> SimpleNamespace:
    """GenerationClient double with canned results."""
    result = GenerationResult(image=GeneratedImage(black_png), hook="INSANE SETUP", font="bebas")
    return SimpleNamespace(
        generate=AsyncMock(return_value=result),
        edit=AsyncMock(return_value=GeneratedImage(make_png((10, 20, 30)))),
    )


@pytest.fixture
def studio(fake_client, tmp_path) -> Studio:
    return Studio(fake_client, output_dir=tmp_path)
