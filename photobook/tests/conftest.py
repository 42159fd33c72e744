"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from photobook.api.main import create_app
from photobook.engine import PhotoMetadata, build_photo_metadata


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def make_photos():
    """Factory for print-safe landscape photos photo-1..photo-N in sort order."""

    def _make(count: int, width: int = 4000, height: int = 3000, prefix: str = "photo") -> list[PhotoMetadata]:
        return [
            build_photo_metadata(f"{prefix}-{i}", width, height, sort_order=i)
            for i in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def dated_photos() -> list[PhotoMetadata]:
    """Three photos from one day followed by two from the next."""
    days = [datetime(2024, 7, 1, 9), datetime(2024, 7, 1, 12), datetime(2024, 7, 1, 18),
            datetime(2024, 7, 2, 10), datetime(2024, 7, 2, 15)]
    return [
        build_photo_metadata(f"photo-{i}", 4000, 3000, sort_order=i, taken_at=taken_at)
        for i, taken_at in enumerate(days, start=1)
    ]


@pytest.fixture
def sample_photo_payload() -> list[dict]:
    """Four photos as JSON, the way the editor sends them."""
    return [
        {
            "id": f"photo-{i}",
            "width": 4000,
            "height": 3000,
            "aspect_ratio": 4000 / 3000,
            "orientation": "landscape",
            "sort_order": i,
            "is_print_safe": True,
        }
        for i in range(1, 5)
    ]
