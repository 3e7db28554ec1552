"""Shared pytest fixtures for the pagecapture test suite.

Provides reusable fixtures for:
- Solid-colour and one-pixel-off bitmaps and PNG files
- An in-memory fake surface and surface provider
- A recipe wired to temporary artifact and source directories
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest
from PIL import Image

from pagecapture.config import RecipeConfig, RenderOptions
from pagecapture.tester.bitmap import Bitmap
from pagecapture.tester.display import Point, StaticDisplayInfo
from pagecapture.tester.recipe import CaptureCompareRecipe


# ---------------------------------------------------------------------------
# Bitmap builders
# ---------------------------------------------------------------------------

def _solid_bitmap(
    width: int = 4,
    height: int = 4,
    color: tuple[int, int, int, int] = (200, 30, 30, 255),
    *,
    odd_pixel: Optional[tuple[int, int]] = None,
) -> Bitmap:
    """Solid-colour bitmap, optionally with one pixel set to white."""
    image = Image.new("RGBA", (width, height), color)
    if odd_pixel is not None:
        image.putpixel(odd_pixel, (255, 255, 255, 255))
    return Bitmap.from_image(image)


def _write_png(path: Path, bitmap: Bitmap) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(bitmap.to_png())
    return path


# ---------------------------------------------------------------------------
# Fake surfaces
# ---------------------------------------------------------------------------

class FakeSurface:
    """In-memory surface that records the calls made on it."""

    def __init__(self, options: RenderOptions, capture: Bitmap, position: Point) -> None:
        self.options = options
        self._capture = capture
        self._position = position
        self.calls: list[str] = []
        self.loaded: Any = None
        self.scripts: list[str] = []
        self.closed = False

    async def load(self, source: Any) -> None:
        self.calls.append("load")
        self.loaded = source

    async def show(self) -> None:
        self.calls.append("show")

    async def evaluate_in_page(self, script: str) -> None:
        self.calls.append("evaluate")
        self.scripts.append(script)

    async def capture(self) -> Bitmap:
        self.calls.append("capture")
        return self._capture

    async def position(self) -> Point:
        self.calls.append("position")
        return self._position

    async def close(self) -> None:
        self.closed = True


class FakeSurfaceProvider:
    """Hands out :class:`FakeSurface` objects that capture *capture*."""

    def __init__(self, capture: Bitmap, position: Point = Point(0, 0)) -> None:
        self.capture = capture
        self.position = position
        self.created: list[FakeSurface] = []
        self.teardowns = 0

    async def create_surface(self, options: RenderOptions) -> FakeSurface:
        surface = FakeSurface(options, self.capture, self.position)
        self.created.append(surface)
        return surface

    async def teardown_all(self) -> None:
        self.teardowns += 1
        for surface in self.created:
            await surface.close()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def red_bitmap() -> Bitmap:
    return _solid_bitmap()


@pytest.fixture
def recipe_config(tmp_path: Path) -> RecipeConfig:
    return RecipeConfig(
        artifacts_dir=tmp_path / "artifacts",
        source_root=tmp_path,
        fixtures_dir=tmp_path / "fixtures",
    )


@pytest.fixture
def fake_provider(red_bitmap: Bitmap) -> FakeSurfaceProvider:
    return FakeSurfaceProvider(red_bitmap)


@pytest.fixture
def recipe(fake_provider: FakeSurfaceProvider, recipe_config: RecipeConfig) -> CaptureCompareRecipe:
    return CaptureCompareRecipe(fake_provider, StaticDisplayInfo(1.0), config=recipe_config)


@pytest.fixture
def page_source(tmp_path: Path) -> Path:
    page = tmp_path / "fixtures" / "shape" / "test.html"
    page.parent.mkdir(parents=True, exist_ok=True)
    page.write_text("<html><body><div class='shape'></div></body></html>", encoding="utf-8")
    return page


@pytest.fixture
def make_bitmap():
    """Factory for solid-colour bitmaps, optionally with one white pixel."""
    return _solid_bitmap


@pytest.fixture
def write_png():
    """Write a bitmap as PNG to a path, creating parent directories."""
    return _write_png


@pytest.fixture
def make_provider():
    """Factory for fake surface providers that capture a given bitmap."""
    return FakeSurfaceProvider


@pytest.fixture
def make_surface():
    """Factory for a standalone fake surface."""

    def _make(capture: Bitmap, position: Point = Point(0, 0)) -> FakeSurface:
        return FakeSurface(RenderOptions(), capture, position)

    return _make
