"""Capture-compare recipe.

The page is rendered, captured as an image, then compared to an expected
result image::

    Init -> Rendered -> Captured -> EmptyCapture
                                 -> Compared -> Match
                                             -> Mismatch

Every failure is terminal and raised straight to the caller.  There are no
retries: a flaky visual test should surface as a failure.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import RecipeConfig, RenderOptions
from .artifacts import ArtifactSink
from .bitmap import Bitmap
from .comparator import compare_bitmaps
from .display import DisplayInfoProvider
from .normalizer import capture_normalized
from .results import ComparisonOutcome
from .surface import Surface, SurfaceProvider

console = Console()

# Resolves once the page has completed one rendering pass.
FRAME_SCRIPT = "new Promise((resolve) => { requestAnimationFrame(() => resolve()); })"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RecipeError(AssertionError):
    """Base class for recipe failures; test runners report these as failures."""


class EmptyCaptureError(RecipeError):
    """The capture pipeline produced no pixels."""

    def __init__(self, message: str = "Failed to capture page image") -> None:
        super().__init__(message)


class MissingReferenceError(RecipeError):
    """The reference image is absent or unreadable."""

    def __init__(self, reference_path: str | Path) -> None:
        self.reference_path = Path(reference_path)
        super().__init__(f"Failed to read expected reference image: {reference_path}")


class AssertionMismatchError(RecipeError):
    """The capture differs from the reference image."""

    def __init__(
        self,
        artifact_name: str,
        reference_path: str,
        outcome: Optional[ComparisonOutcome] = None,
    ) -> None:
        self.artifact_name = artifact_name
        self.reference_path = reference_path
        self.outcome = outcome
        super().__init__(
            "Actual image did not match expected reference image. "
            f'Actual: "{artifact_name}" in artifacts, '
            f'Expected: "{reference_path}" in source'
        )


# ---------------------------------------------------------------------------
# Recipe
# ---------------------------------------------------------------------------


class CaptureCompareRecipe:
    """Render a page, capture it and compare it with a reference image.

    Parameters
    ----------
    provider:
        Creates surfaces; also the pool torn down between invocations.
    displays:
        Resolves the display scale used to normalise captures.
    sink:
        Destination for mismatch artifacts.  Defaults to an
        :class:`ArtifactSink` on ``config.artifacts_dir``.
    config:
        Recipe settings.  Defaults to ``RecipeConfig()``.
    """

    def __init__(
        self,
        provider: SurfaceProvider,
        displays: DisplayInfoProvider,
        *,
        sink: Optional[ArtifactSink] = None,
        config: Optional[RecipeConfig] = None,
    ) -> None:
        self.provider = provider
        self.displays = displays
        self.config = config or RecipeConfig()
        self.sink = sink or ArtifactSink(self.config.artifacts_dir)

    # -- Public API ----------------------------------------------------------

    async def run(
        self,
        page_source: str | Path,
        expected_image_path: str | Path,
        artifact_label: str,
        options: Optional[RenderOptions] = None,
    ) -> ComparisonOutcome:
        """Execute one capture-compare attempt.

        Returns the matching outcome on success.

        Raises:
            EmptyCaptureError: the capture was empty.
            MissingReferenceError: the reference image could not be read.
            AssertionMismatchError: the capture differs; the actual image has
                been written to the artifact sink.
            asyncio.TimeoutError: ``config.frame_timeout`` elapsed before the
                page rendered a frame.
        """
        options = options or self.config.render_options()

        surface = await self._render(page_source, options)
        actual = await capture_normalized(surface, self.displays)
        if actual.is_empty:
            raise EmptyCaptureError()

        # Pillow decode/encode runs off the event loop.
        loop = asyncio.get_running_loop()
        expected = await loop.run_in_executor(None, Bitmap.load_from_path, expected_image_path)
        if expected.is_empty:
            raise MissingReferenceError(expected_image_path)

        outcome = compare_bitmaps(actual, expected)
        if outcome.matched:
            console.print(f"[green]{artifact_label}: {outcome.description}[/green]")
            return outcome

        artifact_name = self.config.artifact_name(artifact_label)
        png = await loop.run_in_executor(None, actual.to_png)
        await self.sink.persist(artifact_name, png)
        console.print(f"[red]{artifact_label}: {outcome.description}[/red]")
        raise AssertionMismatchError(
            artifact_name,
            self.config.relative_to_source(expected_image_path),
            outcome,
        )

    # -- Internal ------------------------------------------------------------

    async def _render(self, page_source: str | Path, options: RenderOptions) -> Surface:
        """Create, load and show a surface, then wait for one rendered frame."""
        surface = await self.provider.create_surface(options)
        await surface.load(page_source)
        await surface.show()

        frame = surface.evaluate_in_page(FRAME_SCRIPT)
        if self.config.frame_timeout is None:
            await frame
        else:
            await asyncio.wait_for(frame, timeout=self.config.frame_timeout)
        return surface


async def run_recipe(
    page_source: str | Path,
    expected_image_path: str | Path,
    artifact_label: str,
    options: Optional[RenderOptions] = None,
    *,
    provider: SurfaceProvider,
    displays: DisplayInfoProvider,
    config: Optional[RecipeConfig] = None,
    sink: Optional[ArtifactSink] = None,
) -> ComparisonOutcome:
    """Functional form of :meth:`CaptureCompareRecipe.run`."""
    recipe = CaptureCompareRecipe(provider, displays, sink=sink, config=config)
    return await recipe.run(page_source, expected_image_path, artifact_label, options)
