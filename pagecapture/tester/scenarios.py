"""Corner-smoothing visual scenarios.

Fixture layout under ``fixtures_root``::

    shape/test.html
    shape/expected-true.png
    shape/expected-false.png
    system-ui-keyword/test.html
    system-ui-keyword/expected-<platform>.png

Scenarios always run one at a time; every run ends by tearing down all
surfaces so the next scenario starts from a clean window state.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..config import RenderOptions
from .recipe import CaptureCompareRecipe
from .results import ComparisonOutcome


@dataclass(frozen=True)
class Scenario:
    """One page, one reference image, one artifact label."""

    name: str
    page_source: Path
    expected_image: Path
    artifact_label: str
    options: RenderOptions = field(default_factory=RenderOptions)


def shape_scenarios(fixtures_root: str | Path) -> list[Scenario]:
    """The shape page with the feature switched on and off."""
    root = Path(fixtures_root) / "shape"
    scenarios: list[Scenario] = []
    for available in (True, False):
        flag = str(available).lower()
        scenarios.append(
            Scenario(
                name=f"matches the reference with web preference = {flag}",
                page_source=root / "test.html",
                expected_image=root / f"expected-{flag}.png",
                artifact_label=f"shape-{flag}",
                options=RenderOptions(feature_enabled=available),
            )
        )
    return scenarios


def system_ui_scenario(fixtures_root: str | Path, platform: str = sys.platform) -> Scenario:
    """The system-ui keyword page, with one reference image per platform."""
    root = Path(fixtures_root) / "system-ui-keyword"
    return Scenario(
        name=f"matches the reference for platform = {platform}",
        page_source=root / "test.html",
        expected_image=root / f"expected-{platform}.png",
        artifact_label=f"system-ui-{platform}",
    )


def corner_smoothing_scenarios(
    fixtures_root: str | Path,
    platform: str = sys.platform,
) -> list[Scenario]:
    return [*shape_scenarios(fixtures_root), system_ui_scenario(fixtures_root, platform)]


async def run_scenario(recipe: CaptureCompareRecipe, scenario: Scenario) -> ComparisonOutcome:
    """Run *scenario* and tear down its surfaces whatever the result."""
    options = scenario.options.model_copy(
        update={"width": recipe.config.window_width, "height": recipe.config.window_height}
    )
    try:
        return await recipe.run(
            scenario.page_source,
            scenario.expected_image,
            scenario.artifact_label,
            options,
        )
    finally:
        await recipe.provider.teardown_all()


async def run_scenarios(
    recipe: CaptureCompareRecipe,
    scenarios: list[Scenario],
) -> list[ComparisonOutcome]:
    """Run *scenarios* sequentially; the first failure propagates."""
    outcomes: list[ComparisonOutcome] = []
    for scenario in scenarios:
        outcomes.append(await run_scenario(recipe, scenario))
    return outcomes
