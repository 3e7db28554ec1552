"""pagecapture configuration.

Typed configuration for the capture-compare recipe and the render options
handed to surface providers.  All settings use Pydantic v2 models so they are
validated at construction time and can be serialised to/from JSON or read
from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RenderOptions(BaseModel):
    """Options for constructing a rendering surface.

    ``feature_enabled`` toggles the feature under test.  Any additional
    fields are accepted and passed through untouched to the surface provider.
    """

    model_config = ConfigDict(extra="allow")

    feature_enabled: bool = Field(default=True)
    width: int = Field(default=800, ge=1)
    height: int = Field(default=600, ge=1)

    def passthrough(self) -> dict[str, Any]:
        """Return the extra fields that the recipe itself does not interpret."""
        return dict(self.model_extra or {})


class RecipeConfig(BaseModel):
    """Settings for :class:`~pagecapture.tester.recipe.CaptureCompareRecipe`.

    Instances are usually created once per test session (directly or via
    :meth:`from_env`) and shared by every recipe invocation.
    """

    window_width: int = Field(default=800, ge=1)
    window_height: int = Field(default=600, ge=1)
    artifacts_dir: Path = Field(default=Path("./artifacts"))
    source_root: Path = Field(default=Path("."))
    fixtures_dir: Path = Field(default=Path("./fixtures/api/corner-smoothing"))
    artifact_prefix: str = Field(default="corner-rounding-expected-")

    # Bounded wait for the render-frame signal.  None waits forever.
    frame_timeout: Optional[float] = Field(default=None, gt=0)

    # Playwright provider settings.
    device_scale_factor: float = Field(default=1.0, gt=0)
    blink_feature: Optional[str] = Field(
        default=None,
        description="Blink runtime feature toggled by RenderOptions.feature_enabled",
    )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def artifact_name(self, label: str) -> str:
        """File name used when persisting the actual capture for *label*."""
        return f"{self.artifact_prefix}{label}.png"

    def relative_to_source(self, path: str | Path) -> str:
        """Express *path* relative to :attr:`source_root` for failure messages."""
        return os.path.relpath(Path(path).resolve(), self.source_root.resolve())

    def render_options(self, *, feature_enabled: bool = True, **extra: Any) -> RenderOptions:
        """Build :class:`RenderOptions` sized to the configured window."""
        return RenderOptions(
            feature_enabled=feature_enabled,
            width=self.window_width,
            height=self.window_height,
            **extra,
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "RecipeConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "RecipeConfig":
        """Build a ``RecipeConfig`` from environment variables.

        Recognised variables (all optional):
            PAGECAPTURE_ARTIFACT_DIR, PAGECAPTURE_SOURCE_ROOT,
            PAGECAPTURE_FIXTURES_DIR, PAGECAPTURE_FRAME_TIMEOUT,
            PAGECAPTURE_SCALE_FACTOR, PAGECAPTURE_BLINK_FEATURE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PAGECAPTURE_ARTIFACT_DIR"):
            kwargs["artifacts_dir"] = Path(os.environ["PAGECAPTURE_ARTIFACT_DIR"])
        if os.environ.get("PAGECAPTURE_SOURCE_ROOT"):
            kwargs["source_root"] = Path(os.environ["PAGECAPTURE_SOURCE_ROOT"])
        if os.environ.get("PAGECAPTURE_FIXTURES_DIR"):
            kwargs["fixtures_dir"] = Path(os.environ["PAGECAPTURE_FIXTURES_DIR"])
        if os.environ.get("PAGECAPTURE_FRAME_TIMEOUT"):
            kwargs["frame_timeout"] = float(os.environ["PAGECAPTURE_FRAME_TIMEOUT"])
        if os.environ.get("PAGECAPTURE_SCALE_FACTOR"):
            kwargs["device_scale_factor"] = float(os.environ["PAGECAPTURE_SCALE_FACTOR"])
        if os.environ.get("PAGECAPTURE_BLINK_FEATURE"):
            kwargs["blink_feature"] = os.environ["PAGECAPTURE_BLINK_FEATURE"]
        return cls(**kwargs)
