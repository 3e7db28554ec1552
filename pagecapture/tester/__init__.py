"""pagecapture -- Tester module.

Provides the capture-compare recipe: render a page on a surface, capture
it, normalise the capture for the display's pixel density and compare it
byte-for-byte with a reference image.

Public API
----------
.. autoclass:: CaptureCompareRecipe
.. autoclass:: Bitmap
.. autoclass:: ArtifactSink
.. autoclass:: PlaywrightSurfaceProvider
.. autoclass:: DisplayLayout
.. autoclass:: ComparisonOutcome
.. autoclass:: Scenario
"""

from .artifacts import ArtifactSink
from .bitmap import Bitmap
from .comparator import compare_bitmaps
from .display import Display, DisplayInfoProvider, DisplayLayout, Point, StaticDisplayInfo
from .normalizer import capture_normalized, normalize
from .recipe import (
    FRAME_SCRIPT,
    AssertionMismatchError,
    CaptureCompareRecipe,
    EmptyCaptureError,
    MissingReferenceError,
    RecipeError,
    run_recipe,
)
from .results import ComparisonOutcome
from .scenarios import (
    Scenario,
    corner_smoothing_scenarios,
    run_scenario,
    run_scenarios,
    shape_scenarios,
    system_ui_scenario,
)
from .surface import PlaywrightSurface, PlaywrightSurfaceProvider, Surface, SurfaceProvider

__all__ = [
    # Bitmap
    "Bitmap",
    # Display
    "Display",
    "DisplayInfoProvider",
    "DisplayLayout",
    "Point",
    "StaticDisplayInfo",
    # Normalizer
    "normalize",
    "capture_normalized",
    # Comparator
    "compare_bitmaps",
    "ComparisonOutcome",
    # Surfaces
    "Surface",
    "SurfaceProvider",
    "PlaywrightSurface",
    "PlaywrightSurfaceProvider",
    # Artifacts
    "ArtifactSink",
    # Recipe
    "CaptureCompareRecipe",
    "run_recipe",
    "FRAME_SCRIPT",
    "RecipeError",
    "EmptyCaptureError",
    "MissingReferenceError",
    "AssertionMismatchError",
    # Scenarios
    "Scenario",
    "shape_scenarios",
    "system_ui_scenario",
    "corner_smoothing_scenarios",
    "run_scenario",
    "run_scenarios",
]
