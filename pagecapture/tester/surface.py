"""Rendering surfaces.

A surface is a windowed rendering target that loads a page, shows it, runs
scripts inside it and captures its current output.  The recipe depends only
on the :class:`Surface` and :class:`SurfaceProvider` protocols; the
Playwright-backed implementation below drives headless Chromium.

The provider doubles as the surface pool: it remembers every surface it
created so that :meth:`SurfaceProvider.teardown_all` can close them between
test cases.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Protocol

from rich.console import Console

from ..config import RecipeConfig, RenderOptions
from .bitmap import Bitmap
from .display import Point, StaticDisplayInfo

console = Console()

_URL_SCHEMES = ("http://", "https://", "file://", "data:", "about:")

# new_context() arguments derived from RenderOptions and the provider.
_RESERVED_CONTEXT_ARGS = frozenset({"viewport", "device_scale_factor"})


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------

class Surface(Protocol):
    async def load(self, source: str | Path) -> None: ...

    async def show(self) -> None: ...

    async def evaluate_in_page(self, script: str) -> Any: ...

    async def capture(self) -> Bitmap: ...

    async def position(self) -> Point: ...

    async def close(self) -> None: ...


class SurfaceProvider(Protocol):
    async def create_surface(self, options: RenderOptions) -> Surface: ...

    async def teardown_all(self) -> None: ...


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _to_url(source: str | Path) -> str:
    """Turn a page source into something ``page.goto`` accepts.

    URLs pass through; anything else is treated as a local file path.
    """
    text = str(source)
    if text.startswith(_URL_SCHEMES):
        return text
    return Path(text).resolve().as_uri()


def _feature_switch(feature: Optional[str], enabled: bool) -> list[str]:
    """Chromium command-line switch toggling a Blink runtime feature."""
    if not feature:
        return []
    action = "enable" if enabled else "disable"
    return [f"--{action}-blink-features={feature}"]


# ---------------------------------------------------------------------------
# Playwright implementation
# ---------------------------------------------------------------------------

class PlaywrightSurface:
    """A single Chromium page owned by its own browser instance."""

    def __init__(self, browser: Any, page: Any) -> None:
        self._browser = browser
        self._page = page
        self._closed = False

    async def load(self, source: str | Path) -> None:
        await self._page.goto(_to_url(source), wait_until="load")

    async def show(self) -> None:
        await self._page.bring_to_front()

    async def evaluate_in_page(self, script: str) -> Any:
        return await self._page.evaluate(script)

    async def capture(self) -> Bitmap:
        """Screenshot the viewport.  A closed page captures as empty."""
        if self._closed or self._page.is_closed():
            return Bitmap.empty()
        png = await self._page.screenshot(type="png")
        return Bitmap.from_png(png)

    async def position(self) -> Point:
        x, y = await self._page.evaluate("() => [window.screenX, window.screenY]")
        return Point(int(x), int(y))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._browser.close()

    @property
    def closed(self) -> bool:
        return self._closed


class PlaywrightSurfaceProvider:
    """Creates :class:`PlaywrightSurface` instances and tears them down.

    Parameters
    ----------
    device_scale_factor:
        Pixel density reported to pages; also what :attr:`displays` reports.
    blink_feature:
        Blink runtime feature switched on or off by
        ``RenderOptions.feature_enabled``.  When ``None`` the option has no
        effect on the browser.
    headless:
        Launch Chromium without a visible window.
    playwright:
        An already-started Playwright instance.  Started lazily when omitted.
    """

    def __init__(
        self,
        *,
        device_scale_factor: float = 1.0,
        blink_feature: Optional[str] = None,
        headless: bool = True,
        playwright: Any = None,
    ) -> None:
        self.device_scale_factor = device_scale_factor
        self.blink_feature = blink_feature
        self.headless = headless
        self._playwright = playwright
        self._owns_playwright = playwright is None
        self._surfaces: list[PlaywrightSurface] = []

    @classmethod
    def from_config(cls, config: RecipeConfig, **kwargs: Any) -> "PlaywrightSurfaceProvider":
        return cls(
            device_scale_factor=config.device_scale_factor,
            blink_feature=config.blink_feature,
            **kwargs,
        )

    @property
    def displays(self) -> StaticDisplayInfo:
        return StaticDisplayInfo(self.device_scale_factor)

    @property
    def surfaces(self) -> list[PlaywrightSurface]:
        return list(self._surfaces)

    # -- Public API ----------------------------------------------------------

    async def create_surface(self, options: RenderOptions) -> PlaywrightSurface:
        """Launch a browser and open a page sized by *options*.

        Raises ``ValueError`` when a passthrough option collides with a
        context argument the provider sets itself.  If context or page
        creation fails, the browser is closed before the error propagates.
        """
        extra = options.passthrough()
        reserved = sorted(_RESERVED_CONTEXT_ARGS.intersection(extra))
        if reserved:
            raise ValueError(
                f"Render options may not override {', '.join(reserved)}; "
                "use width/height and the provider's device_scale_factor instead"
            )

        playwright = await self._ensure_playwright()
        browser = await playwright.chromium.launch(
            headless=self.headless,
            args=_feature_switch(self.blink_feature, options.feature_enabled),
        )
        try:
            context = await browser.new_context(
                viewport={"width": options.width, "height": options.height},
                device_scale_factor=self.device_scale_factor,
                **extra,
            )
            page = await context.new_page()
        except BaseException:
            await browser.close()
            raise
        surface = PlaywrightSurface(browser, page)
        self._surfaces.append(surface)
        return surface

    async def teardown_all(self) -> None:
        """Close every surface created so far."""
        surfaces, self._surfaces = self._surfaces, []
        for surface in surfaces:
            await surface.close()
        if surfaces:
            console.print(f"[dim]Closed {len(surfaces)} surface(s)[/dim]")

    async def stop(self) -> None:
        """Tear down all surfaces and stop Playwright if this provider started it."""
        await self.teardown_all()
        if self._playwright is not None and self._owns_playwright:
            await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self) -> "PlaywrightSurfaceProvider":
        await self._ensure_playwright()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    # -- Internal ------------------------------------------------------------

    async def _ensure_playwright(self) -> Any:
        if self._playwright is None:
            from playwright.async_api import async_playwright

            self._playwright = await async_playwright().start()
            self._owns_playwright = True
        return self._playwright
