"""Unit tests for display providers (pagecapture.tester.display)."""

from __future__ import annotations

import pytest

from pagecapture.tester.display import Display, DisplayLayout, Point, StaticDisplayInfo


LEFT = Display(scale_factor=1.0, x=0, y=0, width=1920, height=1080)
RIGHT = Display(scale_factor=2.0, x=1920, y=0, width=1440, height=900)


class TestDisplay:
    @pytest.mark.unit
    def test_non_positive_scale_rejected(self):
        with pytest.raises(ValueError, match="positive"):
            Display(scale_factor=0)

    @pytest.mark.unit
    def test_contains_is_half_open(self):
        assert LEFT.contains(Point(0, 0))
        assert LEFT.contains(Point(1919, 1079))
        assert not LEFT.contains(Point(1920, 0))

    @pytest.mark.unit
    def test_distance_inside_is_zero(self):
        assert RIGHT.squared_distance_to(Point(2000, 100)) == 0

    @pytest.mark.unit
    def test_distance_outside(self):
        assert RIGHT.squared_distance_to(Point(2000, 903)) == 16


class TestStaticDisplayInfo:
    @pytest.mark.unit
    def test_any_point_resolves_to_same_display(self):
        info = StaticDisplayInfo(2.0)
        assert info.nearest_display(Point(-500, 9000)).scale_factor == 2.0
        assert info.nearest_display(Point(0, 0)) is info.display

    @pytest.mark.unit
    def test_default_is_unscaled(self):
        assert StaticDisplayInfo().nearest_display(Point(0, 0)).scale_factor == 1.0


class TestDisplayLayout:
    @pytest.mark.unit
    def test_requires_a_display(self):
        with pytest.raises(ValueError):
            DisplayLayout([])

    @pytest.mark.unit
    def test_point_inside_display(self):
        layout = DisplayLayout([LEFT, RIGHT])
        assert layout.nearest_display(Point(2500, 300)) is RIGHT
        assert layout.nearest_display(Point(100, 100)) is LEFT

    @pytest.mark.unit
    def test_point_outside_all_displays_picks_nearest(self):
        layout = DisplayLayout([LEFT, RIGHT])
        # Below the shorter right-hand display, closer to it than to the left one.
        assert layout.nearest_display(Point(3000, 1000)) is RIGHT
        assert layout.nearest_display(Point(-50, 500)) is LEFT

    @pytest.mark.unit
    def test_tie_goes_to_first_listed(self):
        top = Display(scale_factor=1.0, x=0, y=0, width=100, height=100)
        bottom = Display(scale_factor=2.0, x=0, y=109, width=100, height=100)
        # y=104 is 5 pixels from both displays.
        assert DisplayLayout([top, bottom]).nearest_display(Point(50, 104)) is top
        assert DisplayLayout([bottom, top]).nearest_display(Point(50, 104)) is bottom
