"""Tests for media fragment parsing."""

import pytest

from iiifmedia.fragments import (
    has_temporal,
    parse_fragment_uri,
    parse_spatial,
    parse_temporal,
    split_fragment,
)
from iiifmedia.models import ParsedTarget, SpatialFragment, TemporalFragment

CANVAS = "https://example.org/canvas"


class TestSplitFragment:
    def test_with_fragment(self):
        assert split_fragment(f"{CANVAS}#t=10,20") == (CANVAS, "t=10,20")

    def test_without_fragment(self):
        assert split_fragment(CANVAS) == (CANVAS, None)

    def test_empty_fragment(self):
        assert split_fragment(f"{CANVAS}#") == (CANVAS, "")

    def test_splits_at_first_hash(self):
        assert split_fragment("a#b#c") == ("a", "b#c")


class TestParseTemporal:
    def test_start_and_end(self):
        assert parse_temporal("t=10,20") == TemporalFragment(start=10.0, end=20.0)

    def test_start_only(self):
        assert parse_temporal("t=10") == TemporalFragment(start=10.0)

    def test_empty_start_defaults_to_zero(self):
        assert parse_temporal("t=,20") == TemporalFragment(start=0.0, end=20.0)

    def test_floats(self):
        assert parse_temporal("t=10.5,25.75") == TemporalFragment(start=10.5, end=25.75)

    def test_zero_start(self):
        assert parse_temporal("t=0,30") == TemporalFragment(start=0.0, end=30.0)

    @pytest.mark.parametrize("fragment", ["t=", "t=invalid", "t=-5,20", "t=20,10", "t=10,10", "t=.", "t=1.2.3"])
    def test_invalid(self, fragment):
        assert parse_temporal(fragment) is None

    def test_negative_end_reads_as_open_ended(self):
        assert parse_temporal("t=5,-20") == TemporalFragment(start=5.0, end=None)

    def test_trailing_comma_is_open_ended(self):
        assert parse_temporal("t=5,") == TemporalFragment(start=5.0)

    def test_time_format_prefix_not_recognised(self):
        assert parse_temporal("t=npt:10,20") is None

    def test_none_and_empty(self):
        assert parse_temporal(None) is None
        assert parse_temporal("") is None

    def test_found_after_other_dimension(self):
        assert parse_temporal("xywh=0,0,10,10&t=3,4") == TemporalFragment(start=3.0, end=4.0)

    def test_ignores_t_inside_other_names(self):
        assert parse_temporal("foot=3,4") is None


class TestParseSpatial:
    def test_pixel_default(self):
        assert parse_spatial("xywh=100,200,50,75") == SpatialFragment(
            x=100.0, y=200.0, width=50.0, height=75.0, unit="pixel"
        )

    def test_explicit_pixel(self):
        assert parse_spatial("xywh=pixel:1,2,3,4").unit == "pixel"

    def test_percent(self):
        assert parse_spatial("xywh=percent:10,20,30,40") == SpatialFragment(
            x=10.0, y=20.0, width=30.0, height=40.0, unit="percent"
        )

    def test_floats(self):
        region = parse_spatial("xywh=10.5,20.5,30.5,40.5")
        assert (region.x, region.y, region.width, region.height) == (10.5, 20.5, 30.5, 40.5)

    def test_percent_region_overflowing_canvas(self):
        assert parse_spatial("xywh=percent:80,80,30,30") is None

    def test_percent_value_over_hundred(self):
        assert parse_spatial("xywh=percent:0,0,101,10") is None

    def test_percent_exactly_filling_canvas(self):
        assert parse_spatial("xywh=percent:0,0,100,100") is not None

    def test_large_pixel_values_allowed(self):
        assert parse_spatial("xywh=4000,3000,500,500") is not None

    @pytest.mark.parametrize("fragment", ["xywh=100,200", "xywh=a,b,c,d", "xywh=-1,0,10,10", "xywh=1.2.3,0,1,1", ""])
    def test_invalid(self, fragment):
        assert parse_spatial(fragment) is None


class TestHasTemporal:
    def test_detects_token_even_if_invalid(self):
        assert has_temporal("t=invalid") is True

    def test_no_token(self):
        assert has_temporal("xywh=0,0,1,1") is False
        assert has_temporal(None) is False


class TestParseFragmentUri:
    def test_temporal(self):
        result = parse_fragment_uri(f"{CANVAS}#t=10,20")
        assert result == ParsedTarget(source=CANVAS, temporal=TemporalFragment(10.0, 20.0))

    def test_no_fragment(self):
        assert parse_fragment_uri(CANVAS) == ParsedTarget(source=CANVAS)

    def test_empty_fragment(self):
        result = parse_fragment_uri(f"{CANVAS}#")
        assert result.source == CANVAS
        assert result.temporal is None
        assert result.spatial is None

    def test_combined(self):
        result = parse_fragment_uri(f"{CANVAS}#t=10,20&xywh=100,200,50,75")
        assert result.temporal == TemporalFragment(10.0, 20.0)
        assert result.spatial == SpatialFragment(100.0, 200.0, 50.0, 75.0)

    def test_combined_reverse_order(self):
        result = parse_fragment_uri(f"{CANVAS}#xywh=100,200,50,75&t=10,20")
        assert result.temporal == TemporalFragment(10.0, 20.0)
        assert result.spatial == SpatialFragment(100.0, 200.0, 50.0, 75.0)

    def test_invalid_temporal_keeps_valid_spatial(self):
        result = parse_fragment_uri(f"{CANVAS}#t=20,10&xywh=1,2,3,4")
        assert result.temporal is None
        assert result.spatial is not None

    def test_to_dict_omits_absent_parts(self):
        assert parse_fragment_uri(f"{CANVAS}#t=10").to_dict() == {
            "source": CANVAS,
            "temporal": {"start": 10.0},
        }
