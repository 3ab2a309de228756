"""Tests for marker classification."""

import pytest

from jpeg_inspector.core.markers import (
    FRAME_KINDS,
    FRAME_MARKERS,
    RESTART_MARKERS,
    Marker,
    classify,
    is_frame_marker,
    marker_name,
)


class TestClassify:

    def test_known_code_is_enum_member(self):
        assert classify(0xDA) is Marker.SOS

    def test_unknown_code_stays_int(self):
        assert classify(0xF3) == 0xF3
        assert not isinstance(classify(0xF3), Marker)

    def test_names(self):
        assert marker_name(0xC2) == "SOF2"
        assert marker_name(0xF3) == "0xF3"


class TestFrameMarkers:

    def test_thirteen_variants(self):
        assert len(FRAME_MARKERS) == 13
        assert set(FRAME_KINDS) == set(FRAME_MARKERS)

    @pytest.mark.parametrize("code", [0xC4, 0xC8, 0xCC])
    def test_table_and_reserved_codes_are_not_frames(self, code):
        assert not is_frame_marker(code)

    def test_restart_markers(self):
        assert sorted(RESTART_MARKERS) == list(range(0xD0, 0xD8))
