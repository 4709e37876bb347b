import pytest

from wildfire_radar.zones import ZONE_LABELS, build_footer_note, zone_label


def test_zone_vocabulary():
    assert list(ZONE_LABELS) == ["0_mile_buffer", "1_mile_buffer", "3_mile_buffer", "5_mile_buffer"]
    assert ZONE_LABELS["5_mile_buffer"] == "5 Mile Buffer"


def test_zone_labels_are_read_only():
    with pytest.raises(TypeError):
        ZONE_LABELS["9_mile_buffer"] = "9 Mile Buffer"


def test_unknown_zone_falls_back_to_id():
    assert zone_label("9_mile_buffer") == "9_mile_buffer"
    assert "9_mile_buffer zone" in build_footer_note("9_mile_buffer")


def test_footer_note_text():
    assert build_footer_note("0_mile_buffer") == (
        "Scores are log-scaled per axis, relative to the highest value in the "
        "Perimeter or Reported Location zone for current wildfires."
    )


def test_footer_note_html():
    note = build_footer_note("1_mile_buffer", html=True)
    assert ">log-scaled</a>" in note
    assert "<strong>1 Mile Buffer zone</strong>" in note
    assert 'rel="noopener noreferrer"' in note
