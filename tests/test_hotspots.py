"""
Tests for hotspot annotation.
"""

from redoscope.hotspots import MarkerStyles, render_hotspots
from redoscope.models import HotspotSpan


def spans(*items):
    return [HotspotSpan(start=s, end=e, temperature=t) for s, e, t in items]


def test_no_spans_returns_source():
    assert render_hotspots("^(a|a)*$", []) == "^(a|a)*$"


def test_heat_spans_are_wrapped():
    result = render_hotspots("^(a|a)*$", spans((2, 3, "heat"), (4, 5, "heat")))
    assert result == "^(**a**|**a**)*$"


def test_normal_spans_use_other_markers():
    result = render_hotspots("^(a|a)*$", spans((2, 3, "normal"), (4, 5, "heat")))
    assert result == "^(_a_|**a**)*$"


def test_unrecognized_temperature_uses_other_markers():
    assert render_hotspots("abc", spans((1, 2, "warm"))) == "a_b_c"


def test_touching_spans():
    assert render_hotspots("abcd", spans((0, 2, "heat"), (2, 4, "normal"))) == "**ab**_cd_"


def test_span_at_end_has_no_trailing_text():
    assert render_hotspots("abc", spans((1, 3, "heat"))) == "a**bc**"


def test_empty_span():
    assert render_hotspots("abc", spans((1, 1, "heat"))) == "a****bc"


def test_custom_styles():
    styles = MarkerStyles(heat=("[", "]"), other=("<", ">"))
    assert render_hotspots("abcde", spans((0, 1, "heat"), (3, 4, "normal")), styles) == "[a]bc<d>e"


def test_stripping_markers_restores_source():
    source = "^(\\w+\\s?)*$"
    result = render_hotspots(source, spans((2, 5, "heat"), (5, 8, "normal")))
    assert result.replace("**", "").replace("_", "") == source
