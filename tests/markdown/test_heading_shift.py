import pytest

from mdpanel.markdown.normalize import clamp_level, shift_heading_levels


def test_shift_is_clamped_at_six():
    assert shift_heading_levels("##### Deep\n", 3) == "###### Deep\n"


def test_negative_shift_is_clamped_at_one():
    assert shift_heading_levels("## Two\n### Three\n", -5) == "# Two\n# Three\n"


def test_shift_keeps_other_lines_and_line_endings():
    text = "# T\r\n\r\nbody #1\r\n## S\r\n"
    assert shift_heading_levels(text, 1) == "## T\r\n\r\nbody #1\r\n### S\r\n"


def test_shift_skips_fenced_blocks():
    text = "# T\n```\n# comment\n```\n"
    assert shift_heading_levels(text, 2) == "### T\n```\n# comment\n```\n"


def test_zero_offset_is_identity():
    text = "# T\n"
    assert shift_heading_levels(text, 0) is text


@pytest.mark.parametrize("level, expected", [(-3, 1), (0, 1), (1, 1), (4, 4), (6, 6), (9, 6)])
def test_clamp_level(level, expected):
    assert clamp_level(level) == expected


def test_indented_heading_is_shifted_and_keeps_indent():
    assert shift_heading_levels("   ## X\n    ## code\n", 1) == "   ### X\n    ## code\n"
