import pytest

from citation_restyler.normalization import (
    EN_DASH,
    collapse_whitespace,
    en_dash_ranges,
    ensure_terminal_period,
    join_nonempty,
    strip_trailing_period,
    strip_wrapping_braces,
)


def test_collapse_whitespace():
    assert collapse_whitespace("  Deep\r\n   learning\tfor\n\nall ") == "Deep learning for all"
    assert collapse_whitespace(None) == ""


@pytest.mark.parametrize(
    "name, expected",
    [
        ("{Doe}, K.", "Doe, K."),
        ("J. {Doe}", "J. Doe"),
        ("{{IEEE}}", "IEEE"),
        ("Jos{\\'e} Smith", "Jos{\\'e} Smith"),
        ("Smith, Jos{\\'e}", "Smith, Jos{\\'e}"),
        ("Garc{\\'i}a, {Jos{\\'e}}", "Garc{\\'i}a, {Jos{\\'e}}"),
        ("{Doe, K.", "Doe, K."),
        ("  Smith, J. ", "Smith, J."),
    ],
)
def test_strip_wrapping_braces(name, expected):
    assert strip_wrapping_braces(name) == expected


@pytest.mark.parametrize(
    "pages, expected",
    [
        ("436-444", f"436{EN_DASH}444"),
        ("436--444", f"436{EN_DASH}444"),
        ("436 -- 444", f"436{EN_DASH}444"),
        ("12", "12"),
    ],
)
def test_en_dash_ranges(pages, expected):
    assert en_dash_ranges(pages) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", ""),
        ("2015", "2015."),
        ("pp. 1–2.", "pp. 1–2."),
        ("ends twice..", "ends twice."),
        ("in Nature, ", "in Nature."),
        ("n.d.", "n.d."),
    ],
)
def test_ensure_terminal_period(value, expected):
    assert ensure_terminal_period(value) == expected


def test_strip_trailing_period_and_join():
    assert strip_trailing_period("Proc. IEEE.") == "Proc. IEEE"
    assert strip_trailing_period("Nature") == "Nature"
    assert join_nonempty(["a", "", None, "b"]) == "a b"
