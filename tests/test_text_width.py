from util.text_width import display_width, ellipsize, pad_display, trim_display


def test_wide_characters_count_double():
    assert display_width("abc") == 3
    assert display_width("日本") == 4
    assert display_width("") == 0


def test_trim_never_splits_wide_character():
    assert trim_display("日本語", 5) == "日本"
    assert trim_display("hello", 3) == "hel"


def test_pad_to_exact_width():
    assert pad_display("ab", 4) == "ab  "
    assert display_width(pad_display("日本語", 5)) == 5


def test_ellipsize():
    assert ellipsize("short", 10) == "short"
    assert ellipsize("a long line", 6) == "a lon…"
    assert ellipsize("anything", 0) == ""
