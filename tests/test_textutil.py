import pytest

from gsmconsole.textutil import subtract


def test_parent_directory_from_bin():
    path = "C:/gsm/bin"
    assert subtract(path, 0, path.rindex("/")) == "C:/gsm"


def test_whole_string():
    text = "héllo wörld"
    assert subtract(text, 0, len(text)) == text


def test_end_is_clamped():
    text = "abcdef"
    assert subtract(text, 2, 1000) == text[2:]


def test_counts_characters_not_bytes():
    text = "日本語テキスト"
    result = subtract(text, 1, 2)
    assert len(result) == 2
    assert text.startswith(result, 1)


def test_zero_length_is_empty():
    assert subtract("abc", 1, 0) == ""


def test_start_beyond_end_raises():
    with pytest.raises(IndexError):
        subtract("abc", 5, 1)


def test_negative_start_raises():
    with pytest.raises(IndexError):
        subtract("abc", -1, 2)