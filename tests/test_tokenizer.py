import pytest

from blocktext.tokenizer import (
    filter_pieces, is_lt_gt, split_into_pieces, strip_brackets,
)


def test_split_alternates_text_and_brackets():
    assert split_into_pieces("say [hi] for (2) secs") == ["say ", "[hi]", " for ", "(2)", " secs"]


def test_split_keeps_nested_groups_whole():
    assert split_into_pieces("if <(x) = [1]> then") == ["if ", "<(x) = [1]>", " then"]


def test_square_brackets_do_not_nest():
    assert split_into_pieces("[a (b v]") == ["[a (b v]"]
    assert split_into_pieces("say [<(]") == ["say ", "[<(]"]


def test_unterminated_bracket_becomes_trailing_piece():
    assert split_into_pieces("say (hello") == ["say ", "(hello"]


@pytest.mark.parametrize("text", [
    "say [hi] for (2) secs",
    "if <<(a) < (b)> and <mouse down?>> then",
    "set [var v] to ((x) + (1",
    "}{)(][><",
    "",
    "when distance < (20)",
])
def test_split_reproduces_input(text):
    assert "".join(split_into_pieces(text)) == text


def test_comparison_between_operands_is_not_a_bracket():
    assert is_lt_gt("[6] < [3]", 4)
    assert is_lt_gt("(a) > (b)", 4)
    assert is_lt_gt("(a)<(b)", 3)


def test_angle_brackets_that_delimit_booleans():
    assert not is_lt_gt("<[6] < [3]>", 0)
    assert not is_lt_gt("a < b", 2)
    assert not is_lt_gt("if <mouse down?> then", 3)
    assert not is_lt_gt("move (10) steps", 5)


def test_ignorelt_phrase_forces_comparison():
    code = "when distance < (20)"
    assert not is_lt_gt(code, 14)
    assert is_lt_gt(code, 14, ["when distance"])
    assert split_into_pieces(code, ["when distance"]) == ["when distance < ", "(20)"]


def test_boolean_comparison_stays_one_piece():
    assert split_into_pieces("<[6] < [3]>") == ["<[6] < [3]>"]
    assert split_into_pieces("[6] < [3]") == ["[6]", " < ", "[3]"]


def test_strip_brackets():
    assert strip_brackets("(abc)") == "abc"
    assert strip_brackets("(abc") == "abc"
    assert strip_brackets("abc") == "abc"
    assert strip_brackets("[x)") == "x)"
    assert strip_brackets("") == ""


def test_filter_pieces():
    spec, args = filter_pieces(["say ", "[hi]", " for ", "(2)", " secs"])
    assert spec == "say _ for _ secs"
    assert args == ["[hi]", "(2)"]
    spec, args = filter_pieces(["go to x:", "(0)", " y:", "(0)"])
    assert spec == "go to x: _ y: _"
