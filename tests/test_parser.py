import pytest

from wordle_cup.utils.exceptions import IllegalGuessCountError, MalformedMessageError, MessageParseError
from wordle_cup.utils.parser import ParsedResult, looks_like_result, parse_result_message


def test_parses_day_and_score():
    assert parse_result_message("Wordle 547 3/6") == ParsedResult(547, 3)


def test_failed_attempt_scores_zero():
    assert parse_result_message("Wordle 547 X/6") == ParsedResult(547, 0)
    assert parse_result_message("Wordle 547 0/6").guess_count == 0


@pytest.mark.parametrize("token,expected", [("1", 1), ("2", 2), ("3", 3), ("4", 4), ("5", 5), ("6", 6)])
def test_every_guess_count(token, expected):
    assert parse_result_message(f"Wordle 1000 {token}/6").guess_count == expected


def test_grid_and_hard_mode_suffix_are_ignored():
    text = "Wordle 812 4/6*\n\n⬛🟨⬛⬛⬛\n🟩🟩⬛⬛⬛\n🟩🟩🟩🟩⬛\n🟩🟩🟩🟩🟩"
    assert parse_result_message(text) == ParsedResult(812, 4)


def test_seven_guesses_is_illegal():
    with pytest.raises(IllegalGuessCountError) as excinfo:
        parse_result_message("Wordle 547 7/6")
    assert excinfo.value.token == "7"


def test_prefix_is_case_sensitive():
    with pytest.raises(MalformedMessageError):
        parse_result_message("wordle 547 3/6")


@pytest.mark.parametrize("text", [
    "Wordle foo 3/6",
    "Wordle 547",
    "Wordle 547 ",
    "Wordle  547 3/6",
    "Wordle",
    "",
])
def test_malformed_messages(text):
    with pytest.raises(MalformedMessageError):
        parse_result_message(text)


@pytest.mark.parametrize("text", [
    "Wordle ٥٤٧ 3/6",  # Arabic-Indic digits
    "Wordle ５４７ 3/6",  # fullwidth digits
])
def test_day_number_must_be_ascii_digits(text):
    with pytest.raises(MalformedMessageError):
        parse_result_message(text)


def test_parse_errors_share_a_base_class():
    for text in ("Wordle 547 Q/6", "nope"):
        with pytest.raises(MessageParseError):
            parse_result_message(text)


def test_looks_like_result():
    assert looks_like_result("Wordle 547 3/6")
    assert looks_like_result("Wordle")
    assert not looks_like_result("wordle 547 3/6")
    assert not looks_like_result("!reset")
