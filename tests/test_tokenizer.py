import sys

import pytest

from intcalc.errors import Err, IntegerOverflowError, LexicalError
from intcalc.tokenizer import Token, Tokenizer, TokenType, tokenize, untokenize


@pytest.mark.parametrize(
    "code, expected_types",
    [
        pytest.param("", [TokenType.END]),
        pytest.param("   ", [TokenType.END]),
        pytest.param("42", [TokenType.NUMBER, TokenType.END]),
        pytest.param(
            "1+2-3*4/5",
            [
                TokenType.NUMBER,
                TokenType.PLUS,
                TokenType.NUMBER,
                TokenType.MINUS,
                TokenType.NUMBER,
                TokenType.STAR,
                TokenType.NUMBER,
                TokenType.SLASH,
                TokenType.NUMBER,
                TokenType.END,
            ],
        ),
        pytest.param(
            "-(7)",
            [TokenType.MINUS, TokenType.BRACKET_OPEN, TokenType.NUMBER, TokenType.BRACKET_CLOSE, TokenType.END],
        ),
        pytest.param("1 2", [TokenType.NUMBER, TokenType.NUMBER, TokenType.END]),
    ],
)
def test_token_types(code: str, expected_types: list[TokenType]) -> None:
    assert [t.type for t in tokenize(code)] == expected_types


def test_number_payload_and_positions() -> None:
    assert tokenize(" 12 + 345") == [
        Token(type=TokenType.NUMBER, lexeme="12", position=1, value=12),
        Token(type=TokenType.PLUS, lexeme="+", position=4),
        Token(type=TokenType.NUMBER, lexeme="345", position=6, value=345),
        Token(type=TokenType.END, lexeme="", position=9),
    ]


def test_end_is_repeated_after_exhaustion() -> None:
    tokenizer = Tokenizer("7")
    assert tokenizer.next_token().unwrap().type is TokenType.NUMBER
    for _ in range(3):
        token = tokenizer.next_token().unwrap()
        assert token.type is TokenType.END
        assert tokenizer.pos == 1


def test_cursor_never_decreases() -> None:
    tokenizer = Tokenizer(" (1 + 22) * 3 ")
    positions = [tokenizer.pos]
    while tokenizer.next_token().unwrap().type is not TokenType.END:
        positions.append(tokenizer.pos)
    assert positions == sorted(positions)
    assert tokenizer.pos == len(tokenizer.code)


@pytest.mark.parametrize(
    "code, char, error_char_idx",
    [
        pytest.param("@", "@", 0),
        pytest.param("2 + x", "x", 4),
        pytest.param("1.5", ".", 1),
        pytest.param("2^3", "^", 1),
        pytest.param("²", "²", 0),
    ],
)
def test_unexpected_character(code: str, char: str, error_char_idx: int) -> None:
    with pytest.raises(LexicalError) as exc_info:
        tokenize(code)
    assert exc_info.value.char == char
    assert exc_info.value.error_char_idx == error_char_idx


def test_next_token_returns_err_instead_of_raising() -> None:
    tokenizer = Tokenizer("1 $")
    assert tokenizer.next_token().unwrap().value == 1
    result = tokenizer.next_token()
    assert isinstance(result, Err)
    assert isinstance(result.error, LexicalError)


def test_too_long_literal() -> None:
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("int() has no conversion length limit")
    previous_limit = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(640)
    try:
        result = Tokenizer("9" * 1000).next_token()
    finally:
        sys.set_int_max_str_digits(previous_limit)
    assert isinstance(result.error, IntegerOverflowError)


def test_untokenize() -> None:
    assert untokenize(tokenize("(1+2)*  3")) == "( 1 + 2 ) * 3"
