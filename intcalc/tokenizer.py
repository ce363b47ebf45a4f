import enum
from dataclasses import dataclass

from intcalc.errors import Err, IntegerOverflowError, LexicalError, Ok, Result
from intcalc.utils import PrintableEnum


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    position: int
    value: int = 0

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


def _is_digit(s: str) -> bool:
    # str.isdigit() also accepts superscripts and other digits int() rejects
    return "0" <= s <= "9"


class Tokenizer:
    """Scans one line left to right, producing a token per `next_token` call.

    The cursor only moves forward. Once the text is exhausted every further
    call returns an END token.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0

    def next_token(self) -> Result[Token]:
        code = self.code
        while self.pos < len(code) and code[self.pos].isspace():
            self.pos += 1

        if self.pos >= len(code):
            return Ok(Token(type=TokenType.END, lexeme="", position=len(code)))

        start_idx = self.pos
        if _is_digit(code[start_idx]):
            number_end_idx = start_idx + 1
            while number_end_idx < len(code) and _is_digit(code[number_end_idx]):
                number_end_idx += 1
            self.pos = number_end_idx
            lexeme = code[start_idx:number_end_idx]
            try:
                value = int(lexeme)
            except ValueError:
                # int() refuses digit strings longer than sys.get_int_max_str_digits()
                return Err(IntegerOverflowError("Number literal is too long", code=code, error_char_idx=start_idx))
            return Ok(Token(type=TokenType.NUMBER, lexeme=lexeme, position=start_idx, value=value))

        char = code[start_idx]
        self.pos += 1
        token_type = SINGLE_CHAR_TOKENS.get(char)
        if token_type is None:
            return Err(LexicalError(f"Unexpected character: {char!r}", code=code, error_char_idx=start_idx, char=char))
        return Ok(Token(type=token_type, lexeme=char, position=start_idx))


def tokenize(code: str) -> list[Token]:
    """Whole line as a token list ending with END; raises LexicalError"""
    tokenizer = Tokenizer(code)
    tokens: list[Token] = []
    while True:
        token = tokenizer.next_token().unwrap()
        tokens.append(token)
        if token.type is TokenType.END:
            return tokens


def untokenize(tokens: list[Token]) -> str:
    return " ".join(t.lexeme for t in tokens if t.type is not TokenType.END)
