"""Recursive descent evaluator for integer arithmetic.

Parsing and evaluation are fused: every grammar rule returns the value of the
text it consumed, so no syntax tree is built.

    expr   := term ( ('+' | '-') term )*
    term   := factor ( ('*' | '/') factor )*
    factor := NUMBER | '(' expr ')' | '-' factor

Each rule returns a Result; a failing rule hands its Err back to the caller
unchanged and the whole parse stops there.
"""

import logging
import sys
from typing import Optional

from intcalc.errors import DivisionByZeroError, Err, IntegerOverflowError, Ok, ParserError, Result
from intcalc.tokenizer import Token, Tokenizer, TokenType

logger = logging.getLogger(__name__)


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, unlike Python's flooring //"""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


class Evaluator:
    def __init__(self, code: str, int_bits: Optional[int] = None) -> None:
        self.code = code
        self.tokenizer = Tokenizer(code)
        if int_bits is None:
            self.bounds: Optional[tuple[int, int]] = None
        else:
            self.bounds = (-(2 ** (int_bits - 1)), 2 ** (int_bits - 1) - 1)

        # placeholder until parse() fetches the first token
        self.current = Token(type=TokenType.END, lexeme="", position=0)

    def parse(self) -> Result[int]:
        error = self._advance()
        if error is not None:
            return error

        try:
            result = self.parse_expr()
        except RecursionError:
            return self._syntax_error("Expression is nested too deeply")
        if isinstance(result, Err):
            return result
        if self.current.type is not TokenType.END:
            return self._syntax_error(f"Unexpected trailing input: {self.current.lexeme!r}")
        return result

    def eat(self, expected: TokenType) -> Result[Token]:
        token = self.current
        if token.type is not expected:
            return self._syntax_error(f"Unexpected token {token.type}, expected {expected}")
        error = self._advance()
        if error is not None:
            return error
        return Ok(token)

    def parse_expr(self) -> Result[int]:
        left = self.parse_term()
        if isinstance(left, Err):
            return left
        value = left.value

        while self.current.type in (TokenType.PLUS, TokenType.MINUS):
            operator = self.eat(self.current.type)
            if isinstance(operator, Err):
                return operator
            right = self.parse_term()
            if isinstance(right, Err):
                return right

            if operator.value.type is TokenType.PLUS:
                folded = self._checked(value + right.value, operator.value)
            else:
                folded = self._checked(value - right.value, operator.value)
            if isinstance(folded, Err):
                return folded
            value = folded.value

        return Ok(value)

    def parse_term(self) -> Result[int]:
        left = self.parse_factor()
        if isinstance(left, Err):
            return left
        value = left.value

        while self.current.type in (TokenType.STAR, TokenType.SLASH):
            operator = self.eat(self.current.type)
            if isinstance(operator, Err):
                return operator
            right_start_idx = self.current.position
            right = self.parse_factor()
            if isinstance(right, Err):
                return right

            if operator.value.type is TokenType.STAR:
                folded = self._checked(value * right.value, operator.value)
            elif right.value == 0:
                return Err(DivisionByZeroError("Division by zero", code=self.code, error_char_idx=right_start_idx))
            else:
                folded = self._checked(truncating_div(value, right.value), operator.value)
            if isinstance(folded, Err):
                return folded
            value = folded.value

        return Ok(value)

    def parse_factor(self) -> Result[int]:
        token = self.current

        if token.type is TokenType.NUMBER:
            eaten = self.eat(TokenType.NUMBER)
            if isinstance(eaten, Err):
                return eaten
            return self._checked(token.value, token)

        elif token.type is TokenType.BRACKET_OPEN:
            eaten = self.eat(TokenType.BRACKET_OPEN)
            if isinstance(eaten, Err):
                return eaten
            inner = self.parse_expr()
            if isinstance(inner, Err):
                return inner
            if self.current.type is not TokenType.BRACKET_CLOSE:
                return Err(ParserError("Unmatched parenthesis", code=self.code, error_char_idx=token.position))
            eaten = self.eat(TokenType.BRACKET_CLOSE)
            if isinstance(eaten, Err):
                return eaten
            return inner

        elif token.type is TokenType.MINUS:
            eaten = self.eat(TokenType.MINUS)
            if isinstance(eaten, Err):
                return eaten
            operand = self.parse_factor()
            if isinstance(operand, Err):
                return operand
            return self._checked(-operand.value, token)

        else:
            return self._syntax_error(f"Operand expected, found {token.type}")

    def _advance(self) -> Optional[Err]:
        next_token = self.tokenizer.next_token()
        if isinstance(next_token, Err):
            return next_token
        self.current = next_token.value
        return None

    def _checked(self, value: int, token: Token) -> Result[int]:
        if _too_many_digits(value):
            return Err(
                IntegerOverflowError(
                    f"Result has more than {sys.get_int_max_str_digits()} digits",
                    code=self.code,
                    error_char_idx=token.position,
                )
            )
        if self.bounds is not None:
            low, high = self.bounds
            if not low <= value <= high:
                return Err(
                    IntegerOverflowError(
                        f"{value} does not fit in [{low}, {high}]", code=self.code, error_char_idx=token.position
                    )
                )
        return Ok(value)

    def _syntax_error(self, errmsg: str) -> Err:
        return Err(ParserError(errmsg, code=self.code, error_char_idx=self.current.position))


def _too_many_digits(value: int) -> bool:
    """True when str(value) would exceed the interpreter's int-to-str limit"""
    limit = sys.get_int_max_str_digits() if hasattr(sys, "get_int_max_str_digits") else 0
    if not limit:
        return False
    # log10(2) rounded up, so the digit estimate never falls short
    return value.bit_length() * 0.30103 + 1 > limit


def evaluate(code: str, int_bits: Optional[int] = None) -> int:
    """Value of a single expression line; raises the CalcError describing any failure"""
    result = Evaluator(code, int_bits=int_bits).parse()
    if isinstance(result, Err):
        logger.debug("%r failed: %s", code, result.error.kind)
    else:
        logger.debug("%r = %s", code, result.value)
    return result.unwrap()
