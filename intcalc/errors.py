import enum
from dataclasses import dataclass
from typing import ClassVar, Generic, NoReturn, TypeVar

from intcalc.utils import PrintableEnum, point_at


class ErrorKind(PrintableEnum):
    LEXICAL = enum.auto()
    SYNTAX = enum.auto()
    DIVISION_BY_ZERO = enum.auto()
    OVERFLOW = enum.auto()


@dataclass
class CalcError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    kind: ClassVar[ErrorKind]
    label: ClassVar[str] = "Calculator"

    def __str__(self) -> str:
        return "\n".join([f"[{self.label} error] {self.errmsg}", *point_at(self.code, self.error_char_idx)])


@dataclass
class LexicalError(CalcError):
    char: str

    kind = ErrorKind.LEXICAL
    label = "Tokenizer"


@dataclass
class ParserError(CalcError):
    kind = ErrorKind.SYNTAX
    label = "Parser"


@dataclass
class DivisionByZeroError(CalcError):
    kind = ErrorKind.DIVISION_BY_ZERO
    label = "Arithmetic"


@dataclass
class IntegerOverflowError(CalcError):
    kind = ErrorKind.OVERFLOW
    label = "Arithmetic"


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: CalcError

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Ok[T] | Err
