import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from intcalc.errors import CalcError, Err
from intcalc.evaluator import Evaluator
from intcalc.tokenizer import tokenize

logger = logging.getLogger(__name__)

BANNER = "\n".join(
    [
        "Integer calculator: syntax analyzer for arithmetic expressions",
        "Supported: +  -  *  /  parentheses () and unary minus.",
        "Empty line = exit.",
        "",
    ]
)


@dataclass
class ReplConfig:
    prompt: str = "> "
    int_bits: Optional[int] = None
    show_tokens: bool = False
    verbose: bool = False
    banner: bool = True


def _int_bits(arg: str) -> int:
    try:
        bits = int(arg)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {arg!r}")
    if bits < 2:
        raise argparse.ArgumentTypeError(f"bit width must be at least 2, got {bits}")
    return bits


def parse_args(argv: Optional[list[str]] = None) -> ReplConfig:
    parser = argparse.ArgumentParser(prog="intcalc", description="Evaluate integer arithmetic expressions line by line")
    parser.add_argument("--prompt", default=ReplConfig.prompt, help="input prompt (default: %(default)r)")
    parser.add_argument(
        "--int-bits",
        type=_int_bits,
        default=None,
        metavar="N",
        help="reject values outside the signed N-bit range instead of using unbounded integers",
    )
    parser.add_argument("--tokens", action="store_true", help="print the token stream of every line")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    parser.add_argument("--no-banner", action="store_true", help="do not print the greeting")
    args = parser.parse_args(argv)
    return ReplConfig(
        prompt=args.prompt,
        int_bits=args.int_bits,
        show_tokens=args.tokens,
        verbose=args.verbose,
        banner=not args.no_banner,
    )


def run_repl(stdin: TextIO, stdout: TextIO, config: ReplConfig) -> int:
    """Read-evaluate-print until EOF or an empty line, returns the number of lines evaluated"""
    if config.banner:
        print(BANNER, file=stdout)

    evaluated = 0
    while True:
        print(config.prompt, end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        code = line.rstrip("\r\n")
        if not code:
            break

        if config.show_tokens:
            try:
                print("Tokens: " + " ".join(str(t) for t in tokenize(code)), file=stdout)
            except CalcError:
                pass  # reported below by the evaluator

        result = Evaluator(code, int_bits=config.int_bits).parse()
        if isinstance(result, Err):
            logger.debug("line %d: %s", evaluated + 1, result.error.kind)
            print(f"Error: {result.error}", file=stdout)
        else:
            print(f"Result = {result.value}", file=stdout)
        print(file=stdout)
        evaluated += 1

    return evaluated


def main(argv: Optional[list[str]] = None) -> int:
    config = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.debug("Starting with %s", config)

    try:
        evaluated = run_repl(sys.stdin, sys.stdout, config)
    except KeyboardInterrupt:
        print(file=sys.stdout)
        return 130

    logger.debug("Evaluated %d line(s)", evaluated)
    return 0
