from intcalc.errors import CalcError
from intcalc.evaluator import evaluate
from intcalc.tokenizer import tokenize, untokenize

for code in [
    "5",
    "-1",
    "1 + 1",
    "-1 + 1",
    "1 + -1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "80225/-2",
    "7/6/2000",
    "--5",
    "-(2 + 3) * 4",
    "10 / 5/ 2",
    "-7 / 2",
    "5 / (3 - 3)",
    "(2 + 3",
    "2 3",
    "2 + @",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except CalcError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")
    print(f"normalized: {untokenize(tokens)}")

    try:
        print(f"result: {evaluate(code)}")
    except CalcError as e:
        print(f"{e.kind}: {e}")
