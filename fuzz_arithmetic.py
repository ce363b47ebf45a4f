import ast
import random
import re
import string
import warnings

from intcalc.errors import CalcError
from intcalc.evaluator import evaluate, truncating_div

warnings.filterwarnings("ignore")


def _eval_node(node: ast.AST) -> int:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    elif isinstance(node, ast.Constant) and type(node.value) is int:
        return node.value
    elif isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.USub):
        return -_eval_node(node.operand)
    elif isinstance(node, ast.BinOp):
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        if isinstance(node.op, ast.Add):
            return left + right
        elif isinstance(node.op, ast.Sub):
            return left - right
        elif isinstance(node.op, ast.Mult):
            return left * right
        elif isinstance(node.op, ast.Div):
            if right == 0:
                raise ZeroDivisionError("division by zero")
            return truncating_div(left, right)
    raise ValueError(f"Unsupported node: {ast.dump(node)}")


def eval_py(code: str) -> int | str:
    """Reference result: Python's own parser, with C-style integer division"""
    try:
        return _eval_node(ast.parse(code.strip(), mode="eval"))
    except Exception as e:
        return str(e)


def eval_my(code: str) -> int | str:
    try:
        return evaluate(code)
    except CalcError as e:
        return str(e)


if __name__ == "__main__":
    alphabet = string.digits + "()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"/\s*/", code):
            continue  # avoid generating int division (10 // 3)

        if re.findall(r"(^|[^\d\s])\s*\+", code):
            continue  # unary plus is not part of the grammar

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, int) and isinstance(res_my, int) and res_py == res_my:
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
