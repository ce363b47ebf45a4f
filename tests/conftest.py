import sys

import pytest


@pytest.fixture
def int_str_digits_limit():
    """Pins the interpreter's int-to-str conversion limit to its 4300 default"""
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("int() has no conversion length limit")
    previous_limit = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(previous_limit)
