import math
import random

from levelcurve.expression import Expression
from levelcurve.nodes import BinaryOperator

SPACES = ["", " ", "  ", "\t"]


def generate(depth: int) -> str:
    """Random formula text with up to ``depth`` nested applications"""
    if depth == 0 or random.random() < 0.3:
        return random.choice([generate_number(), "x", f"({generate_number()})", "(x)"])
    operator = random.choice(list(BinaryOperator))
    left = generate(depth - 1)
    right = generate(depth - 1)
    s1, s2, s3, s4 = (random.choice(SPACES) for _ in range(4))
    return f"({s1}{left}{s2}{operator.symbol}{s3}{right}{s4})"


def generate_number() -> str:
    return random.choice(
        [
            str(random.randint(-100, 100)),
            f"{random.uniform(-10, 10):.3f}",
            f"{random.uniform(0, 10):.2e}",
            f".{random.randint(0, 99)}",
        ]
    )


def same(a: float, b: float) -> bool:
    return (math.isnan(a) and math.isnan(b)) or a == b


if __name__ == "__main__":
    while True:
        code = generate(depth=4)
        if not code.startswith("("):
            code = f"({code})"

        original = Expression.parse(code)
        reparsed = Expression.parse(original.to_text())
        for x in [-3.5, -1, 0, 0.5, 1, 2, 7, 100]:
            a = original.evaluate(x)
            b = reparsed.evaluate(x)
            if not same(a, b):
                print(f"{code!r}\ntext: {original.to_text()}\nx = {x}: {a} != {b}\n\n")
