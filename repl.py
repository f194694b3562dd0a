from levelcurve.expression import Expression
from levelcurve.numeric import ConversionError
from levelcurve.parser import ParserError


if __name__ == "__main__":
    expression = Expression.parse("(x)")

    while True:
        code = input("> ").strip()
        if not code:
            continue

        if code.startswith("("):
            try:
                expression = Expression.parse(code)
            except ParserError as e:
                print(e)
                continue
            print(f"formula: {expression}")
            continue

        try:
            value = float(code)
        except ValueError:
            print(f"Enter a formula like (x ^ 2) or a value for x, got {code!r}")
            continue

        try:
            print(expression.evaluate(value))
        except ConversionError as e:
            print(e)
