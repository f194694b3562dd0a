from levelcurve.expression import Expression
from levelcurve.numeric import U8, ConversionError
from levelcurve.parser import ParserError

for code in [
    "(6)",
    "(x)",
    "(x+1)",
    "(x -1)",
    "(x - -1)",
    "((x * 100) + 50)",
    "(x ^ 2)",
    "(25 log 5)",
    "((1) / (0))",
    "(((2 * (x ^2))-((6/ x) +(25 log 5)))%80)",
    "(2 +)",
    "(1 + 2 + 3)",
    "(x) ",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        expression = Expression.parse(code)
    except ParserError as e:
        print(e)
        continue

    print(f"ast: {expression.root}")
    print(f"text: {expression.to_text()}")

    for x in [0, 1, 7, 10]:
        try:
            as_u8 = expression.evaluate(x, output_type=U8)
        except ConversionError as e:
            as_u8 = e
        print(f" x = {x:>2}: {expression.evaluate(x)} / u8: {as_u8}")
