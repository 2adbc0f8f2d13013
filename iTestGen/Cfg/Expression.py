from decimal import Decimal

# sorts of symbols and expressions
INTEGER = "Integer"
REAL = "Real"
BOOLEAN = "Boolean"
UNSUPPORTED = "Unsupported"
SORTS = (INTEGER, REAL, BOOLEAN, UNSUPPORTED)

# binary operators
ADD = "+"
SUB = "-"
MUL = "*"
DIV = "/"
EQ = "=="
NE = "!="
GT = ">"
GE = ">="
LT = "<"
LE = "<="
AND = "&&"
OR = "||"
ARITH_OPS = (ADD, SUB, MUL, DIV)
COMPARE_OPS = (EQ, NE, GT, GE, LT, LE)
LOGIC_OPS = (AND, OR)

# unary operators
NOT = "!"

# rounding calls, translated as a pass-through of their argument
ROUND_FUNCS = ("Round", "Math.Round", "round")


class Symbol:
    """
    A declared parameter, local or field. Two symbols are equal only if they are
    the same object, so shadowed declarations with the same name stay apart.
    """

    def __init__(self, symbolId: int, name: str, sort: str):
        self.symbolId = symbolId
        self.name = name
        self.sort = sort if sort in SORTS else UNSUPPORTED

    def __repr__(self):
        return "Symbol({}#{}:{})".format(self.name, self.symbolId, self.sort)


class Expression:
    pass


class Literal(Expression):
    def __init__(self, value, sort: str = None):
        if sort is None:
            if isinstance(value, bool):
                sort = BOOLEAN
            elif isinstance(value, int):
                sort = INTEGER
            elif isinstance(value, Decimal):
                sort = REAL
            else:
                sort = UNSUPPORTED
        self.value = value
        self.sort = sort

    def __str__(self):
        if self.sort == BOOLEAN:
            return "true" if self.value else "false"
        return str(self.value)


class ParameterRef(Expression):
    def __init__(self, symbol: Symbol):
        self.symbol = symbol

    def __str__(self):
        return self.symbol.name


class LocalRef(Expression):
    def __init__(self, symbol: Symbol):
        self.symbol = symbol

    def __str__(self):
        return self.symbol.name


class FieldRef(Expression):
    def __init__(self, symbol: Symbol, constant=None):
        """
        :param symbol: the referenced field
        :param constant: compile-time constant value of the field, if any
        """
        self.symbol = symbol
        self.constant = constant

    def __str__(self):
        return self.symbol.name


class Binary(Expression):
    def __init__(self, op: str, left: Expression, right: Expression):
        self.op = op
        self.left = left
        self.right = right

    def __str__(self):
        return "({} {} {})".format(self.left, self.op, self.right)


class Unary(Expression):
    def __init__(self, op: str, operand: Expression):
        self.op = op
        self.operand = operand

    def __str__(self):
        return "{}{}".format(self.op, self.operand)


class Invocation(Expression):
    def __init__(self, name: str, args: list):
        self.name = name
        self.args = tuple(args)

    def __str__(self):
        return "{}({})".format(self.name, ", ".join(str(a) for a in self.args))


class Conversion(Expression):
    def __init__(self, operand: Expression, targetSort: str):
        self.operand = operand
        self.targetSort = targetSort

    def __str__(self):
        return "({}){}".format(self.targetSort, self.operand)


class OpaqueExpression(Expression):
    """An expression shape the front-end could not describe. Never translatable."""

    def __init__(self, text: str = ""):
        self.text = text

    def __str__(self):
        return self.text or "<opaque>"


class Operation:
    pass


class Assignment(Operation):
    def __init__(self, target: Symbol, value: Expression):
        self.target = target
        self.value = value

    def __str__(self):
        return "{} = {}".format(self.target.name, self.value)


class Declaration(Operation):
    def __init__(self, symbol: Symbol, initializer: Expression = None):
        self.symbol = symbol
        self.initializer = initializer

    def __str__(self):
        if self.initializer is None:
            return "{} {}".format(self.symbol.sort, self.symbol.name)
        return "{} {} = {}".format(self.symbol.sort, self.symbol.name, self.initializer)


class OtherOperation(Operation):
    def __init__(self, text: str = ""):
        self.text = text

    def __str__(self):
        return self.text
