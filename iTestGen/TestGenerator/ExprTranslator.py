from iTestGen.Cfg.Expression import *
from iTestGen.Solver.SolverBackend import SolverBackend


class ExprTranslator:
    """
    Turns expressions into solver terms. Only a small set of shapes is understood; anything
    else translates to None ("unrepresentable"), which drops the enclosing constraint rather
    than failing the whole path. The generated constraints therefore approximate the real
    path condition: a model always satisfies them, but not every real input does.
    """

    def __init__(self, backend: SolverBackend):
        self.backend = backend

    def translate(self, expr: Expression, state: dict):
        '''
        :param expr: the expression to translate
        :param state: symbolic state, format Symbol:term
        :return: the solver term, None if the expression is unrepresentable
        '''
        match expr:
            case Literal():
                if expr.sort in (INTEGER, REAL, BOOLEAN):
                    return self.backend.mkLiteral(expr.value, expr.sort)
                return None
            case ParameterRef() | LocalRef():
                return state.get(expr.symbol)
            case FieldRef():
                if expr.constant is not None:
                    return self.translate(Literal(expr.constant), state)
                return state.get(expr.symbol)
            case Binary():
                return self.__translateBinary(expr, state)
            case Unary():
                operand = self.translate(expr.operand, state)
                if operand is None:
                    return None
                if expr.op == NOT and self.backend.sortOf(operand) == BOOLEAN:
                    return self.backend.mkNot(operand)
                return None
            case Invocation():
                # rounding is not modelled, its argument stands for the result
                if expr.name in ROUND_FUNCS and len(expr.args) == 1:
                    return self.translate(expr.args[0], state)
                return None
            case Conversion():
                return self.__translateConversion(expr, state)
            case _:
                return None

    def __translateBinary(self, expr: Binary, state: dict):
        left = self.translate(expr.left, state)
        right = self.translate(expr.right, state)
        if left is None or right is None:
            return None

        if expr.op in ARITH_OPS or expr.op in COMPARE_OPS:
            left, right = self.coerceToCommonArith(left, right)
        leftSort = self.backend.sortOf(left)
        rightSort = self.backend.sortOf(right)

        if expr.op in ARITH_OPS or expr.op in (GT, GE, LT, LE):
            if leftSort not in (INTEGER, REAL) or leftSort != rightSort:
                return None
        elif expr.op in (EQ, NE):
            if leftSort is None or leftSort != rightSort:
                return None
        elif expr.op in LOGIC_OPS:
            if leftSort != BOOLEAN or rightSort != BOOLEAN:
                return None
        else:
            return None
        return self.backend.mkBinary(expr.op, left, right)

    def __translateConversion(self, expr: Conversion, state: dict):
        if expr.targetSort not in (INTEGER, REAL, BOOLEAN):
            return None
        operand = self.translate(expr.operand, state)
        if operand is None:
            return None
        if expr.targetSort == REAL and self.backend.sortOf(operand) == INTEGER:
            return self.backend.toReal(operand)
        return operand  # other conversions leave the term unchanged

    def coerceToCommonArith(self, left, right):
        '''
        Mixed Integer/Real operands: embed the Integer one into Real. Never the other way
        round, and operands of the same sort are left alone.
        :return: (left, right)
        '''
        leftSort = self.backend.sortOf(left)
        rightSort = self.backend.sortOf(right)
        if leftSort == INTEGER and rightSort == REAL:
            left = self.backend.toReal(left)
        elif leftSort == REAL and rightSort == INTEGER:
            right = self.backend.toReal(right)
        return left, right
