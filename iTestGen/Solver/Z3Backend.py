from decimal import Decimal, localcontext
from fractions import Fraction

from z3 import *

from iTestGen.Cfg.Expression import INTEGER, REAL, BOOLEAN
from iTestGen.Solver.SolverBackend import SolverBackend, SolverScope, SAT, UNSAT, UNKNOWN


class Z3Scope(SolverScope):
    def __init__(self, ctx: Context, timeout: int = None):
        self.solver = Solver(ctx=ctx)
        if timeout is not None:
            self.solver.set("timeout", timeout)
        self.model = None

    def add(self, constraint):
        self.solver.add(constraint)

    def check(self):
        res = self.solver.check()
        if res == sat:
            self.model = self.solver.model()
            return SAT
        self.model = None
        if res == unsat:
            return UNSAT
        return UNKNOWN  # gave up, or hit the timeout

    def readValue(self, variable):
        assert self.model is not None, "no model, the last check was not satisfiable"
        value = self.model.eval(variable, model_completion=True)
        if is_true(value):
            return True
        if is_false(value):
            return False
        if is_int_value(value):
            return value.as_long()
        if is_algebraic_value(value):  # irrational root, only an approximation is possible
            value = value.approx(20)
        if is_rational_value(value):
            return self.__toDecimal(value.numerator_as_long(), value.denominator_as_long())
        raise ValueError("unexpected model value: {}".format(value))

    def __toDecimal(self, numerator: int, denominator: int):
        '''
        Exact when the fraction terminates in base 10, otherwise rounded to the default precision
        :return: Decimal
        '''
        if denominator == 1:
            return Decimal(numerator)
        rest, twos, fives = denominator, 0, 0
        while rest % 2 == 0:
            rest //= 2
            twos += 1
        while rest % 5 == 0:
            rest //= 5
            fives += 1
        if rest != 1:
            return Decimal(numerator) / Decimal(denominator)
        with localcontext() as ctx:
            # the exact quotient has at most this many significant digits
            ctx.prec = len(str(abs(numerator))) + max(twos, fives)
            return Decimal(numerator) / Decimal(denominator)

    def release(self):
        if self.solver is not None:
            self.solver.reset()
        self.solver = None
        self.model = None


class Z3Backend(SolverBackend):
    def __init__(self, timeout: int = None):
        """
        :param timeout: per check timeout in milliseconds, None for no limit
        """
        self.ctx = Context()  # shared term factory of the run
        self.timeout = timeout

    def declareVariable(self, name: str, sort: str):
        if sort == INTEGER:
            return FreshInt(name, ctx=self.ctx)
        if sort == REAL:
            return FreshReal(name, ctx=self.ctx)
        if sort == BOOLEAN:
            return FreshBool(name, ctx=self.ctx)
        return None

    def mkLiteral(self, value, sort: str):
        if isinstance(value, Decimal) and not value.is_finite():  # NaN and infinities have no term
            return None
        if sort == BOOLEAN:
            return BoolVal(bool(value), ctx=self.ctx)
        if sort == INTEGER:
            return IntVal(int(value), ctx=self.ctx)
        if sort == REAL:
            f = Fraction(value)
            return RatVal(f.numerator, f.denominator, ctx=self.ctx)
        return None

    def mkBinary(self, op: str, left, right):
        try:
            match op:
                case "+":
                    return left + right
                case "-":
                    return left - right
                case "*":
                    return left * right
                case "/":
                    return left / right  # integer division on Integer operands
                case "==":
                    return left == right
                case "!=":
                    return left != right
                case ">":
                    return left > right
                case ">=":
                    return left >= right
                case "<":
                    return left < right
                case "<=":
                    return left <= right
                case "&&":
                    return And(left, right)
                case "||":
                    return Or(left, right)
                case _:
                    return None
        except Z3Exception:
            return None

    def mkNot(self, term):
        return Not(term)

    def toReal(self, term):
        return ToReal(term)

    def sortOf(self, term):
        if is_bool(term):
            return BOOLEAN
        if is_int(term):
            return INTEGER
        if is_real(term):
            return REAL
        return None

    def newScope(self):
        return Z3Scope(self.ctx, self.timeout)
