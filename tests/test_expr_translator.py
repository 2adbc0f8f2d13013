from decimal import Decimal
from fractions import Fraction

import pytest
from z3 import simplify

from iTestGen.Cfg.Expression import *
from iTestGen.TestGenerator.ExprTranslator import ExprTranslator


@pytest.fixture
def translator(backend):
    return ExprTranslator(backend)


@pytest.fixture
def symbols(backend):
    x = Symbol(0, "x", INTEGER)
    r = Symbol(1, "r", REAL)
    b = Symbol(2, "b", BOOLEAN)
    state = {x: backend.declareVariable("x", INTEGER),
             r: backend.declareVariable("r", REAL),
             b: backend.declareVariable("b", BOOLEAN)}
    return x, r, b, state


def test_mixed_arithmetic_is_real(translator, backend):
    term = translator.translate(Binary(ADD, Literal(1), Literal(Decimal("0.5"))), {})
    assert backend.sortOf(term) == REAL
    assert simplify(term).as_fraction() == Fraction(3, 2)


def test_same_sort_operands_are_not_coerced(translator, backend):
    term = translator.translate(Binary(DIV, Literal(7), Literal(2)), {})
    assert backend.sortOf(term) == INTEGER
    assert simplify(term).as_long() == 3

    term = translator.translate(Binary(DIV, Literal(Decimal("7")), Literal(Decimal("2"))), {})
    assert backend.sortOf(term) == REAL
    assert simplify(term).as_fraction() == Fraction(7, 2)


def test_mixed_comparison(translator, backend, symbols):
    x, r, b, state = symbols
    term = translator.translate(Binary(GT, ParameterRef(x), ParameterRef(r)), state)
    assert backend.sortOf(term) == BOOLEAN
    term = translator.translate(Binary(EQ, Literal(Decimal("2.0")), ParameterRef(x)), state)
    assert backend.sortOf(term) == BOOLEAN


def test_logical_operators_need_booleans(translator, backend, symbols):
    x, r, b, state = symbols
    cond = Binary(GT, ParameterRef(x), Literal(0))
    assert backend.sortOf(translator.translate(Binary(AND, cond, ParameterRef(b)), state)) == BOOLEAN
    assert backend.sortOf(translator.translate(Binary(OR, ParameterRef(b), cond), state)) == BOOLEAN
    assert translator.translate(Binary(AND, ParameterRef(x), Literal(1)), state) is None


def test_equality_between_sorts_that_do_not_mix(translator, symbols):
    x, r, b, state = symbols
    assert translator.translate(Binary(EQ, ParameterRef(b), ParameterRef(x)), state) is None


def test_unknown_operator_is_unrepresentable(translator, symbols):
    x, r, b, state = symbols
    assert translator.translate(Binary("%", ParameterRef(x), Literal(2)), state) is None


def test_not(translator, backend, symbols):
    x, r, b, state = symbols
    assert backend.sortOf(translator.translate(Unary(NOT, ParameterRef(b)), state)) == BOOLEAN
    assert translator.translate(Unary(NOT, ParameterRef(x)), state) is None
    assert translator.translate(Unary("-", ParameterRef(x)), state) is None


def test_round_passes_its_argument_through(translator, symbols):
    x, r, b, state = symbols
    term = translator.translate(Invocation("Math.Round", [ParameterRef(r)]), state)
    assert term.eq(state[r])
    assert translator.translate(Invocation("Round", [ParameterRef(r), Literal(2)]), state) is None
    assert translator.translate(Invocation("Abs", [ParameterRef(r)]), state) is None


def test_conversions(translator, backend, symbols):
    x, r, b, state = symbols
    assert backend.sortOf(translator.translate(Conversion(ParameterRef(x), REAL), state)) == REAL
    # narrowing is not modelled, the operand stays as it is
    assert translator.translate(Conversion(ParameterRef(r), INTEGER), state).eq(state[r])
    assert translator.translate(Conversion(ParameterRef(x), UNSUPPORTED), state) is None


def test_field_constant_is_inlined(translator, backend):
    limit = Symbol(9, "Limit", INTEGER)
    term = translator.translate(FieldRef(limit, 5), {})
    assert simplify(term).as_long() == 5
    assert translator.translate(FieldRef(limit), {}) is None


def test_unbound_symbols_and_opaque_shapes(translator, symbols):
    x, r, b, state = symbols
    other = Symbol(3, "other", INTEGER)
    assert translator.translate(LocalRef(other), state) is None
    assert translator.translate(OpaqueExpression("a?.b"), state) is None
    assert translator.translate(Binary(ADD, ParameterRef(x), OpaqueExpression("f()")), state) is None
    assert translator.translate(Literal("text"), state) is None


def test_shadowed_names_keep_their_own_terms(translator, backend):
    outer = Symbol(0, "i", INTEGER)
    inner = Symbol(1, "i", INTEGER)
    state = {outer: backend.declareVariable("i", INTEGER), inner: backend.declareVariable("i", INTEGER)}
    assert translator.translate(LocalRef(outer), state).eq(state[outer])
    assert translator.translate(LocalRef(inner), state).eq(state[inner])
    assert not state[outer].eq(state[inner])


def test_coerce_to_common_arith(translator, backend):
    i = backend.mkLiteral(1, INTEGER)
    d = backend.mkLiteral(Decimal("1.5"), REAL)
    left, right = translator.coerceToCommonArith(i, d)
    assert backend.sortOf(left) == REAL and right.eq(d)
    left, right = translator.coerceToCommonArith(d, i)
    assert left.eq(d) and backend.sortOf(right) == REAL
    left, right = translator.coerceToCommonArith(i, i)
    assert left.eq(i) and right.eq(i)
