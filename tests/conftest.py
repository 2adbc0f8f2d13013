# tests/conftest.py
"""
Shared cfg builders for the iTestGen tests.

The cfgs are built directly from BasicBlock objects; the json fixtures under
tests/fixtures describe the same graphs for the loader and command line tests.
"""

import os
from decimal import Decimal

import pytest

from iTestGen.Cfg.BasicBlock import BasicBlock, ENTRY, REGULAR, EXIT
from iTestGen.Cfg.Cfg import Cfg
from iTestGen.Cfg.Expression import (
    Symbol, Literal, ParameterRef, LocalRef, Binary, Assignment, Declaration,
    INTEGER, REAL, BOOLEAN, GT, LT,
)
from iTestGen.Solver.Z3Backend import Z3Backend

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def fixturePath(name):
    return os.path.join(FIXTURES, name)


def makeCfg(blocks, name="f"):
    cfg = Cfg(name)
    for b in blocks:
        cfg.addBasicBlock(b)
    return cfg


def gt(left, right):
    return Binary(GT, left, right)


def lt(left, right):
    return Binary(LT, left, right)


class SingleBranch:
    """
    if (x > 10) y = 1; else y = 2;

    B0 Entry -> B1 [x > 10] -True-> B2, -False-> B3; B2, B3 -> B4 Exit
    """

    def __init__(self):
        self.x = Symbol(0, "x", INTEGER)
        self.y = Symbol(1, "y", INTEGER)
        self.parameters = [self.x]
        self.cfg = makeCfg([
            BasicBlock(0, ENTRY, fallThroughSuccessor=1),
            BasicBlock(1, REGULAR, [Declaration(self.y)],
                       branchCondition=gt(ParameterRef(self.x), Literal(10)),
                       conditionalSuccessor=2, fallThroughSuccessor=3),
            BasicBlock(2, REGULAR, [Assignment(self.y, Literal(1))], fallThroughSuccessor=4),
            BasicBlock(3, REGULAR, [Assignment(self.y, Literal(2))], fallThroughSuccessor=4),
            BasicBlock(4, EXIT),
        ], "singleBranch")


class Contradictory:
    """
    if (x > 10) { y = x; if (x < 5) y = 0; else y = 1; } else y = 1;

    The path through both true branches needs x > 10 and x < 5.
    """

    def __init__(self):
        self.x = Symbol(0, "x", INTEGER)
        self.y = Symbol(1, "y", INTEGER)
        self.parameters = [self.x]
        self.cfg = makeCfg([
            BasicBlock(0, ENTRY, fallThroughSuccessor=1),
            BasicBlock(1, REGULAR, branchCondition=gt(ParameterRef(self.x), Literal(10)),
                       conditionalSuccessor=2, fallThroughSuccessor=5),
            BasicBlock(2, REGULAR, [Assignment(self.y, ParameterRef(self.x))], fallThroughSuccessor=3),
            BasicBlock(3, REGULAR, branchCondition=lt(ParameterRef(self.x), Literal(5)),
                       conditionalSuccessor=4, fallThroughSuccessor=5),
            BasicBlock(4, REGULAR, [Assignment(self.y, Literal(0))], fallThroughSuccessor=6),
            BasicBlock(5, REGULAR, [Assignment(self.y, Literal(1))], fallThroughSuccessor=6),
            BasicBlock(6, EXIT),
        ], "contradictory")


class MixedSorts:
    """
    void price(decimal kWh, int tier, bool vip, object tag)
        decimal base = kWh * tier;
        if (base > 100.5) { base = base + 1; if (vip) base = 1; else base = 2; } else base = 2;
    """

    def __init__(self):
        self.kWh = Symbol(0, "kWh", REAL)
        self.tier = Symbol(1, "tier", INTEGER)
        self.vip = Symbol(2, "vip", BOOLEAN)
        self.tag = Symbol(3, "tag", "Unsupported")
        self.base = Symbol(4, "base", REAL)
        self.parameters = [self.kWh, self.tier, self.vip, self.tag]
        self.cfg = makeCfg([
            BasicBlock(0, ENTRY, fallThroughSuccessor=1),
            BasicBlock(1, REGULAR,
                       [Declaration(self.base, Binary("*", ParameterRef(self.kWh), ParameterRef(self.tier)))],
                       branchCondition=gt(LocalRef(self.base), Literal(Decimal("100.5"))),
                       conditionalSuccessor=2, fallThroughSuccessor=5),
            BasicBlock(2, REGULAR, [Assignment(self.base, Binary("+", LocalRef(self.base), Literal(1)))],
                       fallThroughSuccessor=3),
            BasicBlock(3, REGULAR, branchCondition=ParameterRef(self.vip),
                       conditionalSuccessor=4, fallThroughSuccessor=5),
            BasicBlock(4, REGULAR, [Assignment(self.base, Literal(Decimal("1")))], fallThroughSuccessor=6),
            BasicBlock(5, REGULAR, [Assignment(self.base, Literal(Decimal("2")))], fallThroughSuccessor=6),
            BasicBlock(6, EXIT),
        ], "mixedSorts")


@pytest.fixture
def singleBranch():
    return SingleBranch()


@pytest.fixture
def contradictory():
    return Contradictory()


@pytest.fixture
def mixedSorts():
    return MixedSorts()


@pytest.fixture
def backend():
    return Z3Backend()
