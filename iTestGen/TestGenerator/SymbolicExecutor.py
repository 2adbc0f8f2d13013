from iTestGen.Cfg.BasicBlock import BasicBlock, WHEN_TRUE, WHEN_FALSE
from iTestGen.Cfg.Cfg import Cfg
from iTestGen.Cfg.Expression import Assignment, Declaration, BOOLEAN
from iTestGen.GraphTools.Path import Path
from iTestGen.Solver.SolverBackend import SolverBackend
from iTestGen.TestGenerator.ExprTranslator import ExprTranslator

DIRECT = "direct"
INVERTED = "inverted"


class SymbolicExecutor:
    def __init__(self, cfg: Cfg, backend: SolverBackend):
        self.cfg = cfg
        self.backend = backend
        self.translator = ExprTranslator(backend)
        self.state = dict()  # symbolic state, format Symbol:term
        self.constraints = []  # branch conditions taken along the path
        self.paramVars = dict()  # format parameter Symbol:variable

    def clearExecutor(self):
        '''
        Forget everything about the previous path
        :return: None
        '''
        self.state.clear()
        self.constraints = []
        self.paramVars.clear()

    def execPath(self, path: Path, parameters: list):
        '''
        Run a path symbolically and collect the conditions for taking it
        :param path: the path to run
        :param parameters: parameter symbols of the function, in declaration order
        :return: the constraints of the path, [term1, term2...]
        '''
        self.clearExecutor()
        for param in parameters:
            var = self.backend.declareVariable(param.name, param.sort)
            if var is not None:  # an unsupported sort stays out of the model
                self.paramVars[param] = var
                self.state[param] = var

        nodes = path.getPathNodes()
        for i in range(len(nodes)):
            curBlock = self.cfg.getBlock(nodes[i])
            if curBlock is None:
                continue
            for op in curBlock.operations:
                self.execOperation(op)
            if i < len(nodes) - 1 and curBlock.hasCondition():
                preBlock = self.cfg.getBlock(nodes[i - 1]) if i > 0 else None
                nextBlock = self.cfg.getBlock(nodes[i + 1])
                takenCond = self.getTakenCondition(preBlock, curBlock, nextBlock)
                if takenCond is not None:
                    self.constraints.append(takenCond)

        return list(self.constraints)

    def execOperation(self, op):
        match op:
            case Assignment():
                value = self.translator.translate(op.value, self.state)
                if value is not None:
                    self.state[op.target] = value
            case Declaration():
                var = self.backend.declareVariable(op.symbol.name, op.symbol.sort)
                if var is not None:
                    self.state[op.symbol] = var
                if op.initializer is not None:
                    init = self.translator.translate(op.initializer, self.state)
                    if init is not None:
                        self.state[op.symbol] = init
            case _:
                pass

    def getTakenCondition(self, preBlock: BasicBlock, curBlock: BasicBlock, nextBlock: BasicBlock):
        '''
        Build the condition asserted by moving from curBlock to nextBlock
        :param preBlock: the block before curBlock on the path, None at the path start
        :param curBlock: a block carrying a branch condition
        :param nextBlock: the block after curBlock on the path
        :return: the condition or its negation, None when no constraint can be given
        '''
        if nextBlock is None:
            return None
        cond = self.translator.translate(curBlock.branchCondition, self.state)
        if cond is None or self.backend.sortOf(cond) != BOOLEAN:
            return None

        polarity = self.resolvePolarity(preBlock, curBlock, nextBlock)
        if polarity is None:
            return None
        takesConditional = curBlock.conditionalSuccessor == nextBlock.ordinal
        takesFallThrough = curBlock.fallThroughSuccessor == nextBlock.ordinal
        if not takesConditional and not takesFallThrough:
            return None
        if takesConditional == (polarity == DIRECT):
            return cond
        return self.backend.mkNot(cond)

    def resolvePolarity(self, preBlock: BasicBlock, curBlock: BasicBlock, nextBlock: BasicBlock):
        '''
        Short-circuit conditions are lowered into chains of blocks, each tagged WhenTrue or
        WhenFalse. Decide from the neighbours on the path whether the conditional edge of
        curBlock asserts its condition (DIRECT) or its negation (INVERTED).
        :return: DIRECT, INVERTED, or None for an adjacency that is not recognised
        '''
        preHasCond = preBlock is not None and preBlock.hasCondition()
        nextHasCond = nextBlock.hasCondition()

        if not preHasCond and not nextHasCond:  # plain condition
            return DIRECT
        if nextHasCond:  # the chain goes on
            if curBlock.conditionKind is None or nextBlock.conditionKind is None:
                return None
            if curBlock.conditionKind == WHEN_TRUE and nextBlock.conditionKind == WHEN_FALSE:
                return DIRECT
            return INVERTED
        # last link of a chain
        if preBlock.conditionKind is None or curBlock.conditionKind is None:
            return None
        if curBlock.conditionKind == WHEN_FALSE and preBlock.conditionKind in (WHEN_TRUE, WHEN_FALSE):
            return INVERTED
        return DIRECT

    def getParamVars(self):
        '''
        :return: variables of the parameters of the last path, format Symbol:variable
        '''
        return dict(self.paramVars)

    def getState(self):
        return dict(self.state)
