import json
from decimal import Decimal
import multiprocessing

from iTestGen.Cfg.Cfg import Cfg
from iTestGen.GraphTools.Path import Path
from iTestGen.Solver.SolverBackend import SolverBackend, SAT, UNSAT
from iTestGen.Solver.Z3Backend import Z3Backend
from iTestGen.TestGenerator.SymbolicExecutor import SymbolicExecutor
from iTestGen.Utils.Logger import Logger


class InputSynthesizer:
    def __init__(self, cfg: Cfg, parameters: list, backend: SolverBackend = None, timeout: int = None,
                 processNum: int = 1, outputProcessInfo: bool = False):
        """
        Derive one concrete input per path with symbolic execution and a solver
        :param cfg: the cfg the paths come from
        :param parameters: parameter symbols of the function, in declaration order
        :param backend: solver backend, a Z3Backend by default. Only used for sequential solving:
                        with processNum > 1 every worker process builds its own Z3Backend
        :param timeout: per path solver timeout in milliseconds, None for no limit
        :param processNum: number of solver processes, 1 solves in the current process
        :param outputProcessInfo: print the result of every path
        """
        self.cfg = cfg
        self.parameters = list(parameters)
        self.timeout = timeout
        self.backendInjected = backend is not None
        self.backend = backend if backend is not None else Z3Backend(timeout)
        self.processNum = max(1, processNum)
        self.outputProcessInfo = outputProcessInfo
        self.executor = SymbolicExecutor(cfg, self.backend)
        self.feasibleCnt = 0
        self.infeasibleCnt = 0
        self.log = Logger()

    def synthesize(self, paths: list):
        '''
        :param paths: [Path1, Path2...]
        :return: one entry per path in the same order, a dict parameterName:value, or None
                 when the path is infeasible or the solver could not decide
        '''
        if self.processNum > 1 and len(paths) > 1:
            results = self.__synthesizeInPool(paths)
        else:
            results = [self.solvePath(p) for p in paths]

        self.feasibleCnt = len([r for r in results if r is not None])
        self.infeasibleCnt = len(results) - self.feasibleCnt
        for i in range(len(paths)):
            if results[i] is None:
                self.log.warning("Infeasible path {}: {}".format(paths[i].getId(), paths[i]))
            elif self.outputProcessInfo:
                self.log.processing("Path {}: {} <= {}".format(paths[i].getId(), paths[i], results[i]))
        return results

    def solvePath(self, path: Path):
        '''
        Solve one path in its own solver scope, the scope is released whatever happens
        :return: dict parameterName:value, None if no input takes the path
        '''
        constraints = self.executor.execPath(path, self.parameters)
        paramVars = self.executor.getParamVars()
        with self.backend.newScope() as scope:
            for c in constraints:
                scope.add(c)
            res = scope.check()
            if res != SAT:
                if res != UNSAT and self.outputProcessInfo:
                    self.log.processing("Solver could not decide path {}".format(path.getId()))
                return None
            testInput = {}
            for param in self.parameters:
                if param in paramVars.keys():
                    testInput[param.name] = scope.readValue(paramVars[param])
            return testInput

    def __synthesizeInPool(self, paths: list):
        self.log.info("Starting {} solver processes".format(self.processNum))
        if self.backendInjected:
            self.log.warning("Solver processes use their own Z3Backend, the given backend is not used")
        # cfg and parameters travel together so the symbols keep their identity in the workers
        ctx = multiprocessing.get_context("spawn")  # z3 contexts do not survive a fork reliably
        with ctx.Pool(processes=self.processNum, initializer=initSolveWorker,
                      initargs=(self.cfg, self.parameters, self.timeout)) as pool:
            results = pool.map(solveWorker, [p.getPathNodes() for p in paths])
        self.log.info("All solver processes closed")
        return results

    def getFeasibleCount(self):
        return self.feasibleCnt

    def getInfeasibleCount(self):
        return self.infeasibleCnt

    def saveToJson(self, inputs: list, filePath: str):
        '''
        Write the inputs of the feasible paths as a json list, replacing the whole file
        :param inputs: result of synthesize
        :param filePath: output file
        :return: None
        '''
        feasible = [dict((name, toJsonValue(v)) for name, v in i.items()) for i in inputs if i is not None]
        with open(filePath, "w", encoding='UTF-8') as f:
            json.dump(feasible, f, indent=2)


def toJsonValue(value):
    '''
    Integral decimals become json numbers, the others are written as strings so no digit is lost
    '''
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return str(value)
    return value


_workerSynthesizer = None  # per process synthesizer of the solver pool


def initSolveWorker(cfg: Cfg, parameters: list, timeout: int):
    global _workerSynthesizer
    _workerSynthesizer = InputSynthesizer(cfg, parameters, Z3Backend(timeout))


def solveWorker(pathNodes: list):
    return _workerSynthesizer.solvePath(Path(-1, pathNodes))
