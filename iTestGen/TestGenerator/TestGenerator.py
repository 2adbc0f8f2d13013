import os

from iTestGen.Cfg.CfgBuilder import CfgBuilder
from iTestGen.Coverage.CoverageSelector import CoverageSelector, getStatementBlocks, getBranchEdges
from iTestGen.GraphTools.PathGenerator import PathGenerator
from iTestGen.TestGenerator.InputSynthesizer import InputSynthesizer
from iTestGen.Utils.DotGraph import DotGraph
from iTestGen.Utils.Logger import Logger

ALL_PATHS = "all"
STATEMENT = "statement"
BRANCH = "branch"
CRITERIA = (ALL_PATHS, STATEMENT, BRANCH)


class TestGenerator:
    __test__ = False  # not a pytest test class

    def __init__(self, inputFile: str, outputPath: str, outputName: str, criterion: str = ALL_PATHS,
                 outputProcessInfo: bool = False, outputGraph: bool = False, processNum: int = 1,
                 timeout: int = None):
        """
        Generate test inputs for a function from its cfg
        :param inputFile: path of the cfg json file
        :param outputPath: directory of the output files
        :param outputName: file name of the generated inputs
        :param criterion: which paths get inputs: all, statement or branch
        :param outputProcessInfo: print paths, ground sets and solver results
        :param outputGraph: also write the cfg as dot source
        :param processNum: number of solver processes
        :param timeout: per path solver timeout in milliseconds
        """
        self.inputFile = inputFile
        self.outputPath = outputPath
        self.outputName = outputName
        self.criterion = criterion
        self.outputProcessInfo = outputProcessInfo
        self.outputGraph = outputGraph
        self.processNum = processNum
        self.timeout = timeout

        self.cfg = None
        self.parameters = []
        self.allPaths = []
        self.requiredBlocks = set()
        self.requiredEdges = set()
        self.statementPaths = []
        self.branchPaths = []
        self.uncoveredBlocks = set()
        self.uncoveredEdges = set()
        self.inputs = []

        self.log = Logger()

    def generate(self):
        '''
        Run the whole generation and write the inputs
        :return: one entry per target path, dict parameterName:value or None
        '''
        self.log.info("Start generating test inputs")
        self.__buildCfg()
        if self.outputGraph:
            self.__outputGraph()

        self.log.info("Searching paths")
        self.__searchPaths()
        self.log.info("Found {} paths".format(len(self.allPaths)))

        self.log.info("Selecting paths for statement and branch coverage")
        self.__selectPaths()

        targets = self.getTargetPaths()
        self.log.info("Solving {} paths for {} coverage".format(len(targets), self.criterion))
        synthesizer = InputSynthesizer(self.cfg, self.parameters, timeout=self.timeout,
                                       processNum=self.processNum, outputProcessInfo=self.outputProcessInfo)
        self.inputs = synthesizer.synthesize(targets)
        self.log.info("Feasible paths: {}, infeasible paths: {}".format(
            synthesizer.getFeasibleCount(), synthesizer.getInfeasibleCount()))

        outFile = os.path.join(self.outputPath, self.outputName)
        self.log.info("Writing test inputs to: {}".format(outFile))
        synthesizer.saveToJson(self.inputs, outFile)
        self.log.info("Done")
        return list(self.inputs)

    def __buildCfg(self):
        builder = CfgBuilder(self.inputFile)
        self.cfg = builder.getCfg()
        self.parameters = builder.getParameters()
        if self.outputProcessInfo:
            self.cfg.output()
            self.log.processing("Parameters: {}".format(
                ", ".join("{}:{}".format(p.name, p.sort) for p in self.parameters)))

    def __searchPaths(self):
        self.allPaths = PathGenerator(self.cfg).genPaths()
        if self.outputProcessInfo:
            self.__printPaths(self.allPaths)

    def __selectPaths(self):
        self.requiredBlocks = getStatementBlocks(self.cfg)
        self.requiredEdges = getBranchEdges(self.cfg)
        self.log.info("Statement blocks to cover: {}".format(len(self.requiredBlocks)))
        self.log.info("Branch edges to cover: {}".format(len(self.requiredEdges)))
        if self.outputProcessInfo:
            self.log.processing("Blocks: {}".format(", ".join("B{}".format(b) for b in sorted(self.requiredBlocks))))
            self.log.processing("Edges: {}".format(
                ", ".join("B{} -> B{}".format(f, t) for f, t in sorted(self.requiredEdges))))

        selector = CoverageSelector()
        self.statementPaths = selector.selectStatementPaths(self.allPaths, self.requiredBlocks)
        self.uncoveredBlocks = selector.getUncovered()
        self.log.info("Statement coverage needs {} paths".format(len(self.statementPaths)))
        if self.outputProcessInfo:
            self.__printPaths(self.statementPaths)

        self.branchPaths = selector.selectBranchPaths(self.allPaths, self.requiredEdges)
        self.uncoveredEdges = selector.getUncovered()
        self.log.info("Branch coverage needs {} paths".format(len(self.branchPaths)))
        if self.outputProcessInfo:
            self.__printPaths(self.branchPaths)

    def __outputGraph(self):
        gvFile = DotGraph(self.cfg).genDotGraph(self.outputPath, os.path.splitext(self.outputName)[0])
        self.log.info("CFG written to: {}".format(gvFile))

    def __printPaths(self, paths: list):
        for i in range(len(paths)):
            self.log.processing("Path {}: {}".format(i + 1, paths[i]))

    def getTargetPaths(self):
        match self.criterion:
            case "statement":
                return list(self.statementPaths)
            case "branch":
                return list(self.branchPaths)
            case _:
                return list(self.allPaths)

    def getCfg(self):
        return self.cfg

    def getAllPaths(self):
        return list(self.allPaths)

    def getStatementPaths(self):
        return list(self.statementPaths)

    def getBranchPaths(self):
        return list(self.branchPaths)

    def getUncoveredBlocks(self):
        return set(self.uncoveredBlocks)

    def getUncoveredEdges(self):
        return set(self.uncoveredEdges)
