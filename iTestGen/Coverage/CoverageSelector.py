from iTestGen.Cfg.BasicBlock import REGULAR
from iTestGen.Cfg.Cfg import Cfg
from iTestGen.Utils.Logger import Logger


def getStatementBlocks(cfg: Cfg):
    '''
    Ground set of statement coverage: the regular blocks holding at least one operation
    :return: {ordinal1, ordinal2...}
    '''
    return set(ordinal for ordinal, b in cfg.blocks.items() if b.kind == REGULAR and b.operations.__len__() > 0)


def getBranchEdges(cfg: Cfg, trueEdgesOnly: bool = False):
    '''
    Ground set of branch coverage: the edges leaving every block that carries a branch condition
    :param cfg: the cfg
    :param trueEdgesOnly: keep only the edge to the conditional successor of each such block
    :return: {(from,to)...}
    '''
    edges = set()
    for ordinal, b in cfg.blocks.items():
        if not b.hasCondition():
            continue
        if b.conditionalSuccessor in cfg.blocks.keys():
            edges.add((ordinal, b.conditionalSuccessor))
        if not trueEdgesOnly and b.fallThroughSuccessor in cfg.blocks.keys():
            edges.add((ordinal, b.fallThroughSuccessor))
    return edges


class CoverageSelector:
    """
    Greedy set cover over enumerated paths. Each round takes the path covering the most
    still-uncovered elements; the first one in enumeration order wins a tie. The result is
    complete or reports its residue, it is not guaranteed to be the smallest possible set.
    """

    def __init__(self):
        self.selectedPaths = []
        self.uncovered = set()
        self.log = Logger()

    def selectStatementPaths(self, paths: list, requiredBlocks: set):
        '''
        :param paths: enumerated paths, [Path1, Path2...]
        :param requiredBlocks: ordinals to cover
        :return: the selected paths, in selection order
        '''
        return self.__greedyCover(paths, requiredBlocks, lambda p: set(p.getPathNodes()), "blocks")

    def selectBranchPaths(self, paths: list, requiredEdges: set):
        '''
        :param paths: enumerated paths, [Path1, Path2...]
        :param requiredEdges: edges to cover, format {(from,to)...}
        :return: the selected paths, in selection order
        '''
        return self.__greedyCover(paths, requiredEdges, lambda p: set(p.getEdges()), "branch edges")

    def __greedyCover(self, paths: list, required: set, elementsOf, what: str):
        self.selectedPaths = []
        self.uncovered = set(required)
        candidates = [(p, elementsOf(p)) for p in paths]

        while self.uncovered.__len__() > 0:
            bestIndex = -1
            maxNewCovered = 0
            for i in range(len(candidates)):
                newCovered = len(candidates[i][1] & self.uncovered)
                if newCovered > maxNewCovered:  # strict, so the earliest maximal path is kept
                    maxNewCovered = newCovered
                    bestIndex = i

            if bestIndex == -1:  # nothing left covers a new element, e.g. unreachable code
                self.log.warning("Unable to cover the remaining {} {}: {}".format(
                    self.uncovered.__len__(), what, sorted(self.uncovered)))
                break

            bestPath, covered = candidates.pop(bestIndex)
            self.selectedPaths.append(bestPath)
            self.uncovered -= covered

        return list(self.selectedPaths)

    def getSelectedPaths(self):
        return list(self.selectedPaths)

    def getUncovered(self):
        '''
        :return: the elements no selected path covers, empty when the cover is complete
        '''
        return set(self.uncovered)
