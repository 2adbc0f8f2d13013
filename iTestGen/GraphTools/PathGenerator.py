# Enumerate all simple paths of a cfg, starting at its entry block
# The result format is [Path1, Path2...], each Path holding the ordinals it passes through
# The cfg may contain loops; a block never appears twice in one path

from iTestGen.Cfg.Cfg import Cfg
from iTestGen.GraphTools.Path import Path
from iTestGen.Utils.Stack import Stack


class DfsFrame:
    def __init__(self, node: int, successors: list, isExit: bool):
        self.node = node
        self.successors = successors
        self.isExit = isExit
        self.nextIndex = 0  # next successor to look at
        self.hasUnvisitedSucc = False  # whether some successor could extend the path


class PathGenerator:
    def __init__(self, cfg: Cfg):
        """
        :param cfg: the graph to search, edges are taken from the successors of its blocks
        """
        self.cfg = cfg
        self.pathRecorder = Stack()
        self.visiting = set()  # blocks on the current branch
        self.paths = []

    def genPaths(self):
        '''
        Generate all simple paths starting at the entry block.
        A path ends where no unvisited successor is left, or at the exit block. Successors of
        the exit block are still explored, so longer paths through it are recorded as well.
        :return: [Path1, Path2...]
        '''
        self.pathRecorder.clear()
        self.visiting.clear()
        self.paths.clear()
        if self.cfg.isEmpty():
            return []

        frames = Stack()
        self.__enter(frames, self.cfg.initBlockId)
        while not frames.empty():
            frame = frames.getTop()
            succ = None
            while frame.nextIndex < len(frame.successors):
                candidate = frame.successors[frame.nextIndex]
                frame.nextIndex += 1
                if candidate not in self.visiting:
                    succ = candidate
                    break
            if succ is not None:
                frame.hasUnvisitedSucc = True
                self.__enter(frames, succ)
                continue

            # every successor explored, leave the block
            if not frame.hasUnvisitedSucc or frame.isExit:
                self.paths.append(Path(len(self.paths), self.pathRecorder.getStack()))
            frames.pop()
            self.pathRecorder.pop()
            self.visiting.discard(frame.node)

        return list(self.paths)

    def __enter(self, frames: Stack, node: int):
        self.pathRecorder.push(node)
        self.visiting.add(node)
        frames.push(DfsFrame(node, self.cfg.getSuccessors(node), self.cfg.getBlock(node).isExit()))

    def getPaths(self):
        return list(self.paths)
