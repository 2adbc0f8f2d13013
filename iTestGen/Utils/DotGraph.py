import os

from graphviz import Digraph

from iTestGen.Cfg.Cfg import Cfg
from iTestGen.GraphTools.Path import Path


class DotGraph:
    def __init__(self, cfg: Cfg, path: Path = None):
        """
        :param cfg: the cfg to draw
        :param path: a path to highlight, optional
        """
        self.cfg = cfg
        self.path = path

    def setPath(self, path: Path):
        self.path = path

    def genDot(self):
        '''
        :return: the graphviz Digraph of the cfg
        '''
        dot = Digraph(name=self.cfg.name or "cfg")
        dot.attr("node", shape="box", style="rounded", fontname="Consolas", fontsize="10")
        onPath = set(self.path.getPathNodes()) if self.path is not None else set()
        pathEdges = set(self.path.getEdges()) if self.path is not None else set()

        for ordinal, block in self.cfg.blocks.items():
            lines = ["B{}: {}".format(ordinal, block.kind)]
            lines += [str(op) for op in block.operations]
            if block.hasCondition():
                lines.append("[Cond] {}".format(block.branchCondition))
            if ordinal in onPath:
                dot.node(str(ordinal), label="\\l".join(lines) + "\\l", color="red", penwidth="2")
            else:
                dot.node(str(ordinal), label="\\l".join(lines) + "\\l")

        for ordinal, block in self.cfg.blocks.items():
            for succ in self.cfg.getSuccessors(ordinal):
                attrs = {}
                if block.hasCondition():
                    attrs["label"] = "True" if succ == block.conditionalSuccessor else "False"
                if (ordinal, succ) in pathEdges:
                    attrs["color"] = "red"
                dot.edge(str(ordinal), str(succ), **attrs)
        return dot

    def genDotGraph(self, outputPath: str, outName: str, render: bool = False):
        '''
        Save the cfg as dot source, and as a png when asked to. Rendering needs the Graphviz binaries.
        :return: path of the dot file
        '''
        dot = self.genDot()
        gvFile = os.path.join(outputPath, outName + "_cfg.gv")
        dot.save(filename=gvFile)
        if render:
            dot.render(filename=gvFile, outfile=os.path.join(outputPath, outName + "_cfg.png"), format='png')
        return gvFile
