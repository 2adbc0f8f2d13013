class Path:
    def __init__(self, pathId: int, pathNodes: list):
        self.pathId = pathId
        self.pathNodes = tuple(pathNodes)  # ordinals of the blocks, starting at the entry
        self.lastNode = self.pathNodes[-1] if self.pathNodes else None

    def getPathNodes(self):
        return list(self.pathNodes)

    def getId(self):
        return self.pathId

    def getLastNode(self):
        return self.lastNode

    def getEdges(self):
        '''
        :return: consecutive block pairs of the path, format [(from,to)...]
        '''
        return [(self.pathNodes[i], self.pathNodes[i + 1]) for i in range(len(self.pathNodes) - 1)]

    def __len__(self):
        return self.pathNodes.__len__()

    def __contains__(self, node):
        return node in self.pathNodes

    def __str__(self):
        return " -> ".join("B{}".format(n) for n in self.pathNodes)
