from iTestGen.Cfg.BasicBlock import BasicBlock, EXIT


class Cfg:

    def __init__(self, name: str = ""):
        self.name = name  # name of the analysed method
        self.blocks = {}  # basic blocks, format ordinal:BasicBlock, in insertion order
        self.initBlockId = None  # the first block added is the entry by convention
        self.exitBlockId = None

    def addBasicBlock(self, block: BasicBlock):
        ordinal = block.ordinal
        if self.initBlockId is None:
            self.initBlockId = ordinal
        if block.kind == EXIT:
            self.exitBlockId = ordinal
        self.blocks[ordinal] = block

    def getSuccessors(self, ordinal: int):
        '''
        Successors of a block that exist in the cfg. Dangling destinations are dropped.
        :param ordinal: ordinal of the block
        :return: [to1,to2]
        '''
        block = self.blocks.get(ordinal)
        if block is None:
            return []
        return [succ for succ in block.getSuccessors() if succ in self.blocks.keys()]

    def getEdges(self):
        '''
        :return: out edges, format from:[to1,to2...]
        '''
        return dict((ordinal, self.getSuccessors(ordinal)) for ordinal in self.blocks.keys())

    def getBlock(self, ordinal: int):
        return self.blocks.get(ordinal)

    def isEmpty(self):
        return self.blocks.__len__() == 0

    def output(self):
        print("blocks:")
        for key, value in self.blocks.items():
            value.printBlockInfo()
        print("edges:")
        for key, value in self.getEdges().items():
            print('{f}->{t}'.format(f=key, t=value))
