from iTestGen.Cfg.Expression import Expression

ENTRY = "Entry"
REGULAR = "Regular"
EXIT = "Exit"

WHEN_TRUE = "WhenTrue"
WHEN_FALSE = "WhenFalse"


class BasicBlock:

    def __init__(self,
                 ordinal: int,
                 kind: str = REGULAR,
                 operations: list = None,
                 branchCondition: Expression = None,
                 conditionKind: str = None,
                 conditionalSuccessor: int = None,
                 fallThroughSuccessor: int = None):
        """ A straight-line block of the analysed function
        :param ordinal: identity of the block, unique within one cfg
        :param kind: Entry, Regular or Exit
        :param operations: statements of the block, in order
        :param branchCondition: condition evaluated at the end of the block, if any
        :param conditionKind: WhenTrue/WhenFalse, which half of a split condition the block is
        :param conditionalSuccessor: ordinal of the block reached when the condition holds
        :param fallThroughSuccessor: ordinal of the block reached otherwise
        """
        self.ordinal = int(ordinal)
        self.kind = kind
        self.operations = tuple(operations) if operations else ()
        self.branchCondition = branchCondition
        self.conditionKind = conditionKind
        self.conditionalSuccessor = conditionalSuccessor
        self.fallThroughSuccessor = fallThroughSuccessor

    def hasCondition(self):
        return self.branchCondition is not None

    def isExit(self):
        return self.kind == EXIT

    def getSuccessors(self):
        '''
        Successor ordinals in exploration order: fall-through first, then conditional.
        A destination named by both edges appears once.
        :return: [ordinal1, ordinal2]
        '''
        successors = []
        if self.fallThroughSuccessor is not None:
            successors.append(self.fallThroughSuccessor)
        if self.conditionalSuccessor is not None and self.conditionalSuccessor not in successors:
            successors.append(self.conditionalSuccessor)
        return successors

    def printBlockInfo(self):
        """ Print the block information
        """
        print("Block'ordinal:{}".format(self.ordinal))
        print("Block'kind:{}".format(self.kind))
        print("Block'operations:{}".format([str(op) for op in self.operations]))
        print("Block'branch condition:{}".format(self.branchCondition))
        print("Block'condition kind:{}".format(self.conditionKind))
        print("Block'conditional successor:{}".format(self.conditionalSuccessor))
        print("Block'fall through successor:{}".format(self.fallThroughSuccessor))
