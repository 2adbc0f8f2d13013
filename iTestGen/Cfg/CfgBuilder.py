import json
from decimal import Decimal, InvalidOperation

from iTestGen.Cfg.BasicBlock import BasicBlock, ENTRY, REGULAR, EXIT, WHEN_TRUE, WHEN_FALSE
from iTestGen.Cfg.Cfg import Cfg
from iTestGen.Cfg.Expression import *
from iTestGen.Utils.Logger import Logger


class CfgFormatError(Exception):
    pass


class CfgBuilder:

    def __init__(self, srcPath: str = None, document: dict = None):
        """ Build a cfg and its parameter list from the json file produced by the front-end
        :param srcPath: path of the cfg json file
        :param document: an already loaded json document, used instead of srcPath
        """
        self.srcPath = srcPath
        self.cfg = Cfg()
        self.symbols = {}  # declared symbols, format id:Symbol
        self.parameters = []  # parameter symbols in declaration order
        self.log = Logger()
        if document is None:
            document = self.__readJson()
        self.__buildCfg(document)

    @classmethod
    def fromDict(cls, document: dict):
        return cls(document=document)

    def __readJson(self):
        try:
            with open(self.srcPath, 'r', encoding='UTF-8') as f:
                return json.load(f)
        except OSError as e:
            raise CfgFormatError("cannot read cfg file {}: {}".format(self.srcPath, e)) from e
        except json.JSONDecodeError as e:
            raise CfgFormatError("cfg file {} is not valid json: {}".format(self.srcPath, e)) from e

    def __buildCfg(self, document):
        self.log.info("Building CFG")
        if not isinstance(document, dict) or not isinstance(document.get("blocks"), list):
            raise CfgFormatError("a cfg document needs a 'blocks' list")
        self.cfg.name = str(document.get("method", ""))

        # symbol table first, expressions refer to it by id
        symbols = document.get("symbols", [])
        parameters = document.get("parameters", [])
        if not isinstance(symbols, list) or not isinstance(parameters, list):
            raise CfgFormatError("'symbols' and 'parameters' must be lists")
        for i in range(len(symbols)):
            s = symbols[i]
            if not isinstance(s, dict) or "id" not in s:
                raise CfgFormatError("symbol {} needs an 'id'".format(i))
            try:
                symbol = Symbol(s["id"], s.get("name", "s{}".format(s["id"])), s.get("sort", UNSUPPORTED))
                self.symbols[symbol.symbolId] = symbol
            except TypeError as e:  # unhashable id
                raise CfgFormatError("malformed symbol {}: {}".format(i, e)) from e
        for symbolId in parameters:
            if isinstance(symbolId, (int, str)) and symbolId in self.symbols.keys():
                self.parameters.append(self.symbols[symbolId])
            else:
                self.log.warning("Parameter refers to an undeclared symbol: {}".format(symbolId))

        for i in range(len(document["blocks"])):
            b = document["blocks"][i]
            if not isinstance(b, dict) or "ordinal" not in b:
                raise CfgFormatError("block {} needs an 'ordinal'".format(i))
            try:
                self.cfg.addBasicBlock(self.__parseBlock(b))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise CfgFormatError("malformed block {}: {}".format(i, e)) from e

        self.log.info("CFG built: {} blocks, {} parameters".format(len(self.cfg.blocks), len(self.parameters)))

    def __parseBlock(self, b: dict):
        kind = b.get("kind", REGULAR)
        if kind not in (ENTRY, REGULAR, EXIT):
            kind = REGULAR
        conditionKind = b.get("conditionKind")
        if conditionKind not in (WHEN_TRUE, WHEN_FALSE):
            conditionKind = None
        cond = b.get("branchCondition")
        return BasicBlock(ordinal=b["ordinal"],
                          kind=kind,
                          operations=[self.__parseOperation(op) for op in b.get("operations", [])],
                          branchCondition=None if cond is None else self.__parseExpression(cond),
                          conditionKind=conditionKind,
                          conditionalSuccessor=b.get("conditional"),
                          fallThroughSuccessor=b.get("fallThrough"))

    def __getSymbol(self, symbolId):
        return self.symbols.get(symbolId)

    def __parseOperation(self, op: dict):
        match op.get("type"):
            case "assignment":
                target = self.__getSymbol(op.get("target"))
                if target is not None and "value" in op:
                    return Assignment(target, self.__parseExpression(op["value"]))
            case "declaration":
                symbol = self.__getSymbol(op.get("symbol"))
                if symbol is not None:
                    init = op.get("initializer")
                    return Declaration(symbol, None if init is None else self.__parseExpression(init))
        return OtherOperation(str(op.get("text", op.get("type", ""))))

    def __parseExpression(self, e: dict):
        if not isinstance(e, dict):
            return OpaqueExpression(str(e))
        match e.get("type"):
            case "literal":
                value = self.__parseConstant(e.get("value"), e.get("sort"))
                if value is not None:
                    return Literal(value)
            case "parameter":
                symbol = self.__getSymbol(e.get("symbol"))
                if symbol is not None:
                    return ParameterRef(symbol)
            case "local":
                symbol = self.__getSymbol(e.get("symbol"))
                if symbol is not None:
                    return LocalRef(symbol)
            case "field":
                symbol = self.__getSymbol(e.get("symbol"))
                if symbol is not None:
                    constant = None
                    if e.get("constant") is not None:
                        constant = self.__parseConstant(e["constant"], e.get("sort", symbol.sort))
                    return FieldRef(symbol, constant)
            case "binary":
                return Binary(e.get("op"), self.__parseExpression(e.get("left")),
                              self.__parseExpression(e.get("right")))
            case "unary":
                return Unary(e.get("op"), self.__parseExpression(e.get("operand")))
            case "invocation":
                return Invocation(str(e.get("name", "")), [self.__parseExpression(a) for a in e.get("args", [])])
            case "conversion":
                sort = e.get("sort", UNSUPPORTED)
                return Conversion(self.__parseExpression(e.get("operand")), sort if sort in SORTS else UNSUPPORTED)
        return OpaqueExpression(str(e.get("text", e.get("type", ""))))

    def __parseConstant(self, value, sort: str = None):
        '''
        Turn a json scalar into an int, Decimal or bool
        :param value: the json value
        :param sort: declared sort, decides between Integer and Real for numbers
        :return: the constant, None if it is not a supported finite scalar
        '''
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and sort != REAL:
            return value
        if not isinstance(value, (int, float, str)):
            return None
        if isinstance(value, str) and sort not in (None, INTEGER, REAL):
            return None
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return None
        if not number.is_finite():  # NaN and Infinity, also the json tokens of them
            return None
        return int(number) if sort == INTEGER else number

    def getCfg(self):
        return self.cfg

    def getParameters(self):
        return list(self.parameters)

    def getSymbols(self):
        return dict(self.symbols)
