# The solver seen by the symbolic executor and the input synthesizer.
# A backend is a term factory shared by the whole run; a scope is one solver query,
# opened for a single path and released right after it, whatever happened.

SAT = "sat"
UNSAT = "unsat"
UNKNOWN = "unknown"


class SolverScope:

    def __enter__(self):
        return self

    def __exit__(self, excType, excValue, traceback):
        self.release()
        return False

    def add(self, constraint):
        raise NotImplementedError

    def check(self):
        '''
        :return: SAT, UNSAT or UNKNOWN
        '''
        raise NotImplementedError

    def readValue(self, variable):
        '''
        Read the value of a variable from the model of the last satisfiable check
        :return: int, Decimal or bool
        '''
        raise NotImplementedError

    def release(self):
        raise NotImplementedError


class SolverBackend:

    def declareVariable(self, name: str, sort: str):
        '''
        Create a fresh variable
        :param name: prefix of the variable name, only used for display
        :param sort: Integer, Real or Boolean
        :return: the variable, None for any other sort
        '''
        raise NotImplementedError

    def mkLiteral(self, value, sort: str):
        raise NotImplementedError

    def mkBinary(self, op: str, left, right):
        '''
        Build an arithmetic, comparison or logical term. Operands already have matching sorts.
        :return: the term, None if the backend cannot build it
        '''
        raise NotImplementedError

    def mkNot(self, term):
        raise NotImplementedError

    def toReal(self, term):
        '''Exact embedding of an Integer term into the Real sort'''
        raise NotImplementedError

    def sortOf(self, term):
        '''
        :return: Integer, Real, Boolean, or None for a term of any other sort
        '''
        raise NotImplementedError

    def newScope(self):
        '''
        :return: a fresh SolverScope, to be used as a context manager
        '''
        raise NotImplementedError
