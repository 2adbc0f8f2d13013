from iTestGen.Solver.SolverBackend import SolverBackend, SolverScope, SAT, UNSAT, UNKNOWN
from iTestGen.Solver.Z3Backend import Z3Backend
