class TSPError(Exception):
    """Base class for every error raised by the solver"""


class InvalidInput(TSPError, ValueError):
    """The cost matrix or the start location can't be solved"""


class NoTourFound(TSPError):
    """Every way of closing the tour back to the start is unreachable"""


class ReconstructionFailure(TSPError, RuntimeError):
    """The DP table has no predecessor where one must exist (a solver bug)"""
