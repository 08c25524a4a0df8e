"""Rejection errors raised by calculate_futures_grid().

Messages are written to be shown verbatim to the person submitting the grid.
"""


class GridValidationError(ValueError):
    """Base class for grid configurations the calculator refuses."""


class InvalidCapitalBounds(GridValidationError):
    """Investment or manual reserve exceeds the available balance."""


class InsufficientMargin(GridValidationError):
    """Usable margin does not exceed the maintenance margin."""


class NegativeUsableMargin(GridValidationError):
    """Reserved margin consumes more than the investment."""
