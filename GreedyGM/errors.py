"""
Exceptions raised by the greedy ground motion selection routines
"""


class SelectionError(ValueError):
    """
    Base class for all errors raised while selecting ground motions.
    """


class ConfigurationError(SelectionError):
    """
    Selection settings, target statistics, candidate pool or the selected set are inconsistent.
    """


class InfeasibleScalingError(SelectionError):
    """
    The maximum allowable scale factor leaves no admissible record.
    """


class NumericDegeneracyError(SelectionError):
    """
    A target value or a spectral ordinate makes the error computations non-finite.
    """
