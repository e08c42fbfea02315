"""
acyclic_gp/errors.py - Exceptions raised by the evolutionary core
"""


class ConfigurationError(ValueError):
    """Invalid run configuration or dataset, detected before evolution starts"""


class InvariantViolation(AssertionError):
    """A broken internal precondition (programming error, not bad input)"""
