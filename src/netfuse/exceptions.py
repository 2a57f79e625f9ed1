"""Exception and warning types raised by netfuse"""


class InvalidInput(ValueError):
    """Malformed matrices or out-of-range parameters at a public entry point"""


class NumericDegeneracyWarning(RuntimeWarning):
    """A numeric edge case (e.g. isolated nodes) was resolved by a fallback"""
