class CalculatorError(ValueError):
    """Raised when an arithmetic expression cannot be evaluated."""
