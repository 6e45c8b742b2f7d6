class TransformSyntaxError(ValueError):
    """Malformed transformation command string.

    Raised for every parse failure, including expressions the calculator
    rejects (the calculator error is kept as ``__cause__``).
    """
