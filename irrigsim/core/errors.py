class ConfigurationError(ValueError):
    """Raised when a simulation configuration is invalid.

    Detected when the configuration is built, before any step executes.
    """


class NumericBoundViolation(ArithmeticError):
    """Raised when a recorded quantity leaves its physical bounds."""
