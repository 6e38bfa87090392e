from irrigsim.core.control.controller import ValveController

__all__ = [
    "ValveController",
]
