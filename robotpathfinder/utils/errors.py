"""
Custom exception types for robotpathfinder.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class InvalidArgumentError(ValueError):
    """Construction precondition violated (too few waypoints, bad alpha, unordered moments, ...)."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Invalid Argument: {message}")

    def __str__(self):
        return f"Invalid Argument: {self.original_message}"
