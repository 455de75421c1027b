"""
Shared test helpers.

- Recorder: in-memory diagnostic sink collecting what error()/warning() receive.
"""


class Recorder:
    """in-memory diagnostic sink."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def error(self, message, /):
        self.errors.append(message)

    def warning(self, message, /):
        self.warnings.append(message)
