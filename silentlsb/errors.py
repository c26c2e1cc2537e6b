"""Exceptions raised by the steganography formats."""


class ModuleError(Exception):
    """A format failed to hide or recover data.

    ``message`` is a short summary; ``details`` carries the technical context.
    """

    def __init__(self, message, details=""):
        super().__init__(message, details)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message