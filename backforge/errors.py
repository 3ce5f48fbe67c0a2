"""
Exceptions raised by the backend registry.

Only construction through the factory raises. Registration conflicts and
lookup misses are reported through return values (False / None).
"""


class UnresolvableTypeError(TypeError):
    """Raised when a requested backend type does not resolve to a registered class."""

    def __init__(self, backend_type, available=None):
        self.backend_type = backend_type
        self.available = list(available or [])

        requested = getattr(backend_type, '__name__', backend_type)
        message = f"Can not determine the backend type: '{requested}'."
        if self.available:
            message += f" Available backends: {', '.join(self.available)}"
        super().__init__(message)
