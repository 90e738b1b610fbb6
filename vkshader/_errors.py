"""
The exceptions raised when a shader cannot be built. Each carries a
message and, when known, the span of the invocation that requested the
build, so it can be reported at the call site.
"""


class ShaderError(Exception):
    """A generic shader build error."""

    def __init__(self, message, span=None):
        super().__init__(message)
        self.span = span

    @property
    def message(self):
        """The error message."""
        return self.args[0]

    def __str__(self):
        if self.span is None:
            return self.message
        return f"{self.span}: {self.message}"


class ConfigError(ShaderError):
    """An error raised for an unknown option or a malformed option value."""


class ResolutionError(ShaderError):
    """An error raised when an include target cannot be located or read."""

    def __init__(self, message, path, span=None):
        super().__init__(message, span)
        self.path = path


class SourceReadError(ShaderError):
    """An error raised when the top-level shader file cannot be read."""

    def __init__(self, message, path, span=None):
        super().__init__(message, span)
        self.path = path


class BackendError(ShaderError):
    """An error raised when the compiler rejects the shader or reports warnings."""


class BackendNotAvailable(ShaderError, RuntimeError):
    """An error raised when no compiler backend can be loaded."""
