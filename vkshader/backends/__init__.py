"""
The compiler backends that turn GLSL (or SpirV assembly) into SpirV words.

A backend is an object with a ``compile()`` method:

    compile(source_text, kind, source_name, entry_point, params) -> CompilationResult

It must call ``params.include_callback`` for every ``#include`` it
encounters, synchronously and in preprocessing order, and raise a
``BackendError`` when the source is rejected. Warnings are not errors at
this level: they are reported in the result.
"""

from .._coreutils import logger
from .._errors import BackendNotAvailable
from ..enums import GlslProfile, TargetEnv
from .._tables import DEFAULT_TARGET_VERSION


class CompileParameters:
    """The backend-level compile options, derived from a CompileOptions object."""

    def __init__(self):
        self.forced_version = None
        self.profile = GlslProfile.NONE
        self.definitions = []
        self.generate_debug_info = False
        self.optimization = None
        self.target_env = TargetEnv.Vulkan
        self.target_env_version = DEFAULT_TARGET_VERSION
        self.include_callback = None

    def set_forced_version_profile(self, version, profile):
        self.forced_version = version
        self.profile = profile

    def add_macro_definition(self, name, value=None):
        self.definitions.append((name, value))

    def set_generate_debug_info(self):
        self.generate_debug_info = True

    def set_optimization_level(self, level):
        self.optimization = level

    def set_target_env(self, env, version):
        self.target_env = env
        self.target_env_version = version

    def set_include_callback(self, callback):
        self.include_callback = callback


class CompilationResult:
    """The output of a successful compile: the SpirV words and any warnings."""

    def __init__(self, words, num_warnings=0, warning_messages=""):
        self.words = list(words)
        self.num_warnings = num_warnings
        self.warning_messages = warning_messages

    def __repr__(self):
        return f"<CompilationResult {len(self.words)} words, {self.num_warnings} warnings>"


def as_c_int(value):
    """Reinterpret an unsigned 32-bit value as a C int, wrapping around like a C cast."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


_backend = None


def register_backend(backend):
    """Set the backend that is used by all subsequent builds.
    Returns the previously registered backend (or None).
    """
    global _backend
    if not callable(getattr(backend, "compile", None)):
        raise TypeError("A vkshader backend must have a 'compile' method.")
    previous, _backend = _backend, backend
    return previous


def get_backend():
    """Get the current backend, loading the shaderc backend if none is registered."""
    global _backend
    if _backend is None:
        try:
            from .shaderc import ShadercBackend
        except (OSError, ImportError) as err:
            raise BackendNotAvailable(f"Could not load the shaderc backend: {err}") from err
        _backend = ShadercBackend()
        logger.debug(f"Using backend {_backend!r}")
    return _backend
