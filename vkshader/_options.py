"""
The compile options, and the parser for the comma-separated option list.
"""

from ._coreutils import get_env_flag, enum_name
from ._errors import ConfigError
from ._tables import (
    DEFAULT_TARGET_VERSION,
    decode_vulkan_version,
    extension_kind,
    optimization_level,
    target,
)
from .enums import ShaderKind, OptimizationLevel


OPTION_KEYS = ("kind", "version", "strip", "debug", "define", "optimize", "target")

MAX_U32 = 2**32 - 1


class CompileOptions:
    """The options for compiling a single shader.

    The defaults for ``debug`` and ``optimization`` depend on the build-wide
    modes set with the ``VKSHADER_STRIP`` and ``VKSHADER_DEFAULT_OPTIMIZE_ZERO``
    environment variables, which are read when the object is created.
    """

    def __init__(
        self,
        *,
        kind=None,
        version=None,
        debug=None,
        definitions=(),
        optimization=None,
        target_version=DEFAULT_TARGET_VERSION,
    ):
        if debug is None:
            debug = not get_env_flag("VKSHADER_STRIP")
        if optimization is None:
            if get_env_flag("VKSHADER_DEFAULT_OPTIMIZE_ZERO"):
                optimization = OptimizationLevel.Zero
            else:
                optimization = OptimizationLevel.Performance
        if kind is not None and kind not in ShaderKind:
            raise ValueError(f"Invalid shader kind: {kind!r}")
        if optimization not in OptimizationLevel:
            raise ValueError(f"Invalid optimization level: {optimization!r}")
        if version is not None and not (0 <= version <= MAX_U32):
            raise ValueError(f"GLSL version out of range: {version}")

        self.kind = kind
        self.version = version
        self.debug = bool(debug)
        self.definitions = [(name, value) for name, value in definitions]
        self.optimization = optimization
        self.target_version = target_version
        # Set by the parser when the option list did not end with a comma
        self.unterminated = False

    def __repr__(self):
        major, minor = decode_vulkan_version(self.target_version)
        kind = "infer" if self.kind is None else enum_name(ShaderKind, self.kind)
        opt = enum_name(OptimizationLevel, self.optimization)
        return (
            f"<CompileOptions kind={kind} version={self.version} debug={self.debug}"
            f" definitions={self.definitions} optimization={opt}"
            f" target=vulkan{major}.{minor}>"
        )

    def __eq__(self, other):
        if not isinstance(other, CompileOptions):
            return NotImplemented
        return self._key() == other._key()

    def _key(self):
        return (
            self.kind,
            self.version,
            self.debug,
            self.definitions,
            self.optimization,
            self.target_version,
        )


def parse_options(stream):
    """Parse a comma-separated option list from the given TokenStream.

    Parsing continues while the next token is an identifier, so it stops
    (without error) at e.g. a string literal, or at the end of the stream.
    Each entry may be followed by a comma; if it is not, the returned
    options are marked ``unterminated`` and parsing stops.
    """
    out = CompileOptions()

    while stream.peek("ident"):
        key = stream.parse_ident()
        name = key.value

        if name == "kind":
            stream.parse_punct(":")
            value = stream.parse_ident()
            kind = extension_kind(value.value)
            if kind is None:
                raise ConfigError(
                    f"unknown shader kind {value.value!r} for option 'kind'", value.span
                )
            out.kind = kind

        elif name == "version":
            stream.parse_punct(":")
            value = stream.parse_int()
            if not (0 <= value.value <= MAX_U32):
                raise ConfigError(
                    f"version {value.value} does not fit in an unsigned 32-bit integer",
                    value.span,
                )
            out.version = value.value

        elif name == "strip":
            out.debug = False

        elif name == "debug":
            out.debug = True

        elif name == "define":
            stream.parse_punct(":")
            macro = stream.parse_ident()
            if stream.peek("punct", ",") or stream.is_empty():
                value = None
            else:
                value = stream.parse_str().value
            out.definitions.append((macro.value, value))

        elif name == "optimize":
            stream.parse_punct(":")
            value = stream.parse_ident()
            level = optimization_level(value.value)
            if level is None:
                raise ConfigError(
                    f"unknown optimization level {value.value!r} for option 'optimize'",
                    value.span,
                )
            out.optimization = level

        elif name == "target":
            stream.parse_punct(":")
            value = stream.parse_ident()
            version = target(value.value)
            if version is None:
                raise ConfigError(
                    f"unknown target {value.value!r} for option 'target'", value.span
                )
            out.target_version = version

        else:
            raise ConfigError(f"unknown shader compile option {name!r}", key.span)

        if stream.peek("punct", ","):
            stream.next()
        else:
            out.unterminated = True
            break

    return out
