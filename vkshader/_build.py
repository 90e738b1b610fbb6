"""
Turning a source unit plus compile options into SpirV words and a list
of dependencies, with a single call into the compiler backend.
"""

import os

from ._coreutils import logger, get_project_root, enum_name
from ._errors import BackendError, ShaderError
from ._resolver import IncludeResolver
from ._tables import extension_kind
from ._artifact import BuildOutput
from .backends import CompileParameters, get_backend
from .enums import GlslProfile, ShaderKind, TargetEnv


ENTRY_POINT = "main"
INLINE_NAME = "inline"


class SourceUnit:
    """The shader to compile.

    * src: the source text.
    * name: the name shown in diagnostics; the path, or "inline".
    * path: the absolute path of the file, or None for inline sources.
    * span: the location of the invocation that requested the build.
    """

    def __init__(self, src, name, path=None, span=None):
        self.src = src
        self.name = name
        self.path = path
        self.span = span

    def __repr__(self):
        return f"<SourceUnit {self.name!r}>"


def get_compile_parameters(options):
    """Convert CompileOptions into backend CompileParameters (without include callback)."""
    params = CompileParameters()
    if options.version is not None:
        params.set_forced_version_profile(options.version, GlslProfile.NONE)
    for name, value in options.definitions:
        params.add_macro_definition(name, value)
    if options.debug:
        params.set_generate_debug_info()
    params.set_optimization_level(options.optimization)
    params.set_target_env(TargetEnv.Vulkan, options.target_version)
    return params


def get_shader_kind(options, path):
    """Select the shader kind: the explicit kind, else from the file extension,
    else let the backend infer it from the source.
    """
    if options.kind is not None:
        return options.kind
    if path is not None:
        ext = os.path.splitext(path)[1].lstrip(".")
        kind = extension_kind(ext)
        if kind is not None:
            return kind
    return ShaderKind.InferFromSource


def build(unit, options, *, project_root=None, backend=None):
    """Compile the given SourceUnit with the given CompileOptions.

    Returns a BuildOutput with the SpirV words and the absolute paths of all
    sources that went into it: the source file itself (if it is a file)
    followed by every include, in the order they were resolved. Raises a
    ShaderError subclass on failure. Any warning counts as a failure.
    """
    if project_root is None:
        project_root = get_project_root()
    if backend is None:
        backend = get_backend()

    sources = [unit.path] if unit.path is not None else []
    resolver = IncludeResolver(
        project_root, top_name=unit.name, top_path=unit.path, sources=sources
    )

    params = get_compile_parameters(options)
    kind = get_shader_kind(options, unit.path)
    params.set_include_callback(resolver)

    logger.debug(f"Building {unit.name} as {enum_name(ShaderKind, kind)}: {options!r}")
    try:
        result = backend.compile(unit.src, kind, unit.name, ENTRY_POINT, params)
    except ShaderError as err:
        if err.span is None:
            err.span = unit.span
        raise
    finally:
        # The callback holds on to the sources list; it must not leak out of this call.
        params.set_include_callback(None)

    if result.num_warnings:
        message = result.warning_messages.strip()
        message = message or f"Shader compiled with {result.num_warnings} warning(s)."
        raise BackendError(message, unit.span)

    return BuildOutput(list(sources), result.words)
