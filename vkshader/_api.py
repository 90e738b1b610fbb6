"""
The entry points. There are two shapes of invocation, which share the
option parser and the build step:

* ``include_glsl('"shaders/example.vert", version: 450, optimize: size')``
  compiles a file, given relative to the project root.
* ``glsl("kind: vert, r'#version 450 ...'")`` compiles inline source,
  which follows the options.

The ``compile_file()`` and ``compile_source()`` functions provide the same
for callers that have the path or source at hand.
"""

import os

from ._coreutils import get_project_root
from ._errors import ConfigError, SourceReadError
from ._tokens import TokenStream
from ._options import CompileOptions, parse_options
from ._build import SourceUnit, INLINE_NAME, build


def include_glsl(invocation, *, origin="<include_glsl>", project_root=None, backend=None):
    """Compile a GLSL source file into SpirV.

    The invocation text is a string literal with the path of the file,
    relative to the project root, optionally followed by a comma and
    compile options:

    .. code-block:: py

        out = include_glsl('"example.vert", version: 450, optimize: size')

    Supported options:

    * ``kind: <kind>`` - the shader kind. Valid kinds are the same as the recognized
      file extensions: ``vert``, ``frag``, ``comp``, ``geom``, ``tesc``, ``tese``,
      ``spvasm``, ``rgen``, ``rahit``, ``rchit``, ``rmiss``, ``rint``, ``rcall``,
      ``task``, and ``mesh``. If omitted, the kind is inferred from the file's
      extension, or a pragma in the source.
    * ``version: <version>`` - the GLSL version. If omitted, the version must be
      specified in the source with ``#version``.
    * ``strip`` - omit debug info (the default when VKSHADER_STRIP is set).
    * ``debug`` - force debug info, even when VKSHADER_STRIP is set.
    * ``define: <name> ["value"]`` - define the preprocessor macro ``<name>``.
    * ``optimize: <level>`` - ``zero``, ``size``, or ``performance`` (the default).
    * ``target: <target>`` - ``vulkan1_0`` (the default), ``vulkan1_1``,
      ``vulkan1_2`` or ``vulkan1_3``.

    Returns a BuildOutput. Raises a ShaderError subclass on failure.
    """
    stream = TokenStream.from_text(invocation, origin)
    path_tok = stream.parse_str()
    if stream.peek("punct", ","):
        stream.next()
        options = parse_options(stream)
    else:
        options = CompileOptions()
    _expect_end(stream)
    return compile_file(
        path_tok.value,
        options,
        span=path_tok.span,
        project_root=project_root,
        backend=backend,
    )


def glsl(invocation, *, origin="<glsl>", project_root=None, backend=None):
    """Compile inline GLSL source into SpirV.

    The invocation text consists of compile options (see ``include_glsl()``),
    followed by a string literal with the source. When options are given,
    the last one must be followed by a comma. A trailing comma after the
    source is allowed:

    .. code-block:: py

        out = glsl('''
            kind: vert, optimize: size,
            r\"\"\"
            #version 450
            void main() { gl_Position = vec4(0); }
            \"\"\"
        ''')

    Quoted includes in inline source resolve against the project root.
    Returns a BuildOutput. Raises a ShaderError subclass on failure.
    """
    stream = TokenStream.from_text(invocation, origin)
    options = parse_options(stream)
    if options.unterminated:
        stream.parse_punct(",")
    src_tok = stream.parse_str()
    if stream.peek("punct", ","):
        stream.next()
    _expect_end(stream)
    return compile_source(
        src_tok.value,
        options,
        span=src_tok.span,
        project_root=project_root,
        backend=backend,
    )


def compile_file(
    path, options=None, *, span=None, project_root=None, backend=None, **kwargs
):
    """Compile a GLSL file. The path is relative to the project root (or absolute).
    The options can be a CompileOptions object, option text like
    ``"kind: frag, optimize: zero"``, or be given as keyword arguments.
    """
    if project_root is None:
        project_root = get_project_root()
    options = _get_options(options, kwargs)
    abs_path = os.path.abspath(os.path.join(project_root, path))
    try:
        with open(abs_path, "rb") as f:
            src = f.read().decode("utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise SourceReadError(
            f"Could not read shader {abs_path}: {err}", abs_path, span
        ) from None
    unit = SourceUnit(src, abs_path, abs_path, span)
    return build(unit, options, project_root=project_root, backend=backend)


def compile_source(
    src, options=None, *, span=None, project_root=None, backend=None, **kwargs
):
    """Compile GLSL source code given as a string. See ``compile_file()`` for the options."""
    if not isinstance(src, str):
        raise TypeError("compile_source() expects the source as a str.")
    options = _get_options(options, kwargs)
    unit = SourceUnit(src, INLINE_NAME, None, span)
    return build(unit, options, project_root=project_root, backend=backend)


def _get_options(options, kwargs):
    if options is None:
        return CompileOptions(**kwargs)
    elif kwargs:
        raise TypeError("Cannot combine an options object with option keyword arguments.")
    elif isinstance(options, CompileOptions):
        return options
    elif isinstance(options, str):
        stream = TokenStream.from_text(options, "<options>")
        result = parse_options(stream)
        _expect_end(stream)
        return result
    else:
        raise TypeError(f"Invalid compile options: {options!r}")


def _expect_end(stream):
    if not stream.is_empty():
        tok = stream.current()
        raise ConfigError(f"Unexpected {tok.describe()}", tok.span)
