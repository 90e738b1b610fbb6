"""
The compile call against libshaderc.

The compiler, compile options and result objects are C handles that
must be released explicitly. Each is wrapped in a context manager, so
they are released on every exit path, including errors raised from the
include callback.
"""

from contextlib import contextmanager

from ..._coreutils import logger, enum_name
from ..._errors import BackendError
from ...enums import ShaderKind
from .. import CompilationResult, as_c_int
from ._ffi import ffi, lib, lib_path


STATUS_NAMES = {
    lib.shaderc_compilation_status_success: "success",
    lib.shaderc_compilation_status_invalid_stage: "invalid stage",
    lib.shaderc_compilation_status_compilation_error: "compilation error",
    lib.shaderc_compilation_status_internal_error: "internal error",
    lib.shaderc_compilation_status_null_result_object: "null result object",
    lib.shaderc_compilation_status_invalid_assembly: "invalid assembly",
    lib.shaderc_compilation_status_validation_error: "validation error",
    lib.shaderc_compilation_status_transformation_error: "transformation error",
    lib.shaderc_compilation_status_configuration_error: "configuration error",
}


def _to_str(c_str):
    if c_str == ffi.NULL:
        return ""
    # Paths may not be valid utf-8, keep them round-trippable
    return ffi.string(c_str).decode("utf-8", errors="surrogateescape")


@contextmanager
def compiler_handle():
    """Context manager that provides a shaderc compiler object."""
    compiler = lib.shaderc_compiler_initialize()
    if compiler == ffi.NULL:
        raise BackendError("Could not initialize the shaderc compiler.")
    try:
        yield compiler
    finally:
        lib.shaderc_compiler_release(compiler)


@contextmanager
def compile_options_handle(params):
    """Context manager that provides shaderc compile options that reflect the
    given CompileParameters. The include callback is attached as well, so the
    options must not outlive the compile call.
    """
    options = lib.shaderc_compile_options_initialize()
    if options == ffi.NULL:
        raise BackendError("Could not initialize the shaderc compile options.")
    try:
        if params.forced_version is not None:
            lib.shaderc_compile_options_set_forced_version_profile(
                options, as_c_int(params.forced_version), params.profile
            )
        for name, value in params.definitions:
            c_name = name.encode()
            c_value = b"" if value is None else value.encode()
            lib.shaderc_compile_options_add_macro_definition(
                options,
                c_name,
                len(c_name),
                ffi.NULL if value is None else c_value,
                len(c_value),
            )
        if params.generate_debug_info:
            lib.shaderc_compile_options_set_generate_debug_info(options)
        if params.optimization is not None:
            lib.shaderc_compile_options_set_optimization_level(
                options, params.optimization
            )
        lib.shaderc_compile_options_set_target_env(
            options, params.target_env, params.target_env_version
        )
        if params.include_callback is None:
            yield options
        else:
            with _include_callbacks(options, params.include_callback):
                yield options
    finally:
        lib.shaderc_compile_options_release(options)


class _IncludeState:
    """Per-call state of the include callbacks. Keeps the C include results
    alive until shaderc releases them, and remembers the first exception
    raised by the Python callback.
    """

    def __init__(self, callback):
        self.callback = callback
        self.error = None
        self._results = {}

    def new_result(self, name, content):
        c_name = ffi.new("char[]", name)
        c_content = ffi.new("char[]", content)
        # H: source_name: const char *, source_name_length: size_t, content: const char *, content_length: size_t, user_data: void *
        result = ffi.new("shaderc_include_result *")
        result.source_name = c_name
        result.source_name_length = len(name)
        result.content = c_content
        result.content_length = len(content)
        result.user_data = ffi.NULL
        self._results[int(ffi.cast("uintptr_t", result))] = result, c_name, c_content
        return result

    def release_result(self, result):
        self._results.pop(int(ffi.cast("uintptr_t", result)), None)

    def raise_error(self):
        if self.error is not None:
            error, self.error = self.error, None
            raise error


@contextmanager
def _include_callbacks(options, callback):
    state = _IncludeState(callback)

    @ffi.callback("shaderc_include_resolve_fn")
    def resolve_callback(_userdata, c_requested, include_type, c_requesting, depth):
        requested = _to_str(c_requested)
        requesting = _to_str(c_requesting)
        try:
            resolved = state.callback(requested, include_type, requesting, depth)
            name = resolved.resolved_name.encode("utf-8")
            content = resolved.content.encode("utf-8")
        except Exception as err:
            # This is a callback from C code, so we cannot raise here. An empty
            # name tells shaderc that the include failed; we raise after the compile.
            if state.error is None:
                state.error = err
            return state.new_result(b"", str(err).encode("utf-8", errors="replace"))
        return state.new_result(name, content)

    @ffi.callback("shaderc_include_result_release_fn")
    def release_callback(_userdata, result):
        state.release_result(result)

    lib.shaderc_compile_options_set_include_callbacks(
        options, resolve_callback, release_callback, ffi.NULL
    )
    try:
        yield state
    except BackendError as err:
        # The compile failed because of the include; report the cause instead
        if state.error is not None:
            raise state.error from err
        raise
    state.raise_error()


@contextmanager
def result_handle(result):
    """Context manager that releases a shaderc compilation result."""
    if result == ffi.NULL:
        raise BackendError("The shaderc compiler returned no result.")
    try:
        yield result
    finally:
        lib.shaderc_result_release(result)


class ShadercBackend:
    """Compile GLSL and SpirV assembly using libshaderc.

    A new compiler and new compile options are created for each call,
    so instances can be used from multiple threads.
    """

    def __repr__(self):
        return f"<ShadercBackend using {lib_path}>"

    def compile(self, source_text, kind, source_name, entry_point, params):
        logger.debug(
            f"Compiling {source_name} as {enum_name(ShaderKind, kind)} with shaderc"
        )
        c_source = source_text.encode("utf-8")
        with compiler_handle() as compiler:
            with compile_options_handle(params) as options:
                if kind == ShaderKind.SpirvAssembly:
                    c_result = lib.shaderc_assemble_into_spv(
                        compiler, c_source, len(c_source), options
                    )
                else:
                    c_result = lib.shaderc_compile_into_spv(
                        compiler,
                        c_source,
                        len(c_source),
                        kind,
                        source_name.encode("utf-8", errors="surrogateescape"),
                        entry_point.encode("utf-8"),
                        options,
                    )
                with result_handle(c_result) as result:
                    return self._get_result(result)

    def _get_result(self, result):
        status = lib.shaderc_result_get_compilation_status(result)
        message = _to_str(lib.shaderc_result_get_error_message(result))
        if status != lib.shaderc_compilation_status_success:
            status_name = STATUS_NAMES.get(status, str(status))
            raise BackendError(message.strip() or f"Shader compilation failed ({status_name}).")
        nbytes = lib.shaderc_result_get_length(result)
        c_words = ffi.cast("uint32_t *", lib.shaderc_result_get_bytes(result))
        words = ffi.unpack(c_words, nbytes // 4)
        num_warnings = lib.shaderc_result_get_num_warnings(result)
        return CompilationResult(words, num_warnings, message)
