"""
Test building actual shaders with libshaderc. These tests are skipped
when the shaderc library cannot be loaded.
"""

from vkshader import (
    BackendError,
    CompileOptions,
    ResolutionError,
    ShaderError,
    ShaderKind,
    SPIRV_MAGIC_NUMBER,
    compile_file,
    compile_source,
    glsl,
)

from testutils import run_tests, can_use_shaderc_lib
from pytest import mark, raises


if not can_use_shaderc_lib:
    pytestmark = mark.skip(reason="Needs shaderc lib")


TRIVIAL = "#version 450\nvoid main() {}\n"


def get_backend():
    from vkshader.backends.shaderc import ShadercBackend

    return ShadercBackend()


def test_shaderc_lib_version():
    from vkshader.backends.shaderc import get_lib_version_info

    (major, minor), revision = get_lib_version_info()
    assert major == 1
    assert minor >= 0
    assert revision >= 0


def test_shaderc_header():
    from vkshader._coreutils import get_resource_filename
    from vkshader.backends.shaderc._ffi import _get_shaderc_header

    text = _get_shaderc_header(get_resource_filename("shaderc.h"))
    assert "shaderc_compile_into_spv" in text
    assert "shaderc_include_resolve_fn" in text
    for line in text.splitlines():
        assert not line.startswith("#")
        assert not line.lstrip().startswith("//")


def test_compile_trivial_vertex_shader(tmp_path):
    out = compile_source(
        TRIVIAL, kind=ShaderKind.Vertex, project_root=str(tmp_path), backend=get_backend()
    )
    assert out.spv[0] == SPIRV_MAGIC_NUMBER
    assert out.sources == []


def test_compile_is_deterministic(tmp_path):
    backend = get_backend()
    options = CompileOptions(kind=ShaderKind.Fragment)
    out1 = compile_source(TRIVIAL, options, project_root=str(tmp_path), backend=backend)
    out2 = compile_source(TRIVIAL, options, project_root=str(tmp_path), backend=backend)
    assert out1 == out2


def test_strip_removes_debug_info(tmp_path):
    backend = get_backend()
    kwargs = dict(project_root=str(tmp_path), backend=backend)
    src = "#version 450\nlayout(location=0) out vec4 color;\nvoid main() { color = vec4(1.0); }\n"
    debug = compile_source(src, kind=ShaderKind.Fragment, optimization=0, **kwargs)
    stripped = compile_source(src, kind=ShaderKind.Fragment, optimization=0, debug=False, **kwargs)
    assert len(stripped.spv) < len(debug.spv)


def test_target_version_in_header(tmp_path):
    backend = get_backend()
    kwargs = dict(project_root=str(tmp_path), backend=backend)
    out10 = glsl(f"kind: comp, {TRIVIAL!r}", **kwargs)
    out12 = glsl(f"kind: comp, target: vulkan1_2, {TRIVIAL!r}", **kwargs)
    # Word 1 is the SpirV version: Vulkan 1.0 uses 1.0, Vulkan 1.2 uses 1.5
    assert out10.spv[1] == 0x00010000
    assert out12.spv[1] == 0x00010500


def test_pragma_shader_stage(tmp_path):
    src = "#version 450\n#pragma shader_stage(compute)\nvoid main() {}\n"
    out = compile_source(src, project_root=str(tmp_path), backend=get_backend())
    assert out.spv[0] == SPIRV_MAGIC_NUMBER

    # Without a kind or pragma, the stage cannot be determined
    with raises(BackendError):
        compile_source(TRIVIAL, project_root=str(tmp_path), backend=get_backend())


def test_version_option(tmp_path):
    src = "void main() {}\n"
    out = compile_source(
        src, "kind: vert, version: 450", project_root=str(tmp_path), backend=get_backend()
    )
    assert out.spv[0] == SPIRV_MAGIC_NUMBER


def test_version_option_out_of_int_range(tmp_path):
    src = "void main() {}\n"
    try:
        compile_source(
            src,
            "kind: vert, version: 4294967295",
            project_root=str(tmp_path),
            backend=get_backend(),
        )
    except ShaderError:
        pass  # rejected by the compiler, but not with an OverflowError


def test_define_option(tmp_path):
    src = "#version 450\n#ifndef FOO\n#error FOO not defined\n#endif\nvoid main() { int x = BAR; }\n"
    kwargs = dict(project_root=str(tmp_path), backend=get_backend())
    compile_source(src, 'kind: vert, define: FOO, define: BAR "3"', **kwargs)
    with raises(BackendError) as err:
        compile_source(src, 'kind: vert, define: BAR "3"', **kwargs)
    assert "FOO not defined" in err.value.message


def test_warnings_fail_the_build(tmp_path):
    src = "#version 450\n#extension GL_FOO_bar : enable\nvoid main() {}\n"
    with raises(BackendError) as err:
        compile_source(src, kind=ShaderKind.Vertex, project_root=str(tmp_path), backend=get_backend())
    assert "GL_FOO_bar" in err.value.message


def test_syntax_error(tmp_path):
    with raises(BackendError) as err:
        compile_source(
            "#version 450\nvoid main() { oops }\n",
            kind=ShaderKind.Vertex,
            project_root=str(tmp_path),
            backend=get_backend(),
        )
    assert "inline" in err.value.message


def test_includes(tmp_path):
    (tmp_path / "shaders").mkdir()
    (tmp_path / "common.glsl").write_text("const float VALUE = 1.0;\n")
    (tmp_path / "shaders" / "common.glsl").write_text("const float VALUE = 2.0;\n")
    (tmp_path / "shaders" / "util.glsl").write_text("#include <common.glsl>\n")
    (tmp_path / "shaders" / "rel.frag").write_text(
        '#version 450\n#extension GL_GOOGLE_include_directive : require\n#include "common.glsl"\nvoid main() {}\n'
    )
    (tmp_path / "shaders" / "std.frag").write_text(
        '#version 450\n#extension GL_GOOGLE_include_directive : require\n#include "util.glsl"\nvoid main() {}\n'
    )
    kwargs = dict(project_root=str(tmp_path), backend=get_backend())

    out = compile_file("shaders/rel.frag", **kwargs)
    assert out.sources == [
        str(tmp_path / "shaders" / "rel.frag"),
        str(tmp_path / "shaders" / "common.glsl"),
    ]

    out = compile_file("shaders/std.frag", **kwargs)
    assert out.sources == [
        str(tmp_path / "shaders" / "std.frag"),
        str(tmp_path / "shaders" / "util.glsl"),
        str(tmp_path / "common.glsl"),
    ]


def test_missing_include(tmp_path):
    src = '#version 450\n#extension GL_GOOGLE_include_directive : require\n#include "nope.glsl"\nvoid main() {}\n'
    with raises(ResolutionError) as err:
        compile_source(src, kind=ShaderKind.Vertex, project_root=str(tmp_path), backend=get_backend())
    assert err.value.path == str(tmp_path / "nope.glsl")


def test_spirv_assembly(tmp_path):
    src = """
               OpCapability Shader
               OpMemoryModel Logical GLSL450
               OpEntryPoint GLCompute %main "main"
               OpExecutionMode %main LocalSize 1 1 1
       %void = OpTypeVoid
          %3 = OpTypeFunction %void
       %main = OpFunction %void None %3
          %5 = OpLabel
               OpReturn
               OpFunctionEnd
    """
    out = compile_source(
        src, kind=ShaderKind.SpirvAssembly, project_root=str(tmp_path), backend=get_backend()
    )
    assert out.spv[0] == SPIRV_MAGIC_NUMBER


if __name__ == "__main__":
    run_tests(globals())
