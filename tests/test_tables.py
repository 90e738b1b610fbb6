from vkshader import ShaderKind, OptimizationLevel
from vkshader._tables import (
    EXTENSION_KINDS,
    extension_kind,
    optimization_level,
    target,
    encode_vulkan_version,
    decode_vulkan_version,
)

from testutils import run_tests
from pytest import raises


def test_extension_kind():
    assert extension_kind("vert") == ShaderKind.Vertex
    assert extension_kind("frag") == ShaderKind.Fragment
    assert extension_kind("comp") == ShaderKind.Compute
    assert extension_kind("geom") == ShaderKind.Geometry
    assert extension_kind("tesc") == ShaderKind.TessControl
    assert extension_kind("tese") == ShaderKind.TessEvaluation
    assert extension_kind("spvasm") == ShaderKind.SpirvAssembly
    assert extension_kind("rgen") == ShaderKind.RayGeneration
    assert extension_kind("rahit") == ShaderKind.AnyHit
    assert extension_kind("rchit") == ShaderKind.ClosestHit
    assert extension_kind("rmiss") == ShaderKind.Miss
    assert extension_kind("rint") == ShaderKind.Intersection
    assert extension_kind("rcall") == ShaderKind.Callable
    assert extension_kind("task") == ShaderKind.Task
    assert extension_kind("mesh") == ShaderKind.Mesh

    assert len(EXTENSION_KINDS) == 15
    for name in ("glsl", "VERT", ".vert", "", "vertex", "infer"):
        assert extension_kind(name) is None


def test_optimization_level():
    assert optimization_level("zero") == OptimizationLevel.Zero
    assert optimization_level("size") == OptimizationLevel.Size
    assert optimization_level("performance") == OptimizationLevel.Performance
    assert optimization_level("bogus") is None
    assert optimization_level("Zero") is None


def test_target():
    assert target("vulkan") == 1 << 22
    assert target("vulkan1_0") == 1 << 22
    assert target("vulkan1_1") == 1 << 22 | 1 << 12
    assert target("vulkan1_2") == 1 << 22 | 2 << 12
    assert target("vulkan1_3") == 1 << 22 | 3 << 12
    assert target("vulkan1_4") is None
    assert target("opengl") is None


def test_vulkan_version_packing():
    assert encode_vulkan_version(1, 2) == 4202496
    assert decode_vulkan_version(4202496) == (1, 2)
    assert decode_vulkan_version(target("vulkan1_3")) == (1, 3)
    assert decode_vulkan_version(target("vulkan")) == (1, 0)

    with raises(ValueError):
        encode_vulkan_version(1, 1024)


def test_enums():
    assert "Vertex" in dir(ShaderKind)
    assert ShaderKind["Mesh"] == 27
    assert 2 in ShaderKind
    assert list(OptimizationLevel) == [0, 1, 2]
    assert "OptimizationLevel enum" in repr(OptimizationLevel)

    with raises(RuntimeError):
        ShaderKind.Vertex = 3
    with raises(RuntimeError):
        ShaderKind()


if __name__ == "__main__":
    run_tests(globals())
