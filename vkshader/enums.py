"""
Enums shared by the option model and the compiler backends. The integer
values match the corresponding enums of libshaderc, so they can be passed
to the C API as-is.
"""

from ._coreutils import BaseEnum


class ShaderKind(BaseEnum):
    """The pipeline stage a shader is compiled for."""

    Vertex = 0
    Fragment = 1
    Compute = 2
    Geometry = 3
    TessControl = 4
    TessEvaluation = 5
    InferFromSource = 6  # let the backend look for '#pragma shader_stage(...)'
    SpirvAssembly = 13
    RayGeneration = 14
    AnyHit = 15
    ClosestHit = 16
    Miss = 17
    Intersection = 18
    Callable = 19
    Task = 26
    Mesh = 27


class OptimizationLevel(BaseEnum):
    Zero = 0
    Size = 1
    Performance = 2


class IncludeType(BaseEnum):
    """Whether an ``#include`` uses quotes (relative) or angle brackets (standard)."""

    Relative = 0
    Standard = 1


class TargetEnv(BaseEnum):
    Vulkan = 0
    OpenGL = 1
    OpenGLCompat = 2


class GlslProfile(BaseEnum):
    NONE = 0
    Core = 1
    Compatibility = 2
    ES = 3
