"""
Lookup tables that map the textual values of compile options (and file
extensions) onto backend enum values.
"""

from .enums import ShaderKind, OptimizationLevel


# The Vulkan version is packed the same way as VK_MAKE_API_VERSION:
# major in the bits above 22, minor in the 10 bits above 12.
VULKAN_MAJOR_SHIFT = 22
VULKAN_MINOR_SHIFT = 12
VULKAN_MINOR_MASK = 0x3FF


def encode_vulkan_version(major, minor=0):
    """Pack a Vulkan (major, minor) version into a target-environment version."""
    if not (0 <= minor <= VULKAN_MINOR_MASK):
        raise ValueError(f"Vulkan minor version out of range: {minor}")
    return (major << VULKAN_MAJOR_SHIFT) | (minor << VULKAN_MINOR_SHIFT)


def decode_vulkan_version(version):
    """Unpack a target-environment version into a (major, minor) tuple."""
    major = version >> VULKAN_MAJOR_SHIFT
    minor = (version >> VULKAN_MINOR_SHIFT) & VULKAN_MINOR_MASK
    return major, minor


DEFAULT_TARGET_VERSION = encode_vulkan_version(1, 0)


EXTENSION_KINDS = {
    "vert": ShaderKind.Vertex,
    "frag": ShaderKind.Fragment,
    "comp": ShaderKind.Compute,
    "geom": ShaderKind.Geometry,
    "tesc": ShaderKind.TessControl,
    "tese": ShaderKind.TessEvaluation,
    "spvasm": ShaderKind.SpirvAssembly,
    "rgen": ShaderKind.RayGeneration,
    "rahit": ShaderKind.AnyHit,
    "rchit": ShaderKind.ClosestHit,
    "rmiss": ShaderKind.Miss,
    "rint": ShaderKind.Intersection,
    "rcall": ShaderKind.Callable,
    "task": ShaderKind.Task,
    "mesh": ShaderKind.Mesh,
}

OPTIMIZATION_LEVELS = {
    "zero": OptimizationLevel.Zero,
    "size": OptimizationLevel.Size,
    "performance": OptimizationLevel.Performance,
}

TARGETS = {
    "vulkan": DEFAULT_TARGET_VERSION,
    "vulkan1_0": DEFAULT_TARGET_VERSION,
    "vulkan1_1": encode_vulkan_version(1, 1),
    "vulkan1_2": encode_vulkan_version(1, 2),
    "vulkan1_3": encode_vulkan_version(1, 3),
}


def extension_kind(ext):
    """Get the ShaderKind for a file extension (without the dot), or None."""
    return EXTENSION_KINDS.get(ext)


def optimization_level(level):
    """Get the OptimizationLevel for an option value, or None."""
    return OPTIMIZATION_LEVELS.get(level)


def target(name):
    """Get the target-environment version for an option value, or None."""
    return TARGETS.get(name)
