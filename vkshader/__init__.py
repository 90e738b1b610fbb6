"""
Compile GLSL shaders into SpirV at build time.
"""

# ruff: noqa: F401

from ._coreutils import logger
from ._version import __version__, version_info
from ._diagnostics import diagnostics, DiagnosticsBase
from ._errors import (
    ShaderError,
    ConfigError,
    ResolutionError,
    SourceReadError,
    BackendError,
    BackendNotAvailable,
)
from .enums import ShaderKind, OptimizationLevel, IncludeType, TargetEnv, GlslProfile
from ._tables import encode_vulkan_version, decode_vulkan_version
from ._tokens import Span, TokenStream
from ._options import CompileOptions, parse_options
from ._resolver import IncludeResolver, ResolvedInclude
from ._artifact import BuildOutput, SPIRV_MAGIC_NUMBER
from ._build import SourceUnit, build
from ._api import include_glsl, glsl, compile_file, compile_source
from . import backends
