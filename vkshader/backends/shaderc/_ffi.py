"""Loading the header and the shaderc shared library.
"""

import os
import sys
import ctypes.util

from ..._coreutils import get_resource_filename, logger
from ..._errors import BackendNotAvailable

from cffi import FFI, __version_info__ as cffi_version_info


if cffi_version_info < (1, 15):  # no-cover
    raise ImportError(f"{__name__} needs cffi 1.15 or later.")


def get_shaderc_header():
    """Read header file and strip some stuff that cffi would stumble on."""
    return _get_shaderc_header(get_resource_filename("shaderc.h"))


def _get_shaderc_header(filename):
    with open(filename) as f:
        lines1 = f.readlines()
    # Deal with pre-processor commands and comments, because cffi cannot handle them.
    lines2 = []
    for line in lines1:
        if line.startswith("#"):
            continue
        elif line.lstrip().startswith("//"):
            continue
        lines2.append(line)
    return "".join(lines2)


def _get_lib_filenames():
    if sys.platform.startswith("win"):  # no-cover
        return ["shaderc_shared.dll"]
    elif sys.platform.startswith("darwin"):  # no-cover
        return ["libshaderc_shared.dylib", "libshaderc_shared.1.dylib"]
    else:
        return ["libshaderc_shared.so", "libshaderc_shared.so.1"]


def get_shaderc_lib_path():
    """Get the path (or name) of the shaderc library, taking into account the
    SHADERC_LIB_PATH environment variable. Next we look for a copy shipped in
    our resources, and finally let the system loader find it.
    """

    # If path is given, use that or fail trying
    override_path = os.getenv("SHADERC_LIB_PATH", "").strip()
    if override_path:
        return override_path

    # Note that there usually is no embedded lib; it can be put there for a frozen app.
    for lib_filename in _get_lib_filenames():
        embedded_path = get_resource_filename(lib_filename)
        if os.path.isfile(embedded_path):
            return embedded_path

    system_path = ctypes.util.find_library("shaderc_shared")
    if system_path:
        return system_path
    return _get_lib_filenames()[0]


def _load_lib(ffi, lib_path):
    try:
        return ffi.dlopen(lib_path)
    except OSError as err:
        raise BackendNotAvailable(
            f"Could not load the shaderc library ({lib_path}): {err}. "
            "Install shaderc (e.g. via the Vulkan SDK) or set SHADERC_LIB_PATH."
        ) from None


def get_lib_version_info():
    """Get the (version, revision) of SpirV that the library produces by default."""
    version = ffi.new("unsigned int *")
    revision = ffi.new("unsigned int *")
    lib.shaderc_get_spv_version(version, revision)
    major = (version[0] >> 16) & 0xFF
    minor = (version[0] >> 8) & 0xFF
    return (major, minor), revision[0]


# Configure cffi and load the dynamic library
ffi = FFI()
ffi.cdef(get_shaderc_header())
lib_path = get_shaderc_lib_path()  # store path on this module so it can be checked
lib = _load_lib(ffi, lib_path)
logger.debug(f"Loaded shaderc from {lib_path}")
