"""
The shaderc backend, using libshaderc via cffi.
"""

# ruff: noqa: F401

from ._ffi import ffi, lib, lib_path, get_lib_version_info
from ._api import ShadercBackend
