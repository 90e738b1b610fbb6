"""
Logic related to providing diagnostic info on vkshader, e.g. to include
in bug reports.
"""

import os
import sys
import platform

from ._coreutils import get_env_flag, get_project_root


class DiagnosticsRoot:
    """Root object to access vkshader diagnostics (i.e. ``vkshader.diagnostics``).

    Per-topic diagnostics can be accessed as attributes on this object.
    These include ``system``, ``versions``, ``config`` and ``shaderc``.
    """

    def __init__(self):
        self._diagnostics_instances = {}

    def __repr__(self):
        topics = ", ".join(self._diagnostics_instances.keys())
        return f"<DiagnosticsRoot with topics: {topics}>"

    def _register_diagnostics(self, name, ob):
        self._diagnostics_instances[name] = ob
        setattr(self, name, ob)

    def get_dict(self):
        """Get a dict that represents the full diagnostics info."""
        result = {}
        for name, ob in self._diagnostics_instances.items():
            result[name] = ob.get_dict()
        return result

    def get_report(self):
        """Get the full textual diagnostic report (as a str)."""
        text = ""
        for ob in self._diagnostics_instances.values():
            text += ob.get_report()
        return text

    def print_report(self):
        """Convenience method to print the full diagnostics report."""
        print(self.get_report(), end="")


class DiagnosticsBase:
    """Object that represents diagnostics on a specific topic.

    Subclasses implement ``get_dict()``, returning a flat dict of str, int,
    float or bool values. Instantiating the class registers it with the
    root diagnostics object.
    """

    def __init__(self, name):
        if not (isinstance(name, str) and name.isidentifier()):
            raise ValueError(
                "Diagnostics name must be an identifier (i.e. use underscore instead of spaces)."
            )
        self.name = name
        diagnostics._register_diagnostics(name, self)

    def __repr__(self):
        return f"<Diagnostics for '{self.name}'>"

    def get_dict(self):
        """Get the diagnostics for this topic, in the form of a Python dict."""
        raise NotImplementedError()

    def get_report(self):
        """Get the textual diagnostics report for this topic."""
        text = f"\n██ {self.name}:\n\n"
        text += dict_to_text(self.get_dict())
        return text

    def print_report(self):
        """Print the diagnostics report for this topic."""
        print(self.get_report(), end="")


def dict_to_text(d):
    """Convert a flat dict to a textual representation with aligned keys."""
    if not d:
        return "No data\n"
    width = max(len(key) for key in d) + 1
    lines = []
    for key, val in d.items():
        if isinstance(val, bool):
            val = "✓" if val else "-"
        lines.append(f"{(key + ':').rjust(width)}  {val}".rstrip())
    return "\n".join(lines) + "\n"


# The global root object
diagnostics = DiagnosticsRoot()


class SystemDiagnostics(DiagnosticsBase):
    """Provides basic system info."""

    def get_dict(self):
        return {
            "platform": platform.platform(),
            "python_implementation": platform.python_implementation(),
            "python": platform.python_version(),
        }


class VersionDiagnostics(DiagnosticsBase):
    """Provides version numbers from relevant libraries."""

    def get_dict(self):
        core_libs = ["vkshader", "cffi"]

        info = {}

        for libname in core_libs:
            try:
                ver = sys.modules[libname].__version__
            except (KeyError, AttributeError):
                pass
            else:
                info[libname] = str(ver)

        return info


class ConfigDiagnostics(DiagnosticsBase):
    """Provides the build-wide configuration taken from the environment."""

    def get_dict(self):
        return {
            "project_root": get_project_root(),
            "strip": get_env_flag("VKSHADER_STRIP"),
            "default_optimize_zero": get_env_flag("VKSHADER_DEFAULT_OPTIMIZE_ZERO"),
            "shaderc_lib_path_env": os.getenv("SHADERC_LIB_PATH", ""),
        }


class ShadercDiagnostics(DiagnosticsBase):
    """Provides metadata about the shaderc backend, if it can be loaded."""

    def get_dict(self):
        try:
            from .backends import shaderc
        except Exception as err:
            return {"available": False, "error": str(err).splitlines()[0]}

        (major, minor), revision = shaderc.get_lib_version_info()
        return {
            "available": True,
            "lib_path": shaderc.lib_path,
            "spirv_version": f"{major}.{minor} (revision {revision})",
        }


# Instantiate diagnostics objects

SystemDiagnostics("system")
VersionDiagnostics("versions")
ConfigDiagnostics("config")
ShadercDiagnostics("shaderc")
