"""
Packaging a build result into something a host program or build system
can embed: raw SpirV bytes, a generated Python module, and a depfile
that makes every source file a build dependency.
"""

import os
import struct


SPIRV_MAGIC_NUMBER = 0x07230203


class BuildOutput:
    """The result of a successful build.

    * spv: the SpirV module as a list of 32-bit words.
    * sources: the absolute paths of the files that the module was built
      from, in the order they were encountered.
    """

    def __init__(self, sources, spv):
        self.sources = list(sources)
        self.spv = list(spv)

    def __repr__(self):
        return f"<BuildOutput {len(self.spv)} words from {len(self.sources)} sources>"

    def __eq__(self, other):
        if not isinstance(other, BuildOutput):
            return NotImplemented
        return self.sources == other.sources and self.spv == other.spv

    def to_bytes(self):
        """Get the SpirV module as (little endian) bytes."""
        return struct.pack(f"<{len(self.spv)}I", *self.spv)

    def to_python(self, name="SPIRV"):
        """Get Python source code that defines the SpirV words as a tuple of
        ints called ``name``, and the dependencies as a tuple called ``SOURCES``.
        """
        if not name.isidentifier():
            raise ValueError(f"Invalid Python name: {name!r}")
        lines = ["# Generated by vkshader. Do not edit.", ""]
        lines.append("SOURCES = (")
        lines.extend(f"    {path!r}," for path in self.sources)
        lines.append(")")
        lines.append("")
        lines.append(f"{name} = (")
        for i in range(0, len(self.spv), 6):
            words = self.spv[i : i + 6]
            lines.append("    " + " ".join(f"0x{w:08x}," for w in words))
        lines.append(")")
        lines.append("")
        return "\n".join(lines)

    def to_depfile(self, target, phony=False):
        """Get a Makefile-style depfile (as understood by make and ninja) that
        lists all sources as dependencies of the given target. With phony set,
        each source also gets an empty rule, so deleting a file does not break
        the build.
        """
        deps = " ".join(_escape_make_path(p) for p in self.sources)
        lines = [f"{_escape_make_path(target)}: {deps}".rstrip()]
        if phony:
            lines.extend(f"{_escape_make_path(p)}:" for p in self.sources)
        return "\n".join(lines) + "\n"

    def write(self, filename, depfile=None, *, name="SPIRV"):
        """Write the module to a file. A ``.py`` file gets Python source,
        anything else the raw SpirV bytes. If depfile is given, a depfile
        with ``filename`` as its target is written as well.
        """
        if filename.endswith(".py"):
            with open(filename, "wb") as f:
                f.write(self.to_python(name).encode())
        else:
            with open(filename, "wb") as f:
                f.write(self.to_bytes())
        if depfile:
            with open(depfile, "wb") as f:
                f.write(self.to_depfile(os.path.abspath(filename)).encode())


def _escape_make_path(path):
    path = path.replace("\\", "/") if os.sep == "\\" else path
    path = path.replace("$", "$$").replace("#", "\\#")
    return path.replace(" ", "\\ ")
