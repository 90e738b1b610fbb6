"""
Resolving ``#include`` directives to files on disk.
"""

import os

from ._coreutils import logger
from ._errors import ResolutionError
from .enums import IncludeType


class ResolvedInclude:
    """The result of resolving an include: the resolved (absolute) name and the file contents."""

    def __init__(self, resolved_name, content):
        self.resolved_name = resolved_name
        self.content = content

    def __repr__(self):
        return f"<ResolvedInclude {self.resolved_name!r}>"


class IncludeResolver:
    """Callable that resolves includes, recording every resolved path.

    Quoted includes (``IncludeType.Relative``) resolve against the directory
    of the file that contains the include. Includes with angle brackets
    (``IncludeType.Standard``) resolve against the project root, at any
    nesting depth. The top-level source has no directory when it is not a
    file (``top_path`` is None); its relative includes use the project root.

    The resolved paths are appended to ``sources`` in the order in which the
    compiler asks for them, i.e. depth-first. Pass a list to share it with
    the caller.
    """

    def __init__(self, project_root, *, top_name=None, top_path=None, sources=None):
        self.project_root = os.path.abspath(project_root)
        self.top_name = top_name
        self.top_path = top_path
        self.sources = [] if sources is None else sources

    def __call__(self, requested, include_type, requesting, depth=0):
        path = self.resolve_path(requested, include_type, requesting)
        try:
            path.encode("utf-8")
        except UnicodeEncodeError:
            raise ResolutionError(f"non-unicode path: {path!r}", path) from None

        logger.debug(f"Resolved include {requested!r} (depth {depth}) to {path}")
        self.sources.append(path)

        try:
            with open(path, "rb") as f:
                content = f.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as err:
            raise ResolutionError(f"Could not read include {path}: {err}", path) from None

        return ResolvedInclude(path, content)

    def resolve_path(self, requested, include_type, requesting):
        """Get the absolute path for an include, without touching the file system."""
        if include_type == IncludeType.Relative:
            if requesting == self.top_name and self.top_path is None:
                base = self.project_root
            else:
                base = os.path.dirname(requesting)
        elif include_type == IncludeType.Standard:
            base = self.project_root
        else:
            raise ValueError(f"Invalid include type: {include_type!r}")
        return os.path.abspath(os.path.join(base, requested))
