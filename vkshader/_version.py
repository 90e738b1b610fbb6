"""
Version string management, using a hard-coded version string for
simplicity and compatibility, while adding git info at runtime when
running from a repository.

On a new release, just update the __version__ (or run
``python vkshader/_version.py bump X.Y.Z``).
"""

import sys
import logging
import subprocess
from pathlib import Path

# This is the base version number, to be bumped before each release.
# The build system detects this definition when building a distribution.
__version__ = "0.3.0"

project_name = "vkshader"


logger = logging.getLogger(project_name)

# Get whether this is a repo. If so, repo_dir is the path, otherwise None.
# .git is a dir in a normal repo and a file when in a submodule.
repo_dir = Path(__file__).parents[1]
repo_dir = repo_dir if repo_dir.joinpath(".git").exists() else None


def get_version():
    """Get the version string."""
    if repo_dir:
        return get_extended_version()
    return __version__


def get_extended_version():
    """Get an extended version string with information from git."""
    release, post, labels = get_version_info_from_git()

    base_release = ".".join(__version__.split(".")[:3])
    if not release:
        release = base_release
    elif release != base_release:
        logger.warning(
            f"{project_name} version from git ({release})"
            f" and __version__ ({base_release}) don't match."
        )

    version = release
    if post and post != "0":
        version += f".post{post}"
        if labels:
            version += "+" + ".".join(labels)
    elif labels and labels[-1] == "dirty":
        version += "+" + ".".join(labels)

    return version


def get_version_info_from_git():
    """Get (release, post, labels) from Git.

    With `release` the version number from the latest tag, `post` the
    number of commits since that tag, and `labels` a tuple with the
    git-hash and optionally a dirty flag.
    """
    command = ["git", "describe", "--long", "--always", "--tags", "--dirty"]
    try:
        p = subprocess.run(command, check=False, cwd=repo_dir, capture_output=True)
    except OSError as e:
        logger.warning(f"Could not get {project_name} version: {e}")
        return None, None, ["unknown"]

    if p.returncode:
        stderr = p.stderr.decode(errors="ignore")
        logger.warning(f"Could not get {project_name} version: {stderr.strip()}")
        return None, None, ["unknown"]

    parts = p.stdout.decode(errors="ignore").strip().lstrip("v").split("-")
    if len(parts) <= 2:
        # No tags (and thus no post). Only git hash and maybe 'dirty'.
        parts = (None, None, *parts)
    release, post, *labels = parts
    return release, post, labels


def version_to_tuple(v):
    v = v.split("+")[0]  # remove hash
    return tuple(int(i) if i.isnumeric() else i for i in v.split("."))


# Apply the versioning
base_version = __version__
__version__ = get_version()
version_info = version_to_tuple(__version__)


if __name__ == "__main__":
    _, *args = sys.argv
    this_file = Path(__file__)

    if not args or args[0] == "version":
        print(f"{project_name} v{__version__}")
    elif args[0] == "bump":
        if len(args) != 2:
            sys.exit("Expected a version number to bump to.")
        new_version = args[1].lstrip("v")  # allow '1.2.3' and 'v1.2.3'
        if new_version.count(".") != 2:
            sys.exit("Expected two dots in new version string.")
        if not all(s.isnumeric() for s in new_version.split(".")):
            sys.exit("Expected only numbers in new version string.")
        text = this_file.read_bytes().decode()
        text = text.replace(base_version, new_version, 1)
        this_file.write_bytes(text.encode())
        print(f"Bumped version from '{base_version}' to '{new_version}'.")
    else:
        print(f"Unknown command for _version.py: {args[0]!r}")
