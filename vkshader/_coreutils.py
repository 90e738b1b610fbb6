"""
Core utilities that are loaded into the root namespace or used internally.
"""

import os
import sys
import types
import atexit
import logging
import importlib.resources
from contextlib import ExitStack


# Our resources are most probably always on the file system. But in
# case they don't we have a nice exit handler to remove temporary files.
_resource_files = ExitStack()
atexit.register(_resource_files.close)


def get_resource_filename(name):
    """Get the filename to a vkshader resource."""
    if sys.version_info < (3, 9):
        context = importlib.resources.path("vkshader.resources", name)
    else:
        ref = importlib.resources.files("vkshader.resources") / name
        context = importlib.resources.as_file(ref)
    path = _resource_files.enter_context(context)
    return str(path)


logger = logging.getLogger("vkshader")
logger.setLevel(logging.WARNING)


_truthy = ("1", "true", "yes", "on")
_falsy = ("", "0", "false", "no", "off")


def get_env_flag(name):
    """Get whether the given environment variable is set to a truthy value."""
    value = os.getenv(name, "").strip().lower()
    if value not in _truthy and value not in _falsy:
        logger.warning(f"Ignoring unrecognized value {value!r} for {name}.")
    return value in _truthy


def get_project_root():
    """Get the absolute directory that standard includes and relative
    source paths resolve against. Taken from VKSHADER_PROJECT_ROOT,
    or the current working directory.
    """
    root = os.getenv("VKSHADER_PROJECT_ROOT", "").strip()
    return os.path.abspath(root or os.getcwd())


# We implement a custom enum class that's much simpler than Python's enum.Enum,
# and simply maps to strings or ints. The enums are classes, so IDE's provide
# autocompletion, and documenting with Sphinx is easy. That does mean we need a
# metaclass though.


class EnumType(type):
    """Metaclass for enums."""

    def __new__(cls, name, bases, dct):
        # Collect and check fields
        member_map = {}
        for key, val in dct.items():
            if not key.startswith("_"):
                val = key if val is None else val
                if not isinstance(val, (int, str)):
                    raise TypeError("Enum fields must be str or int.")
                member_map[key] = val
        # Some field values may have been updated
        dct.update(member_map)
        # Create class
        klass = super().__new__(cls, name, bases, dct)
        # Attach some fields
        klass.__fields__ = tuple(member_map)
        klass.__members__ = types.MappingProxyType(member_map)  # enums.Enum compat
        # Create bound methods
        for name in ["__dir__", "__iter__", "__getitem__", "__setattr__", "__repr__"]:
            setattr(klass, name, types.MethodType(getattr(cls, name), klass))
        return klass

    def __dir__(cls):
        # Support dir(enum). Note that this order matches the definition, but dir() makes it alphabetic.
        return cls.__fields__

    def __iter__(cls):
        # Support list(enum), iterating over the enum, and doing ``x in enum``.
        return iter([getattr(cls, key) for key in cls.__fields__])

    def __getitem__(cls, key):
        # Support enum[key]
        return cls.__dict__[key]

    def __repr__(cls):
        if cls is BaseEnum:
            return "<vkshader.BaseEnum>"
        pkg = cls.__module__.split(".")[0]
        name = cls.__name__
        options = []
        for key in cls.__fields__:
            val = cls[key]
            options.append(f"'{key}' ({val})" if isinstance(val, int) else f"'{val}'")
        return f"<{pkg}.{name} enum with options: {', '.join(options)}>"

    def __setattr__(cls, name, value):
        if name.startswith("_"):
            super().__setattr__(name, value)
        else:
            raise RuntimeError("Cannot set values on an enum.")


class BaseEnum(metaclass=EnumType):
    """Base class for enums.

    Looks like Python's builtin Enum class, but is simpler; fields are simply ints or strings.
    """

    def __init__(self):
        raise RuntimeError("Cannot instantiate an enum.")


def enum_name(enum, value):
    """Get the field name for the given enum value, for logging and reprs."""
    for key in enum.__fields__:
        if enum[key] == value:
            return key
    return str(value)
