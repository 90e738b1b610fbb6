"""
Command line interface to compile a shader, for use in build systems:

    python -m vkshader shaders/example.vert -o build/example.spv --depfile build/example.d
    python -m vkshader shaders/example.vert --options "version: 450, optimize: size"
    python -m vkshader --glsl 'kind: comp, r"#version 450 ..."' -o build/inline.py

"""

import sys
import logging
import argparse

from ._version import __version__
from ._errors import ShaderError
from ._coreutils import logger
from ._diagnostics import diagnostics
from ._api import compile_file, glsl


def get_parser():
    parser = argparse.ArgumentParser(
        prog="vkshader", description="Compile a GLSL shader into SpirV."
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="The shader file to compile, relative to the project root.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="The file to write. A .py file gets Python source, anything else raw SpirV"
        " (default: the source path with .spv appended).",
    )
    parser.add_argument(
        "--options",
        default=None,
        help='Compile options, e.g. "kind: frag, version: 450, optimize: size".',
    )
    parser.add_argument(
        "--glsl",
        metavar="INVOCATION",
        help="Compile inline source instead of a file: options followed by a string literal.",
    )
    parser.add_argument("--depfile", help="Also write a Makefile-style depfile.")
    parser.add_argument(
        "--project-root",
        default=None,
        help="The directory to resolve paths and standard includes against"
        " (default: VKSHADER_PROJECT_ROOT or the current directory).",
    )
    parser.add_argument(
        "--name", default="SPIRV", help="The variable name for .py output."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug info.")
    parser.add_argument(
        "--report", action="store_true", help="Print a diagnostics report and exit."
    )
    parser.add_argument("--version", action="version", version=f"vkshader {__version__}")
    return parser


def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig()
        logger.setLevel(logging.DEBUG)

    if args.report:
        diagnostics.print_report()
        return 0

    if bool(args.source) == bool(args.glsl):
        parser.error("Specify either a source file or --glsl.")
    if args.glsl and args.options:
        parser.error("Options are part of the --glsl invocation.")
    if args.glsl and not args.output:
        parser.error("--glsl requires --output.")

    try:
        if args.glsl:
            out = glsl(args.glsl, origin="<--glsl>", project_root=args.project_root)
        else:
            out = compile_file(
                args.source, args.options, project_root=args.project_root
            )
    except ShaderError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    output = args.output or args.source + ".spv"
    out.write(output, args.depfile, name=args.name)
    logger.info(f"Wrote {output} ({len(out.spv)} words, {len(out.sources)} sources)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
