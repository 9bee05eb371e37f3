#!/usr/bin/env python3
"""
Download, build and install released versions of Python from python.org.

Usage:
    pyget [version...]
    pyget -d <directory> [version...]
    pyget -l
"""
import os
import re
import sys

from catalog import CatalogError, fetch_python_versions
from out import log, out
from pybuild import BuildError, build_python

VERSION_TOKEN = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")

HELP_LINES = [
    "Usage: pyget [version...]",
    "       pyget [options]",
    "Options:",
    "  -d, --directory <directory> - Directory to install Python to",
    "  -l, --list                  - List available versions of Python",
    "  -h, --help                  - Display this help message",
]


class UsageError(Exception):
    pass


class InvalidVersionError(Exception):
    def __init__(self, version):
        self.version = version
        super().__init__(f"Invalid version of Python: {version}")


class Arguments:
    def __init__(self, action="install", directory=None, versions=None):
        self.action = action  # "install", "list" or "help"
        self.directory = directory if directory is not None else os.getcwd()
        self.versions = versions if versions is not None else []


# -----------------------------
# Argument parsing
# -----------------------------
def parse_args(argv):
    """
    Walk the tokens in order. -l and -h win as soon as they are seen,
    so anything after them is never looked at.
    """
    args = Arguments()
    tokens = list(argv)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in ("-l", "--list"):
            return Arguments(action="list", directory=args.directory)
        if token in ("-h", "--help"):
            return Arguments(action="help", directory=args.directory)
        if token in ("-d", "--directory"):
            if i + 1 >= len(tokens):
                raise UsageError(f"Error: Missing directory after {token}")
            args.directory = tokens[i + 1]
            i += 2
            continue
        if VERSION_TOKEN.match(token):
            if token not in args.versions:
                args.versions.append(token)
        elif token.startswith("-"):
            raise UsageError(f"Error: Unknown argument {token}")
        else:
            log(f"[WARN] Ignoring argument {token}")
        i += 1

    if not args.versions:
        raise UsageError(
            "Error: No version of Python specified.\n\n"
            "Please specify a version of Python to download or use the -l "
            "or --list flag to list available versions."
        )
    return args


def validate_versions(selected, available):
    """Exact string membership; every version is checked before anything is downloaded."""
    known = set(available)
    for v in selected:
        if v not in known:
            raise InvalidVersionError(v)
    return list(selected)


# -----------------------------
# Output
# -----------------------------
def print_versions(versions):
    out(f"{len(versions)} versions of Python available:")
    for v in versions:
        out(f"  {v}")


def print_help():
    for line in HELP_LINES:
        out(line)


def print_summary(installation_dirs):
    out("Python versions installed to the following directories:")
    for d in installation_dirs:
        out(f"  {d}")


# -----------------------------
# Bootstrap
# -----------------------------
def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except UsageError as e:
        out(str(e))
        return 1

    if args.action == "help":
        print_help()
        return 0

    try:
        available = fetch_python_versions()
    except CatalogError:
        out("Failed to fetch the list of Python versions.")
        return 1

    if args.action == "list":
        print_versions(available)
        return 0

    try:
        selected = validate_versions(args.versions, available)
    except InvalidVersionError as e:
        out(str(e))
        return 1

    out("Versions of Python to download:")
    for v in selected:
        out(f"  {v}")
    out()

    installation_dirs = []
    for v in selected:
        try:
            installation_dirs.append(build_python(v, args.directory))
        except BuildError as e:
            out(str(e))
            return 1

    print_summary(installation_dirs)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
