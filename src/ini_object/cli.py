# src/ini_object/cli.py
"""
Command-line interface for ini_object.

Subcommands
-----------
parse
    Parse an INI file (or stdin with "-") and print the document as JSON.

render
    Load an INI file into a config class and print the text the Gateway
    saves for the loaded object.

describe
    Print the field table the Gateway uses for a config class.

Config classes are named as "package.module:ClassName".

Exit codes
----------
0  success
1  handled, expected error (IniObjectError or KeyboardInterrupt)
2  CLI usage error (argparse)
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import yaml

from . import __version__
from .config import load_config
from .exceptions import ConfigIOError, IniObjectError, ParseError
from .gateway import Gateway
from .ini_codec import parse_ini
from .introspect import describe
from .logging_utils import configure_logging

# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger("ini_object")

EXIT_OK = 0
EXIT_ERR = 1
EXIT_CLI = 2

# ------------------------------------------------------------------------------
# Parser construction
# ------------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argparse parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with subcommands: parse, render, describe.
    """
    parser = argparse.ArgumentParser(
        prog="ini-object",
        description="Map INI configuration text to and from Python classes.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML gateway config file (overrides default tokens).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ini-object {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    # parse
    s1 = sub.add_parser("parse", help="Parse an INI file and print JSON.")
    s1.add_argument(
        "path",
        type=Path,
        help='Path to INI file. Use "-" to read from stdin.',
    )

    # render
    s2 = sub.add_parser(
        "render", help="Load an INI file into a class and re-save it."
    )
    s2.add_argument(
        "path",
        type=Path,
        help='Path to INI file. Use "-" to read from stdin.',
    )
    s2.add_argument(
        "-t",
        "--type",
        dest="type_name",
        required=True,
        help='Config class as "package.module:ClassName".',
    )

    # describe
    s3 = sub.add_parser("describe", help="Show the field table of a config class.")
    s3.add_argument(
        "type_name",
        help='Config class as "package.module:ClassName".',
    )

    return parser


# ------------------------------------------------------------------------------
# Validation helpers
# ------------------------------------------------------------------------------


def _validate_existing_file(path: Path, allow_stdin: bool = False) -> None:
    """
    Validate that a path exists and is a file, or is "-" if allow_stdin is True.

    Raises
    ------
    ConfigIOError
        If the path does not exist, is not a file or is not readable.
    """
    if allow_stdin and str(path) == "-":
        return
    if not path.exists():
        raise ConfigIOError(f"File not found: {path}")
    if not path.is_file():
        raise ConfigIOError(f"Not a file: {path}")
    if not os.access(path, os.R_OK):
        raise ConfigIOError(f"File is not readable: {path}")


def _read_text_input(path: Path, encoding: str) -> str:
    """
    Read text either from a file or from stdin when path is "-".

    Raises
    ------
    ConfigIOError
        On missing files, permission errors, or OS read failures.
    ParseError
        If the file is not valid text in the configured encoding.
    """
    try:
        if str(path) == "-":
            return sys.stdin.read()
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise ParseError(f"Failed to decode {path}: {e}") from e
    except FileNotFoundError:
        raise ConfigIOError(f"File not found: {path}")
    except PermissionError:
        raise ConfigIOError(f"Permission denied: {path}")
    except OSError as e:
        raise ConfigIOError(f"Failed to read {path}: {e}") from e


def _import_class(type_name: str) -> type:
    """
    Resolve "package.module:ClassName" (or "package.module.ClassName").

    Raises
    ------
    IniObjectError
        If the module cannot be imported or does not define a class of
        that name.
    """
    if ":" in type_name:
        module_name, _, attr = type_name.partition(":")
    else:
        module_name, _, attr = type_name.rpartition(".")
    if not module_name or not attr:
        raise IniObjectError(
            f"Invalid class name {type_name!r} (expected 'module:ClassName')"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise IniObjectError(f"Cannot import module {module_name!r}: {e}") from e

    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise IniObjectError(f"{module_name!r} has no attribute {attr!r}")
    if not isinstance(obj, type):
        raise IniObjectError(f"{type_name!r} is not a class")
    return obj


# ------------------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------------------


def _cmd_parse(path: Path, gateway: Gateway) -> int:
    """Parse: print the parsed document as indented JSON."""
    _validate_existing_file(path, allow_stdin=True)
    content = _read_text_input(path, gateway.config.encoding)
    doc = parse_ini(content)
    print(json.dumps(doc, indent=2))
    return EXIT_OK


def _cmd_render(path: Path, type_name: str, gateway: Gateway) -> int:
    """
    Render: load into a config class and print the re-saved text.

    Raises
    ------
    IniObjectError
        If the class cannot be resolved or instantiated, or the input cannot
        be read, parsed or converted.
    """
    cls = _import_class(type_name)
    _validate_existing_file(path, allow_stdin=True)
    content = _read_text_input(path, gateway.config.encoding)

    obj = gateway.load_from_string(content, cls)
    if obj is None:
        raise IniObjectError(f"{cls.__qualname__} cannot be instantiated")

    sys.stdout.write(gateway.save_to_string(obj))
    sys.stdout.flush()
    return EXIT_OK


def _cmd_describe(type_name: str) -> int:
    """Describe: print one row per field of a config class."""
    stype = describe(_import_class(type_name))

    header = stype.name + (f": {stype.title}" if stype.title else "")
    if not stype.instantiable:
        header += " (not instantiable)"
    print(header)

    for f in stype.fields:
        kind = f.kind.value
        if f.nested is not None:
            kind += f"[{f.nested.__qualname__}]"
        elif f.item_kind is not None:
            kind += f"[{f.item_kind.value}]"
        if f.nullable:
            kind += "?"
        accessors = "".join(
            flag for flag, fn in (("S", f.setter), ("G", f.getter)) if fn is not None
        )
        row = [
            f.key,
            kind,
            "public" if f.public else "non-public",
            accessors or "-",
            f.title,
        ]
        print("  " + "\t".join(row).rstrip())
    return EXIT_OK


# ------------------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    CLI entrypoint.

    Parameters
    ----------
    argv : list[str] or None, default None
        Argument list for testing; None uses sys.argv[1:].

    Returns
    -------
    int
        Process exit code (EXIT_OK, EXIT_ERR, or EXIT_CLI).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        gateway = Gateway(load_config(args.config))
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        LOG.error("Invalid config %s: %s", args.config, e)
        return EXIT_CLI

    try:
        if args.cmd == "parse":
            return _cmd_parse(args.path, gateway)
        if args.cmd == "render":
            return _cmd_render(args.path, args.type_name, gateway)
        if args.cmd == "describe":
            return _cmd_describe(args.type_name)
        parser.error("Unknown command")
        return EXIT_CLI

    except IniObjectError as e:
        LOG.error("%s", e)
        return EXIT_ERR
    except KeyboardInterrupt:
        LOG.error("Interrupted")
        return EXIT_ERR


if __name__ == "__main__":
    raise SystemExit(main())
