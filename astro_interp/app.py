"""Command-line entry point for the interpretation core.

Resolves interpretation text from the shell, e.g.::

    astro-interp --style modern combo Sun Aries 1
    astro-interp --file my.ais aspect-combo Sun Venus Conjunct
    astro-interp list
"""
from __future__ import annotations

import argparse
import logging
from typing import Callable, Iterable, Optional

from astro_interp import __version__
from astro_interp import keys
from astro_interp.context import InterpretationContext
from astro_interp.errors import InterpretationError, MalformedKeyError
from astro_interp.settings import get_settings

INSTALL_HELP = """\
Style package installation not yet implemented.
Package: {package}
To manually install:
  1. Extract the package to {styles}
  2. Run `astro-interp list` to refresh
"""

MIGRATE_HELP = """\
Migration not yet implemented.
Existing .ais files will continue to work with --file <path>.
"""


def _token(resolve: Callable[[str], int], label: str) -> Callable[[str], int]:
    """Wrap a key-codec resolver as an argparse ``type``."""

    def convert(raw: str) -> int:
        try:
            return resolve(raw)
        except MalformedKeyError as exc:
            raise argparse.ArgumentTypeError(f"invalid {label}: {raw!r}") from exc

    convert.__name__ = label
    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Astrological interpretation style lookups")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--base", help="Interpretations directory (contains styles/)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--style", help="Activate a style folder by name before looking up")
    source.add_argument("--file", help="Load a single-file style before looking up")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List the available style folders")

    combo = subparsers.add_parser("combo", help="Object in a sign and house")
    combo.add_argument("object", type=_token(keys.resolve_object, "object"))
    combo.add_argument("sign", type=_token(keys.resolve_sign, "sign"))
    combo.add_argument("house", type=_token(keys.resolve_house, "house"))

    aspect_combo = subparsers.add_parser("aspect-combo", help="Two objects joined by an aspect")
    aspect_combo.add_argument("object1", type=_token(keys.resolve_object, "object"))
    aspect_combo.add_argument("object2", type=_token(keys.resolve_object, "object"))
    aspect_combo.add_argument("aspect", type=_token(keys.resolve_aspect, "aspect"))

    aspect = subparsers.add_parser("aspect", help="Generic text for an aspect")
    aspect.add_argument("aspect", type=_token(keys.resolve_aspect, "aspect"))
    aspect.add_argument("--orb", type=int, default=0, help="Orb in degrees (informational)")

    install = subparsers.add_parser("install", help="Install a style package archive")
    install.add_argument("package")

    subparsers.add_parser("migrate", help="Move loose .ais files into style folders")
    return parser


def _print_result(text: Optional[str]) -> int:
    if text is None:
        print("No interpretation found.")
        return 1
    print(text)
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx = InterpretationContext(get_settings(), base_path=args.base)

    if args.command == "install":
        print(INSTALL_HELP.format(package=args.package, styles=ctx.folders.styles_path), end="")
        return 1
    if args.command == "migrate":
        print(MIGRATE_HELP, end="")
        return 1
    if args.command == "list":
        print(ctx.format_style_listing(), end="")
        return 0

    try:
        if args.style:
            ctx.activate_style(args.style)
        elif args.file:
            ctx.load_style_file(args.file)
        else:
            ctx.scan_folders()
            active = ctx.folders.active_folder
            if active is not None:
                ctx.activate_style(active.name)
    except InterpretationError as exc:
        print(f"error: {exc}")
        return 2

    if args.command == "combo":
        return _print_result(ctx.resolve_combo(args.object, args.sign, args.house))
    if args.command == "aspect-combo":
        return _print_result(ctx.resolve_aspect_combo(args.object1, args.object2, args.aspect))
    if args.command == "aspect":
        return _print_result(ctx.resolve_aspect(args.aspect, args.orb))

    parser.error("No command specified")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
