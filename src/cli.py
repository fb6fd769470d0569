"""Command-line interface for modvendor."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from errors import ModVendorError
from rules.config import ModVendorConfig, load_config, vendor_root
from vendoring.copier import vendor_local_path
from vendoring.write import plan_vendor, run_vendor
from verify.verify import verify_vendor_tree


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root containing go.mod (default: .)",
    )
    parser.add_argument(
        "--copy",
        default=None,
        help=(
            "Copy files matching glob patterns to ./vendor/ "
            '(e.g. --copy="**/*.c **/*.h **/*.proto")'
        ),
    )
    parser.add_argument(
        "--fullcopy",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Copy all matching module files regardless of package usage (default: on)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const=True,
        default=None,
        help="Verbose output",
    )
    parser.add_argument(
        "--include",
        default=None,
        help=(
            "Additional package directories to vendor which are not listed in "
            "vendor/modules.txt, comma separated "
            "(e.g. --include=github.com/a/b/dir1,github.com/a/b/dir1/dir2)"
        ),
    )
    parser.add_argument(
        "--gopath",
        default=None,
        help="GOPATH holding the module cache (default: $GOPATH or ~/go)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modvendor")
    subparsers = parser.add_subparsers(dest="command", required=True)

    vendor_parser = subparsers.add_parser(
        "vendor", help="Copy used module files into ./vendor/"
    )
    _add_common_options(vendor_parser)

    plan_parser = subparsers.add_parser(
        "plan", help="Print the files that would be vendored as JSON lines"
    )
    _add_common_options(plan_parser)

    verify_parser = subparsers.add_parser(
        "verify", help="Verify that ./vendor/ matches a fresh vendoring run"
    )
    _add_common_options(verify_parser)

    return parser


def _resolve_config(root: Path, args: argparse.Namespace) -> ModVendorConfig:
    return load_config(root).with_overrides(
        copy=args.copy,
        fullcopy=args.fullcopy,
        verbose=args.verbose,
        include=args.include,
        gopath=args.gopath,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )


def _handle_vendor(root: Path, config: ModVendorConfig) -> int:
    run_vendor(root=root, config=config)
    return 0


def _handle_plan(root: Path, config: ModVendorConfig) -> int:
    destination_root = vendor_root(root)
    for module in plan_vendor(root=root, config=config):
        for file_path in module.vendor_set.files():
            local_path = vendor_local_path(module, file_path)
            record = {
                "module": module.import_path,
                "source": file_path,
                "destination": str(destination_root / local_path),
            }
            sys.stdout.write(orjson.dumps(record, option=orjson.OPT_SORT_KEYS).decode())
            sys.stdout.write("\n")
    return 0


def _handle_verify(root: Path, config: ModVendorConfig) -> int:
    result = verify_vendor_tree(root=root, config=config)
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("mismatch", result.mismatches),
            ("mode", result.bad_modes),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()

    try:
        config = _resolve_config(root, args)
        _configure_logging(config.verbose)

        if args.command == "vendor":
            return _handle_vendor(root, config)

        if args.command == "plan":
            return _handle_plan(root, config)

        if args.command == "verify":
            return _handle_verify(root, config)
    except ModVendorError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
