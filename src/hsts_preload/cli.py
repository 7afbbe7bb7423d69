"""hsts-preload CLI entry point.

Usage: hsts-preload [-v] generate --output FILE [--url URL | --input FILE]
       hsts-preload [-v] check HOST... [--table FILE]
"""
import argparse
import logging
import sys


def _add_generate_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "generate",
        help="Fetch the preload list and write a table artifact.",
    )
    src = p.add_mutually_exclusive_group()
    src.add_argument(
        "--url", default=None,
        help="Base64-encoded list to fetch (default: Chromium main branch)",
    )
    src.add_argument(
        "--input", default=None,
        help="Read a plain JSON preload list from this file instead of fetching.",
    )
    p.add_argument(
        "--output", "-o", required=True,
        help="Where to write the table artifact (JSON).",
    )
    p.add_argument(
        "--timeout", type=float, default=600.0,
        help="Fetch timeout in seconds (default: 600)",
    )


def _add_check_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "check",
        help="Report whether hosts are on the preload list.",
    )
    p.add_argument("hosts", nargs="+", metavar="HOST")
    p.add_argument(
        "--table", default=None,
        help="Table artifact to use (default: $HSTS_PRELOAD_TABLE or the bundled list)",
    )


def _run_generate(args: argparse.Namespace) -> int:
    from hsts_preload.source import (
        CHROMIUM_PRELOAD_URL,
        fetch_preload_list,
        load_preload_file,
    )
    from hsts_preload.table import build_table, dump_table

    if args.input:
        entries = load_preload_file(args.input)
        source = args.input
    else:
        source = args.url or CHROMIUM_PRELOAD_URL
        entries = fetch_preload_list(source, timeout=args.timeout)

    table = build_table(entries)
    dump_table(table, args.output, source=source)
    print(f"{table!r} -> {args.output}")
    return 0


def _run_check(args: argparse.Namespace) -> int:
    from hsts_preload.matcher import PreloadMatcher, default_matcher
    from hsts_preload.table import load_table

    if args.table:
        matcher = PreloadMatcher(load_table(args.table))
    else:
        matcher = default_matcher()

    all_preloaded = True
    for host in args.hosts:
        preloaded = matcher.is_preloaded(host)
        all_preloaded = all_preloaded and preloaded
        print(f"{host}\t{'preloaded' if preloaded else 'not preloaded'}")
    return 0 if all_preloaded else 1


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hsts-preload",
        description="HSTS preload list lookups backed by a perfect hash table.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log at DEBUG level instead of INFO.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_generate_parser(subparsers)
    _add_check_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "generate":
        sys.exit(_run_generate(args))
    if args.command == "check":
        sys.exit(_run_check(args))
