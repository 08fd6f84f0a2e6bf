from __future__ import annotations
import argparse, json, logging, sys
from .models.header import HeaderResult

def _setup_logging(verbosity: int) -> None:
    level = {0: logging.ERROR, 1: logging.WARNING, 2: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format="%(asctime)s [%(name)s] [%(levelname)s] %(message)s")

def cmd_info(args):
    from .binary.reader import parse_header

    header = parse_header(args.input, resolve_positions=not args.no_resolve)

    # Summary mode: one line per flight
    if args.summary:
        print(f"tail={header.tail_number or '-'} flights={len(header.flights)} binary_offset={header.binary_offset}")
        for f in header.flights:
            where = f.resolved_offset if f.is_resolved else "unresolved"
            print(f"  flight {f.flight_number:5d}  {f.data_length:8d} bytes  at {where}")
        return 0

    print(json.dumps(header.model_dump(mode="json"), indent=2))
    return 0

def cmd_lines(args):
    from .binary.reader import iter_records
    for line in iter_records(args.input):
        print(f"{line.number:3d} @{line.start:<6d} {line.text}")
    return 0

def cmd_to_json(args):
    header = HeaderResult.from_binary(args.input)
    with open(args.output, "w", encoding="utf-8") as out:
        json.dump(header.model_dump(mode="json"), out, indent=2)
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="edmheader", description="EDM engine monitor header utilities")
    p.add_argument("-v", "--verbose", action="count", default=1, help="More log output (repeatable)")
    p.add_argument("-q", "--quiet", action="store_const", const=0, dest="verbose", help="Errors only")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print the decoded header as JSON")
    sp.add_argument("input", help="Path to an EDM .jpi file")
    sp.add_argument("--summary", action="store_true", help="Print one line per flight instead of JSON")
    sp.add_argument("--no-resolve", action="store_true", help="Skip locating flights in the binary data")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("lines", help="list the checksum-verified header lines")
    sp.add_argument("input")
    sp.set_defaults(func=cmd_lines)

    sp = sub.add_parser("to-json", help="write the decoded header to a JSON file")
    sp.add_argument("input")
    sp.add_argument("output")
    sp.set_defaults(func=cmd_to_json)

    return p

def main(argv=None):
    from .binary.reader import HeaderParseError
    from .binary.codecs.header_lines import ChecksumError

    p = build_parser()
    ns = p.parse_args(argv)
    _setup_logging(ns.verbose)
    try:
        return ns.func(ns)
    except (ChecksumError, HeaderParseError) as e:
        print(f"edmheader: {ns.input}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
