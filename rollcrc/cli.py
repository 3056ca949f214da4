from __future__ import annotations

import sys
import argparse
import dataclasses

from typing import Iterator, List, Optional

from rollcrc.constants import DEFAULT_TEST_EXTRA, PRESET_ROLLING
from rollcrc.engine import checksum, finish, init, update_bytes
from rollcrc.errors import ChecksumMismatch, RollCRCError, TableMismatch
from rollcrc.params import PRESETS, CRCParams
from rollcrc.rolling import default_tables, iter_window_checksums
from rollcrc.verify import run_selftest


_READ_SIZE = 1 << 16


def _params_from_args(preset: str, window: Optional[int] = None) -> CRCParams:
    params = CRCParams.from_preset(preset)
    if window is not None:
        params = dataclasses.replace(params, window_size=window)
    return params


def _iter_file_bytes(fh) -> Iterator[int]:
    while True:
        block = fh.read(_READ_SIZE)
        if not block:
            return
        yield from block


def _print_table(table) -> None:
    for row in range(0, len(table), 8):
        print(" ".join(f"{v:08x}" for v in table[row : row + 8]))


def cmd_selftest(*, params: CRCParams, extra: int = DEFAULT_TEST_EXTRA, quiet: bool = False) -> bool:
    """Cross-check every table construction and the rolling checksum.

    Args:
        params: Checksum parameters to test.
        extra: Bytes rolled through after the first window.
        quiet: Limit output to the summary line.

    Prints:
        "roll: <direct> and <rolled> are equal" on success; mismatches go
        to stderr.
    """
    try:
        report = run_selftest(params, extra=extra)
    except TableMismatch as exc:
        print(f"Error: table mismatch: {exc}", file=sys.stderr)
        return False
    except ChecksumMismatch as exc:
        print(f"roll: {exc.direct:08x} and {exc.rolled:08x} ARE NOT EQUAL!", file=sys.stderr)
        return False
    if not quiet:
        print(f"poly: {params.poly:08x}  window: {params.window_size}  init: {params.init_value:08x}")
        print(f"windows checked: {len(report.window_checksums)}")
    print(f"roll: {report.direct:08x} and {report.rolled:08x} are equal")
    return True


def cmd_table(*, params: CRCParams, rolling: bool = False) -> bool:
    """Print the base (or rolling) table, eight entries per line."""
    base, roll_table = default_tables(params)
    _print_table(roll_table if rolling else base)
    return True


def cmd_sum(paths: List[str], *, params: CRCParams) -> bool:
    """Print the checksum of each file.

    Args:
        paths: Files to checksum; "-" reads stdin.
        params: Checksum parameters.
    """
    base, _ = default_tables(params)
    for p in paths:
        state = init(params)
        if p == "-":
            state = update_bytes(state, base, sys.stdin.buffer.read())
        else:
            with open(p, "rb") as fh:
                while True:
                    block = fh.read(_READ_SIZE)
                    if not block:
                        break
                    state = update_bytes(state, base, block)
        print(f"{finish(state, params):08x}  {p}")
    return True


def cmd_windows(path: str, *, params: CRCParams) -> bool:
    """Print the checksum of every complete window of a file."""
    count = 0
    with open(path, "rb") as fh:
        for off, crc in iter_window_checksums(_iter_file_bytes(fh), params):
            print(f"{off} {crc:08x}")
            count += 1
    if not count:
        print(f"Warning: {path} is shorter than the window ({params.window_size} bytes)", file=sys.stderr)
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="rollcrc",
        description="Reflected CRC-32 tables and rolling window checksums",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    def add_preset(p):
        p.add_argument(
            "--preset",
            choices=sorted(PRESETS),
            default=PRESET_ROLLING,
            help="Checksum convention (rolling: init 0; zip: init/xorout 0xFFFFFFFF). Default: rolling",
        )

    ap_self = sub.add_parser("selftest", help="Cross-check table builders and rolling checksum")
    ap_self.add_argument("--window", type=int, help="Window size in bytes")
    ap_self.add_argument("--extra", type=int, default=DEFAULT_TEST_EXTRA, help="Bytes to roll through after the first window")
    ap_self.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")
    add_preset(ap_self)

    ap_table = sub.add_parser("table", help="Print a lookup table")
    ap_table.add_argument("--rolling", action="store_true", help="Print the rolling table instead of the base table")
    ap_table.add_argument("--window", type=int, help="Window size in bytes (rolling table)")
    add_preset(ap_table)

    ap_sum = sub.add_parser("sum", help="Checksum files")
    ap_sum.add_argument("paths", nargs="+", help="Files to checksum ('-' for stdin)")
    add_preset(ap_sum)

    ap_win = sub.add_parser("windows", help="Checksum every window of a file")
    ap_win.add_argument("path", help="Input file")
    ap_win.add_argument("--window", type=int, help="Window size in bytes")
    add_preset(ap_win)

    args = ap.parse_args(argv)
    try:
        if args.cmd == "selftest":
            params = _params_from_args(args.preset, args.window)
            success = cmd_selftest(params=params, extra=args.extra, quiet=args.quiet)
            sys.exit(0 if success else 1)
        elif args.cmd == "table":
            cmd_table(params=_params_from_args(args.preset, args.window), rolling=args.rolling)
        elif args.cmd == "sum":
            cmd_sum(args.paths, params=_params_from_args(args.preset))
        elif args.cmd == "windows":
            cmd_windows(args.path, params=_params_from_args(args.preset, args.window))
        else:
            raise RuntimeError("Unknown command")
    except (RollCRCError, OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
