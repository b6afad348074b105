"""
Quick numeric checker for a time-sliced telemetry file.
Usage: python tools/quick_check_telemetry.py path/to/time_sliced_data.txt [--scheme basic|rich]
"""
import sys
import os
import argparse

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from NTE.NMM.constants import SCHEMES, SCHEME_BASIC
from NTE.NPM.telemetry_parser import parse_time_sliced_file
from NTE.NSM.pair_stats import activity_matrix, all_pair_statistics


def main(argv=None):
    parser = argparse.ArgumentParser(description="Summarise a time-sliced telemetry file")
    parser.add_argument("path")
    parser.add_argument("--scheme", choices=SCHEMES, default=SCHEME_BASIC)
    args = parser.parse_args(argv)

    if not os.path.exists(args.path):
        print(f"File not found: {args.path}")
        return 1

    result = parse_time_sliced_file(args.path, scheme=args.scheme)

    print("=" * 60)
    print(f"File        : {args.path}")
    print(f"Scheme      : {args.scheme}")
    print(f"Data lines  : {result.line_count}")
    print(f"Skipped     : {result.skipped_lines}")
    for reason, count in sorted(result.skipped_reasons.items()):
        print(f"    {reason:<22} {count}")
    print(f"Devices     : {len(result.devices)}")
    print("=" * 60)

    for device in result.devices:
        table = activity_matrix(device)
        if table.shape[0] == 0:
            print(f"  Dev{device.id:>2}: no channels")
            continue
        per_slice = table.mean(axis=0)
        flag = " <-- ACTIVE" if device.is_active else ""
        print(f"  Dev{device.id:>2}: channels={table.shape[0]:3d}  "
              f"active={device.active_channels:3d}  "
              f"mean={table.mean():.3f}  peak={table.max():.3f}{flag}")
        print("         slices: " + "  ".join(f"{m:.3f}" for m in per_slice))

    pairs = all_pair_statistics(result.devices)
    if pairs:
        print()
    for stats in pairs:
        partner = "-" if stats.second_id is None else f"{stats.second_id:>2}"
        sync = "" if stats.synchronization is None else \
            f"  sync={stats.synchronization} (|diff| = {stats.difference:.3f})"
        print(f"  Pair {stats.first_id:>2} / {partner}: avg={stats.pair_average:.3f}  "
              f"active={stats.total_active_channels:3d}{sync}")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
