"""CLI log inspector — list rotated log files and print one bucket."""

import argparse
import os
import sys

from src.inspector import list_log_files, path_for_bucket, read_bucket


def _size_str(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def main():
    parser = argparse.ArgumentParser(description="Inspect rotated log files")
    parser.add_argument("--log-path", default=os.environ.get("LOG_PATH", "./logs/app.log"),
                        help="Path of the active log file")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--list", action="store_true", help="List the active and rotated files")
    group.add_argument("--read", metavar="BUCKET",
                       help="Print the file for a bucket (e.g. 20240115), or 'active'")
    args = parser.parse_args()

    if args.list:
        try:
            files = list_log_files(args.log_path)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not files:
            print("No log files found.")
            return
        for name, bucket in files:
            size = os.path.getsize(path_for_bucket(args.log_path, bucket))
            print(f"  {bucket:<10}  {name}  ({_size_str(size)})")

    elif args.read:
        try:
            sys.stdout.write(read_bucket(args.log_path, args.read))
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
