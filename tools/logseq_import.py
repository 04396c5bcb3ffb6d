'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
import sys
import argparse

from core.log import Log
from core.logseq import import_graph

EPILOG = """\
Titles that already exist in the notebook get a suffix,
e.g. "My Page" -> "My Page (2)".
"""

def build_parser():
    parser = argparse.ArgumentParser(
        description="Import a Logseq graph into an OutlinePad notebook",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("graph_dir", help="Logseq graph directory (holds journals/ and/or pages/)")
    parser.add_argument("notebook_dir", help="OutlinePad notebook directory (created if missing)")
    only = parser.add_mutually_exclusive_group()
    only.add_argument("--journals-only", action="store_true", help="Import only journals, skip pages")
    only.add_argument("--pages-only", action="store_true", help="Import only pages, skip journals")
    parser.add_argument("--dry-run", action="store_true", help="Preview the import without writing")
    parser.add_argument(
        "--verbosity",
        type=int, default=0,
        help="Set verbosity level (0=quiet, 1=normal, 2=verbose, 3+=debug)"
    )
    return parser

def print_results(counts, dry_run):
    print("=== DRY RUN RESULTS ===" if dry_run else "=== IMPORT COMPLETE ===")
    print(f"  Journals imported: {counts['journals']}")
    print(f"  Pages imported:    {counts['pages']}")
    print(f"  Total:             {counts['journals'] + counts['pages']}")
    if counts["renamed"]:
        print(f"  Renamed (duplicates): {len(counts['renamed'])}")
        for original, new in counts["renamed"]:
            print(f'    - "{original}" -> "{new}"')
    if counts["failed"]:
        print(f"  Failed: {counts['failed']} (see log)")

def main(argv=None):
    args = build_parser().parse_args(argv)
    Log.set_verbosity(args.verbosity)

    try:
        counts = import_graph(
            args.graph_dir,
            args.notebook_dir,
            journals=not args.pages_only,
            pages=not args.journals_only,
            dry_run=args.dry_run,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbosity > 0:
        print(Log.format())
    print_results(counts, args.dry_run)
    return 0 if counts["failed"] == 0 else 2

if __name__ == "__main__":
    sys.exit(main())
