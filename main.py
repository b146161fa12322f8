#!/usr/bin/env python3
"""
Excel Batch Executor: run Python hooks over every workbook in a folder tree

Each workbook is opened once, passed through the pre-sheet, per-sheet and
post-sheet hooks, optionally saved, and closed. Files that fail are reported
and the batch continues.
"""

import argparse
import io
import sys
import traceback
from pathlib import Path

from config import ENGINE_COM, ENGINE_OPENPYXL, RECURSIVE, SAVE_ON_SUCCESS
from hooks import HookLoadError
from workflow import main_workflow


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Run processing hooks over every Excel workbook in a folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pick the folder in a dialog, hooks from my_hooks.py
  python main.py --dialog --hooks my_hooks.py

  # Process a folder without touching subfolders
  python main.py --input ./reports --hooks my_hooks --no-recursive

  # Dry run: run the hooks but never save
  python main.py --input ./reports --hooks my_hooks --no-save

  # Use openpyxl instead of Excel (no .xls support)
  python main.py --input ./reports --hooks my_hooks --engine openpyxl

A hooks module defines any of:
  pre_process_sheet(executor, workbook)
  process_sheet(executor, workbook, worksheet)
  post_process_sheet(executor, workbook)
        """
    )

    source = parser.add_mutually_exclusive_group()

    source.add_argument(
        "--input",
        type=str,
        default=None,
        help="Folder containing the workbooks (default: choose in a dialog)"
    )

    source.add_argument(
        "--dialog",
        action="store_true",
        help="Choose the folder in a dialog"
    )

    parser.add_argument(
        "--hooks",
        type=str,
        default=None,
        help="Module name or .py file defining the processing hooks"
    )

    parser.add_argument(
        "--engine",
        type=str,
        choices=[ENGINE_COM, ENGINE_OPENPYXL],
        default=None,
        help="Spreadsheet engine (or set EXCEL_ENGINE environment variable)"
    )

    parser.add_argument(
        "--no-recursive",
        dest="recursive",
        action="store_false",
        default=RECURSIVE,
        help="Only process files directly inside the folder"
    )

    parser.add_argument(
        "--no-save",
        dest="save",
        action="store_false",
        default=SAVE_ON_SUCCESS,
        help="Do not save workbooks after processing"
    )

    parser.add_argument(
        "--visible",
        action="store_true",
        default=None,
        help="Show the Excel window while processing (COM engine only)"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point"""
    # UTF-8 console output on Windows
    if sys.platform == "win32":
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

    args = parse_args(argv)

    print("="*80)
    print("Excel Batch Executor")
    print("="*80)
    print()

    if args.input is not None:
        input_path = Path(args.input)
        if not input_path.is_dir():
            print(f"❌ Error: Input directory not found: {input_path}")
            print(f"   Please specify a valid --input path")
            sys.exit(1)

    try:
        stats = main_workflow(
            input_dir=args.input,
            hooks_module=args.hooks,
            engine=args.engine,
            save_on_success=args.save,
            recursive=args.recursive,
            visible=args.visible,
        )

    except HookLoadError as e:
        print(f"\n❌ Hook error: {e}")
        sys.exit(1)

    except (ValueError, RuntimeError) as e:
        print(f"\n❌ Configuration error: {e}")
        sys.exit(1)

    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        traceback.print_exc()
        sys.exit(1)

    if stats["cancelled"]:
        sys.exit(1)
    if stats["failed"] > 0:
        print(f"\n⚠ {stats['failed']} file(s) failed")
        sys.exit(1)

    print(f"\n✓ Successfully processed {stats['succeeded']} file(s)")
    sys.exit(0)


if __name__ == "__main__":
    main()
