"""
Command-line interface for photo-dater.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .config import Config
from .constants import PROGRAM, ExitCode, configure_logging, get_console
from .directory_namer import NameStatus
from .errors import EmptyInputError, PhotoDaterError, RangeTooWideError
from .history import HistoryManager
from .organizer import FileOrganizer
from .plan import Plan

COMMANDS = ("status", "rename", "list", "interval", "check", "files-rename", "move-by-days")
MUTATING_COMMANDS = ("rename", "files-rename", "move-by-days")


def parse_days(value: str) -> int:
    """Convert a day count argument to a non-negative integer."""
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number of days: {value}")
    if days < 0:
        raise argparse.ArgumentTypeError(f"Number of days must not be negative: {value}")
    return days


def parse_base_name(value: str) -> str:
    """Validate a files-rename base name: a plain file name, no path."""
    separators = [sep for sep in (os.sep, os.altsep) if sep]
    if not value or value in (".", "..") or any(sep in value for sep in separators):
        raise argparse.ArgumentTypeError(f"Invalid base name: {value!r}")
    return value


def normalize_directory_argument(argv: Sequence[str]) -> List[str]:
    """Turn a leading positional DIRECTORY into --directory DIRECTORY.

    The first positional argument is the command unless it is not a command
    name, in which case it names the directory.
    """
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-d", "--directory"):
            i += 2
            continue
        if arg.startswith("-"):
            i += 1
            continue
        if arg not in COMMANDS:
            args[i:i + 1] = ["--directory", arg]
        break
    return args


def create_parser(config: Config) -> argparse.ArgumentParser:
    """Create argument parser with dynamic defaults from config."""
    max_interval = config.get_max_interval()

    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        usage=f"{PROGRAM} [DIRECTORY] COMMAND [options]",
        description="Name photo directories and files after the dates the photos were taken",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Exit codes:
  {ExitCode.OK:d}  success, directory name matches its photos
  {ExitCode.MISMATCH:d}  directory date does not match its photos
  {ExitCode.ERROR:d}  error (filesystem, metadata, usage)
  {ExitCode.UNMANAGED:d}  directory name has no date
  {ExitCode.INTERVAL_EXCEEDED:d}  photos span more days than allowed

Examples:
  {PROGRAM} ~/Pictures/Trip status
  {PROGRAM} ~/Pictures/Trip rename --max-interval 7 --dry-run
  {PROGRAM} move-by-days -n
        """
    )

    parser.add_argument(
        "--directory", "-d", default=".",
        help="Directory containing the photos (default: current directory)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version", "-V", action="store_true",
        help=f"Display the version number of {PROGRAM} and exit"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser(
        "status", help="Check whether the directory name matches the dates of its photos"
    )

    rename = subparsers.add_parser(
        "rename", help="Prefix the directory name with the date range of its photos"
    )
    rename.add_argument(
        "--max-interval", type=parse_days, metavar="N",
        help=f"Maximal interval in days (default: {max_interval})"
    )
    rename.add_argument(
        "--remember", action="store_true",
        help="Save --max-interval as the new default"
    )
    rename.add_argument(
        "--dry-run", "-n", action="store_true",
        help="Preview the rename without making changes"
    )

    subparsers.add_parser("list", help="List photos sorted by creation date")
    subparsers.add_parser("interval", help="Show the date range of the photos")

    check = subparsers.add_parser(
        "check", help="Succeed if the photos span at most N days"
    )
    check.add_argument("max_interval", type=parse_days, metavar="N",
                       help="Maximal interval in days")

    files_rename = subparsers.add_parser(
        "files-rename", help="Rename photos to NAME-NNN.ext in creation order"
    )
    files_rename.add_argument(
        "--name", type=parse_base_name, metavar="NAME",
        help="Base name for the files (default: directory name without its date)"
    )
    files_rename.add_argument(
        "--dry-run", "-n", action="store_true",
        help="Preview renames without making changes"
    )

    move_by_days = subparsers.add_parser(
        "move-by-days", help="Move photos into YYYY-MM-DD subdirectories"
    )
    move_by_days.add_argument(
        "--dry-run", "-n", action="store_true",
        help="Preview moves without making changes"
    )

    return parser


def report_skipped(organizer: FileOrganizer, console: Console) -> None:
    skipped = organizer.photos.skipped
    if skipped:
        console.print(f"[yellow]Skipped {len(skipped)} files without EXIF date[/yellow]")


def run_plan(organizer: FileOrganizer, plan: Plan, dry_run: bool, console: Console) -> int:
    """Print a plan, then preview or execute it and report every outcome."""
    organizer.print_plan(plan)
    if plan.is_empty:
        console.print("Nothing to do")
        return ExitCode.OK

    report = organizer.run(plan, dry_run=dry_run)
    organizer.print_report(report)
    if not report.ok:
        console.print(f"[red]Error: {escape(str(report.error))}[/red]")
        return ExitCode.ERROR
    return ExitCode.OK


def cmd_status(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
               console: Console) -> int:
    check = organizer.status()
    report_skipped(organizer, console)
    name = escape(organizer.directory.name)
    target = escape(check.target_name)

    if check.status is NameStatus.MATCH:
        console.print(f"[green]Date is valid:[/green] {name}")
        return ExitCode.OK

    if check.status is NameStatus.MISMATCH:
        console.print(f"[red]Date is set but does not match contents:[/red] {name}")
        console.print(f"  Name:     {check.current}")
        console.print(f"  Photos:   {check.expected}")
        if check.covers:
            console.print("  The name covers all photo dates but is wider than needed")
        console.print(f"  Expected: {target}")
        return ExitCode.MISMATCH

    console.print(f"[yellow]Date is not set:[/yellow] {name}")
    console.print(f"  Suggested: {target}")
    return ExitCode.UNMANAGED


def cmd_rename(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
               console: Console) -> int:
    max_interval = args.max_interval
    if max_interval is None:
        max_interval = config.get_max_interval()
    elif args.remember:
        config.update_max_interval(max_interval)

    plan = organizer.plan_rename(max_interval)
    report_skipped(organizer, console)
    if plan.is_empty:
        console.print(f"Directory already has the right date: {escape(organizer.directory.name)}")
        return ExitCode.OK
    return run_plan(organizer, plan, args.dry_run, console)


def cmd_list(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
             console: Console) -> int:
    entries = organizer.list_photos()
    if not entries:
        console.print("[yellow]No files found in directory[/yellow]")
        return ExitCode.OK
    organizer.print_photos(entries)
    report_skipped(organizer, console)
    return ExitCode.OK


def cmd_interval(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
                 console: Console) -> int:
    date_range = organizer.date_range()
    console.print(str(date_range))
    console.print(f"from: {date_range.start}, to: {date_range.end} ({date_range.days} days)")
    report_skipped(organizer, console)
    return ExitCode.OK


def cmd_check(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
              console: Console) -> int:
    organizer.check(args.max_interval)
    console.print("[green]OK[/green]")
    return ExitCode.OK


def cmd_files_rename(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
                     console: Console) -> int:
    plan = organizer.plan_files_rename(args.name)
    return run_plan(organizer, plan, args.dry_run, console)


def cmd_move_by_days(organizer: FileOrganizer, args: argparse.Namespace, config: Config,
                     console: Console) -> int:
    plan = organizer.plan_move_by_days()
    return run_plan(organizer, plan, args.dry_run, console)


COMMAND_HANDLERS = {
    "status": cmd_status,
    "rename": cmd_rename,
    "list": cmd_list,
    "interval": cmd_interval,
    "check": cmd_check,
    "files-rename": cmd_files_rename,
    "move-by-days": cmd_move_by_days,
}


def main(argv: Optional[Sequence[str]] = None, config_path: Optional[Path] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments without the program name (default: sys.argv[1:])
        config_path: Optional path to config file (for testing)
    """
    config = Config(config_path=config_path)
    parser = create_parser(config)
    args = parser.parse_args(normalize_directory_argument(
        sys.argv[1:] if argv is None else argv))

    # Handle version option
    if args.version:
        from . import __version__, __copyright__
        if args.verbose:
            print(f"{PROGRAM} version {__version__} {__copyright__}")
            print(f"Config:  {config.config_path}")
            return ExitCode.OK
        print(__version__)
        return ExitCode.OK

    if args.command is None:
        parser.print_help()
        return ExitCode.ERROR

    logger = configure_logging(args.verbose)
    console = get_console()

    directory = Path(args.directory).expanduser().resolve()
    if not directory.exists():
        console.print(f"[red]Error: Directory does not exist: {escape(str(directory))}[/red]")
        return ExitCode.ERROR
    if not directory.is_dir():
        console.print(f"[red]Error: Not a directory: {escape(str(directory))}[/red]")
        return ExitCode.ERROR

    dry_run = getattr(args, "dry_run", False)
    history_manager = HistoryManager(config.program_root, dry_run=dry_run)
    if args.command in MUTATING_COMMANDS:
        history_manager.setup_session_logger(logger)

    organizer = FileOrganizer(
        directory=directory,
        ignore_hidden=config.get_ignore_hidden(),
        history_manager=history_manager,
        console=console
    )

    try:
        return COMMAND_HANDLERS[args.command](organizer, args, config, console)
    except EmptyInputError as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        return ExitCode.OK
    except RangeTooWideError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return ExitCode.INTERVAL_EXCEEDED
    except PhotoDaterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return ExitCode.ERROR
    except KeyboardInterrupt:
        console.print("\n[red]Operation cancelled by user[/red]")
        return ExitCode.ERROR
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        console.print(f"\n[red]Fatal error: {escape(str(e))}[/red]")
        return ExitCode.ERROR
    finally:
        history_manager.close()


if __name__ == "__main__":
    sys.exit(main())
