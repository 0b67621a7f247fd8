# src/i2f/app.py

import argparse
from typing import Optional, Sequence

import yaml

from i2f.bootstrap import initialize_environment
from i2f.cli.ascii import show_banner
from i2f.cli.controller import Canvas
from i2f.cli.view import show_run_summary
from i2f.codemod.orchestrator import migrate
from i2f.config.config import load_config, MigrationSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i2f",
        description="Move inline Angular component templates and styles into external files",
    )
    parser.add_argument("--config", default="config.yaml",
                        help="YAML settings file (default: ./config.yaml, ignored if missing)")
    parser.add_argument("--verbose", action="store_true", help="Show debug diagnostics")
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate_parser = subparsers.add_parser("migrate", help="Migrate every *.component.ts under ROOT")
    migrate_parser.add_argument("root", help="Directory to scan")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the i2f CLI. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    initialize_environment()

    canvas = Canvas(verbose=args.verbose)
    try:
        settings = MigrationSettings.from_config(load_config(args.config))
    except (OSError, ValueError, yaml.YAMLError) as e:
        canvas.fatal(f"Cannot load configuration {args.config}: {e}")
        return 1

    show_banner(canvas.console)
    canvas.start_process("Inline template migration")
    report = migrate(args.root, settings, sink=canvas)
    show_run_summary(canvas.console, report, show_all=args.verbose)

    if not report.succeeded:
        canvas.end_process("Migration aborted")
        return 1
    canvas.end_process("Migration complete")
    return 0
