# /from i2f/cli/view.py
# Structured visual output for a finished migration run.

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from i2f.codemod.orchestrator import MigrationReport, UnitState

_STATE_STYLES = {
    UnitState.COMMITTED: "green",
    UnitState.FAILED: "red",
    UnitState.ALREADY_MIGRATED: "dim",
    UnitState.NO_LITERAL: "dim",
    UnitState.NOT_CANDIDATE: "dim",
}


def build_summary_table(report: MigrationReport, show_all: bool = False) -> Table:
    table = Table(title=f"Components under {report.root}", show_lines=False)
    table.add_column("File", overflow="fold")
    table.add_column("Outcome")
    table.add_column("template")
    table.add_column("styles")
    table.add_column("Files created", justify="right")

    for outcome in report.outcomes:
        if not show_all and outcome.state in (UnitState.NOT_CANDIDATE, UnitState.NO_LITERAL,
                                              UnitState.ALREADY_MIGRATED):
            continue
        try:
            shown = outcome.path.relative_to(report.root)
        except ValueError:
            shown = outcome.path
        table.add_row(
            escape(str(shown)),
            f"[{_STATE_STYLES[outcome.state]}]{outcome.state.value}[/]",
            outcome.concerns.get("template").value if "template" in outcome.concerns else "-",
            outcome.concerns.get("styles").value if "styles" in outcome.concerns else "-",
            str(len(outcome.created)),
        )
    return table


def show_run_summary(console: Console, report: MigrationReport, show_all: bool = False):
    if report.aborted:
        console.print("[bold red]Run aborted: candidate discovery failed.[/]")
        return
    console.print(build_summary_table(report, show_all))
    console.print(
        f"[green]{report.count(UnitState.COMMITTED)} updated[/], "
        f"[red]{report.count(UnitState.FAILED)} failed[/], "
        f"{report.count(UnitState.ALREADY_MIGRATED)} already migrated, "
        f"{report.count(UnitState.NO_LITERAL)} without inline literals, "
        f"{report.count(UnitState.NOT_CANDIDATE)} not components"
    )
