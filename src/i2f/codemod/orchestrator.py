# src/i2f/codemod/orchestrator.py
"""
Runs the inline-to-file migration over every component under a root.

Per candidate file: parse, find the ``@Component({...})`` block, then for
``template`` and for ``styles`` decide whether to migrate, stage the edit and
the external files, and finally commit everything for that file at once.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from i2f.codemod.decorator_locator import find_component_decorator
from i2f.codemod.diagnostics import DiagnosticKind, Diagnostics
from i2f.codemod.discovery import find_candidates
from i2f.codemod.domain.source_unit import SourceUnit
from i2f.codemod.entry_inspector import describe_value, has_property, inspect_entry, locate_entry_node
from i2f.codemod.errors import EnumerationError, MigrationError, MissingNodeError
from i2f.codemod.file_emitter import ExternalFileEmitter
from i2f.codemod.patcher import Patcher
from i2f.codemod.range_resolver import build_edit, resolve_removal
from i2f.codemod.syntax_tree import ObjectLiteral, parse_source
from i2f.config.config import MigrationSettings


@dataclass(frozen=True)
class Concern:
    name: str                   # inline entry, e.g. "template"
    reference_key: str          # entry written in its place
    reference_keys: tuple       # any of these means the concern is already migrated
    allow_list: bool


TEMPLATE = Concern("template", "templateUrl", ("templateUrl",), False)
STYLES = Concern("styles", "styleUrls", ("styleUrls", "styleUrl"), True)
CONCERNS = (TEMPLATE, STYLES)


class UnitState(Enum):
    NOT_CANDIDATE = "not_candidate"
    ALREADY_MIGRATED = "already_migrated"
    NO_LITERAL = "no_literal"
    COMMITTED = "committed"
    FAILED = "failed"


class ConcernState(Enum):
    ALREADY_MIGRATED = "already_migrated"
    NO_LITERAL = "no_literal"
    UNUSABLE_LITERAL = "unusable_literal"
    MISSING_NODE = "missing_node"
    MIGRATED = "migrated"


@dataclass
class UnitOutcome:
    path: Path
    state: UnitState = UnitState.NOT_CANDIDATE
    concerns: Dict[str, ConcernState] = field(default_factory=dict)
    created: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class MigrationReport:
    root: Path
    outcomes: List[UnitOutcome] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    aborted: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.aborted

    def count(self, state: UnitState) -> int:
        return sum(1 for outcome in self.outcomes if outcome.state is state)

    def outcome_for(self, path: Path) -> Optional[UnitOutcome]:
        path = Path(path)
        for outcome in self.outcomes:
            if outcome.path == path:
                return outcome
        return None


class ComponentMigrator:
    def __init__(self, settings: Optional[MigrationSettings] = None, sink=None):
        self.settings = settings or MigrationSettings()
        self.sink = sink
        self.emitter = ExternalFileEmitter(self.settings)

    def _publish(self, report: MigrationReport, diagnostics: Diagnostics) -> None:
        diagnostics.emit_to(self.sink)
        report.diagnostics.extend(diagnostics)

    def migrate(self, root) -> MigrationReport:
        root = Path(root)
        report = MigrationReport(root)
        run = Diagnostics()
        run.info(f"Looking for components with inline templates and styles under {root}")
        try:
            candidates = find_candidates(root, self.settings.candidate_suffix, self.settings.skip_dirs)
        except EnumerationError as e:
            run.fatal(f"Candidate discovery failed, aborting: {e}", root, DiagnosticKind.ENUMERATION_FAULT)
            report.aborted = True
            self._publish(report, run)
            return report
        run.debug(f"{len(candidates)} candidate file(s) found")
        self._publish(report, run)

        for path in candidates:
            outcome = self.process_unit(path)
            report.outcomes.append(outcome)
            self._publish(report, outcome.diagnostics)

        done = Diagnostics()
        done.info(
            f"Inline migration finished: {report.count(UnitState.COMMITTED)} updated, "
            f"{report.count(UnitState.FAILED)} failed, {len(report.outcomes)} inspected"
        )
        self._publish(report, done)
        return report

    def process_unit(self, path: Path) -> UnitOutcome:
        outcome = UnitOutcome(Path(path))
        diagnostics = outcome.diagnostics
        try:
            original = outcome.path.read_bytes()
            unit = SourceUnit(outcome.path, original, parse_source(original))
            block = find_component_decorator(unit.tree, self.settings.decorator_name)
            if block is None:
                diagnostics.debug(f"Skipping: no @{self.settings.decorator_name}({{...}}) block",
                                  unit.path, DiagnosticKind.NOT_CANDIDATE)
                outcome.state = UnitState.NOT_CANDIDATE
                return outcome

            patcher = Patcher(unit.path, original, self.emitter)
            for concern in CONCERNS:
                outcome.concerns[concern.name] = self._stage_concern(unit, block, concern, patcher, outcome)

            if not patcher.edits:
                outcome.state = self._idle_state(outcome)
                return outcome

            result = patcher.commit()
            for existing in result.existing:
                diagnostics.warn(f"File appeared before it could be created, left untouched: {existing}",
                                 unit.path, DiagnosticKind.TARGET_FILE_EXISTS)
            for created in result.created:
                diagnostics.debug(f"Created {created}", unit.path)
            outcome.created.extend(result.created)
            outcome.existing.extend(result.existing)
            migrated = [c.name for c in CONCERNS if outcome.concerns[c.name] is ConcernState.MIGRATED]
            diagnostics.info(f"Updated: replaced inline {' and '.join(migrated)} with file references", unit.path)
            outcome.state = UnitState.COMMITTED
        except (MigrationError, OSError, UnicodeDecodeError) as e:
            diagnostics.error(f"Failed, file left unchanged: {e}", outcome.path, DiagnosticKind.PER_UNIT_FAULT)
            outcome.state = UnitState.FAILED
        except Exception as e:
            diagnostics.error(f"Unexpected error, file left unchanged: {type(e).__name__}: {e}",
                              outcome.path, DiagnosticKind.PER_UNIT_FAULT)
            outcome.state = UnitState.FAILED
        return outcome

    @staticmethod
    def _idle_state(outcome: UnitOutcome) -> UnitState:
        states = list(outcome.concerns.values())
        if ConcernState.ALREADY_MIGRATED in states and all(
                s in (ConcernState.ALREADY_MIGRATED, ConcernState.NO_LITERAL) for s in states):
            return UnitState.ALREADY_MIGRATED
        return UnitState.NO_LITERAL

    def _stage_concern(self, unit: SourceUnit, block: ObjectLiteral, concern: Concern,
                       patcher: Patcher, outcome: UnitOutcome) -> ConcernState:
        diagnostics = outcome.diagnostics
        present = [key for key in concern.reference_keys if has_property(block, key)]
        if present:
            diagnostics.debug(f"Skipping {concern.name}: already has {present[0]}",
                              unit.path, DiagnosticKind.ALREADY_MIGRATED)
            return ConcernState.ALREADY_MIGRATED

        entry = inspect_entry(block, concern.name, allow_list=concern.allow_list)
        if entry is None:
            diagnostics.debug(f"Skipping {concern.name}: no inline {concern.name} found",
                              unit.path, DiagnosticKind.NO_LITERAL)
            return ConcernState.NO_LITERAL
        if not entry.usable:
            diagnostics.warn(
                f"Skipping {concern.name}: value is a {describe_value(entry.node.value)}, not a literal; left untouched",
                unit.path, DiagnosticKind.UNUSABLE_LITERAL)
            return ConcernState.UNUSABLE_LITERAL
        if not entry.values:
            diagnostics.debug(f"Skipping {concern.name}: empty list, nothing to extract",
                              unit.path, DiagnosticKind.NO_LITERAL)
            return ConcernState.NO_LITERAL

        try:
            locate_entry_node(block, entry)
        except MissingNodeError as e:
            diagnostics.error(f"Internal inconsistency, {concern.name} not rewritten: {e}",
                              unit.path, DiagnosticKind.MISSING_NODE)
            return ConcernState.MISSING_NODE

        if concern.allow_list:
            specs = self.emitter.plan_styles(unit.path, entry.values)
        else:
            specs = [self.emitter.plan_template(unit.path, entry.values[0])]

        for spec in specs:
            if spec.path.exists():
                diagnostics.warn(f"File already exists, creation skipped: {spec.path}",
                                 unit.path, DiagnosticKind.TARGET_FILE_EXISTS)
                outcome.existing.append(spec.path)
            else:
                patcher.stage_file(spec)

        replacement = self.emitter.render_reference(concern.reference_key, specs, as_list=concern.allow_list)
        plan = resolve_removal(entry, len(block.properties), unit.original, patcher.staged_spans)
        patcher.stage(build_edit(plan, entry, unit.original, replacement))
        diagnostics.debug(f"Staged {concern.name} -> {replacement}", unit.path)
        return ConcernState.MIGRATED


def migrate(root, settings: Optional[MigrationSettings] = None, sink=None) -> MigrationReport:
    """Migrate every component under ``root``; see ``ComponentMigrator``."""
    return ComponentMigrator(settings, sink).migrate(root)
