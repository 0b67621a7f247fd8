# src/i2f/codemod/patcher.py
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from i2f.codemod.domain.source_unit import Edit, ExternalFileSpec
from i2f.codemod.errors import PatchConflictError


@dataclass
class CommitResult:
    created: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)


class Patcher:
    """
    Collects every change for one source file and applies them in one go.

    Edits are staged against the original bytes and rendered from that
    snapshot only. ``commit`` either lands the external files and the new
    source together or leaves the file system as it found it.
    """

    def __init__(self, path: Path, original: bytes, emitter):
        self.path = Path(path)
        self.original = original
        self.emitter = emitter
        self._edits: List[Edit] = []
        self._files: List[ExternalFileSpec] = []

    @property
    def edits(self) -> List[Edit]:
        return list(self._edits)

    @property
    def files(self) -> List[ExternalFileSpec]:
        return list(self._files)

    @property
    def staged_spans(self) -> list:
        return [edit.remove for edit in self._edits]

    def stage(self, edit: Edit) -> None:
        if edit.remove.end > len(self.original):
            raise PatchConflictError(f"edit {edit.remove} runs past the end of {self.path.name}")
        for staged in self._edits:
            if staged.remove.overlaps(edit.remove):
                raise PatchConflictError(f"edit {edit.remove} overlaps staged edit {staged.remove}")
            if staged.remove.start == staged.remove.end == edit.remove.start == edit.remove.end:
                raise PatchConflictError(f"two insertions staged at offset {edit.insert_at}")
        self._edits.append(edit)

    def stage_file(self, spec: ExternalFileSpec) -> None:
        if any(staged.path == spec.path for staged in self._files):
            raise PatchConflictError(f"{spec.path.name} is staged twice")
        self._files.append(spec)

    def render(self) -> bytes:
        """The original bytes with each staged ``remove`` span swapped for its ``text``."""
        chunks = []
        cursor = 0
        for edit in sorted(self._edits, key=lambda e: e.remove.start):
            chunks.append(self.original[cursor:edit.remove.start])
            chunks.append(edit.text)
            cursor = edit.remove.end
        chunks.append(self.original[cursor:])
        return b"".join(chunks)

    def commit(self) -> CommitResult:
        result = CommitResult()
        patched = self.render()
        try:
            for spec in self._files:
                if self.emitter.write(spec):
                    result.created.append(spec.path)
                else:
                    result.existing.append(spec.path)
            if self._edits:
                self._replace_source(patched)
        except BaseException:
            for created in result.created:
                created.unlink(missing_ok=True)
            raise
        return result

    def _replace_source(self, patched: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(patched)
            shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
