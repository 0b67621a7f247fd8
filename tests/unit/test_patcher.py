import pytest

import i2f.codemod.patcher as patcher_mod
from i2f.codemod.domain.source_unit import Edit, ExternalFileSpec
from i2f.codemod.errors import PatchConflictError
from i2f.codemod.file_emitter import ExternalFileEmitter
from i2f.codemod.patcher import Patcher
from i2f.codemod.syntax_tree import Span
from i2f.config.config import MigrationSettings

ORIGINAL = b"0123456789"


@pytest.fixture
def emitter():
    return ExternalFileEmitter(MigrationSettings())


def test_edits_use_original_coordinates(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    patcher.stage(Edit(Span(6, 8), 6, b"SIX-SEVEN"))
    patcher.stage(Edit(Span(1, 3), 2, b"x"))
    assert patcher.render() == b"0x345SIX-SEVEN89"
    assert patcher.original == ORIGINAL


def test_pure_insertion(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    patcher.stage(Edit(Span(5, 5), 5, b"++"))
    assert patcher.render() == b"01234++56789"


def test_adjacent_edits_are_allowed(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    patcher.stage(Edit(Span(0, 5), 0, b"a"))
    patcher.stage(Edit(Span(5, 10), 5, b"b"))
    assert patcher.render() == b"ab"


def test_overlapping_edits_are_rejected(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    patcher.stage(Edit(Span(2, 6), 2, b""))
    with pytest.raises(PatchConflictError):
        patcher.stage(Edit(Span(5, 8), 5, b""))
    assert len(patcher.edits) == 1


def test_edit_past_end_is_rejected(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    with pytest.raises(PatchConflictError):
        patcher.stage(Edit(Span(8, 12), 8, b""))


def test_insertion_point_must_lie_in_removal():
    with pytest.raises(ValueError):
        Edit(Span(2, 4), 5, b"")


def test_same_file_cannot_be_staged_twice(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    patcher.stage_file(ExternalFileSpec(tmp_path / "a.component.html", "one"))
    with pytest.raises(PatchConflictError):
        patcher.stage_file(ExternalFileSpec(tmp_path / "a.component.html", "two"))


def test_commit_writes_source_and_files(tmp_path, emitter):
    source = tmp_path / "a.component.ts"
    source.write_bytes(ORIGINAL)
    patcher = Patcher(source, ORIGINAL, emitter)
    patcher.stage(Edit(Span(0, 10), 0, b"patched"))
    patcher.stage_file(ExternalFileSpec(tmp_path / "a.component.html", "<p>hi</p>"))

    result = patcher.commit()

    assert source.read_bytes() == b"patched"
    assert (tmp_path / "a.component.html").read_text(encoding="utf-8") == "<p>hi</p>"
    assert result.created == [tmp_path / "a.component.html"]
    assert result.existing == []
    assert [p.name for p in tmp_path.iterdir() if p.name.endswith(".tmp")] == []


def test_commit_never_overwrites_existing_file(tmp_path, emitter):
    source = tmp_path / "a.component.ts"
    source.write_bytes(ORIGINAL)
    existing = tmp_path / "a.component.html"
    existing.write_text("keep me", encoding="utf-8")
    patcher = Patcher(source, ORIGINAL, emitter)
    patcher.stage(Edit(Span(0, 1), 0, b"X"))
    patcher.stage_file(ExternalFileSpec(existing, "<p>new</p>"))

    result = patcher.commit()

    assert existing.read_text(encoding="utf-8") == "keep me"
    assert result.existing == [existing]
    assert source.read_bytes() == b"X123456789"


def test_failed_source_write_rolls_back(tmp_path, emitter, monkeypatch):
    source = tmp_path / "a.component.ts"
    source.write_bytes(ORIGINAL)
    patcher = Patcher(source, ORIGINAL, emitter)
    patcher.stage(Edit(Span(0, 10), 0, b"patched"))
    patcher.stage_file(ExternalFileSpec(tmp_path / "a.component.html", "<p>hi</p>"))

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(patcher_mod.os, "replace", boom)

    with pytest.raises(OSError):
        patcher.commit()

    assert source.read_bytes() == ORIGINAL
    assert not (tmp_path / "a.component.html").exists()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.component.ts"]


def test_text_replaces_the_whole_removal_span(tmp_path, emitter):
    patcher = Patcher(tmp_path / "a.component.ts", ORIGINAL, emitter)
    patcher.stage(Edit(Span(2, 7), 6, b"[2345 kept]"))
    assert patcher.render() == b"01[2345 kept]789"
