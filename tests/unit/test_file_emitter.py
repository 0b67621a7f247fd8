from pathlib import Path

import pytest

from i2f.codemod.domain.source_unit import ExternalFileSpec
from i2f.codemod.file_emitter import ExternalFileEmitter
from i2f.config.config import MigrationSettings


@pytest.fixture
def emitter():
    return ExternalFileEmitter(MigrationSettings())


def test_base_name_strips_source_suffix(emitter):
    assert emitter.base_name(Path("app/ideas.component.ts")) == "ideas.component"
    assert emitter.base_name(Path("app/c.ts")) == "c"
    assert emitter.base_name(Path("app/odd.tsx")) == "odd"


def test_template_target(emitter):
    spec = emitter.plan_template(Path("src/app/x.component.ts"), "<p>hi</p>")
    assert spec == ExternalFileSpec(Path("src/app/x.component.html"), "<p>hi</p>")


def test_style_targets_keep_list_order(emitter):
    specs = emitter.plan_styles(Path("src/c.component.ts"), ["a{}", "b{}", "c{}"])
    assert [s.path.name for s in specs] == ["c.component.scss", "c.component-2.scss", "c.component-3.scss"]
    assert [s.content for s in specs] == ["a{}", "b{}", "c{}"]


def test_configured_extensions():
    emitter = ExternalFileEmitter(MigrationSettings(template_extension=".htm", style_extension=".css"))
    assert emitter.plan_template(Path("x.component.ts"), "").path.name == "x.component.htm"
    assert emitter.plan_styles(Path("x.component.ts"), ["a"])[0].path.name == "x.component.css"


def test_render_references(emitter):
    specs = emitter.plan_styles(Path("c.ts"), ["a{}", "b{}"])
    assert emitter.render_reference("styleUrls", specs, as_list=True) == "styleUrls: ['./c.scss', './c-2.scss']"
    template = emitter.plan_template(Path("x.component.ts"), "")
    assert emitter.render_reference("templateUrl", [template], as_list=False) == "templateUrl: './x.component.html'"


def test_render_reference_with_double_quotes():
    emitter = ExternalFileEmitter(MigrationSettings(quote='"'))
    spec = emitter.plan_template(Path("x.component.ts"), "")
    assert emitter.render_reference("templateUrl", [spec], as_list=False) == 'templateUrl: "./x.component.html"'


def test_quote_in_file_name_is_escaped(emitter):
    spec = ExternalFileSpec(Path("it's.component.html"), "")
    assert emitter.render_reference("templateUrl", [spec], as_list=False) == "templateUrl: './it\\'s.component.html'"


def test_write_creates_once(tmp_path, emitter):
    spec = ExternalFileSpec(tmp_path / "x.component.html", "<p>\r\nhi</p>")
    assert emitter.write(spec) is True
    assert (tmp_path / "x.component.html").read_bytes() == "<p>\r\nhi</p>".encode("utf-8")
    assert emitter.write(ExternalFileSpec(spec.path, "other")) is False
    assert (tmp_path / "x.component.html").read_bytes() == "<p>\r\nhi</p>".encode("utf-8")
