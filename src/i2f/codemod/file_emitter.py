# src/i2f/codemod/file_emitter.py
from pathlib import Path
from typing import List, Sequence

from i2f.codemod.domain.source_unit import ExternalFileSpec


class ExternalFileEmitter:
    """
    Names, references and writes the files that inline literals move to.

    Files are written next to the component they come from. An existing file
    is never overwritten and never compared; the entry is rewritten to point
    at it anyway so that re-running over a partly migrated tree converges.
    """

    def __init__(self, settings):
        self.settings = settings

    def base_name(self, unit_path: Path) -> str:
        name = unit_path.name
        suffix = self.settings.source_suffix
        if suffix and name.endswith(suffix) and len(name) > len(suffix):
            return name[:-len(suffix)]
        return unit_path.stem

    def plan_template(self, unit_path: Path, content: str) -> ExternalFileSpec:
        target = unit_path.parent / f"{self.base_name(unit_path)}{self.settings.template_extension}"
        return ExternalFileSpec(target, content)

    def plan_styles(self, unit_path: Path, contents: Sequence[str]) -> List[ExternalFileSpec]:
        base = self.base_name(unit_path)
        extension = self.settings.style_extension
        specs = []
        for index, content in enumerate(contents):
            name = f"{base}{extension}" if index == 0 else f"{base}-{index + 1}{extension}"
            specs.append(ExternalFileSpec(unit_path.parent / name, content))
        return specs

    def reference(self, spec: ExternalFileSpec) -> str:
        return f"./{spec.path.name}"

    def _quoted(self, text: str) -> str:
        quote = self.settings.quote
        escaped = text.replace("\\", "\\\\").replace(quote, "\\" + quote)
        return quote + escaped + quote

    def render_reference(self, key: str, specs: Sequence[ExternalFileSpec], as_list: bool) -> str:
        """``templateUrl: './x.html'`` or ``styleUrls: ['./x.scss', ...]``."""
        refs = [self._quoted(self.reference(spec)) for spec in specs]
        if as_list:
            return f"{key}: [{', '.join(refs)}]"
        return f"{key}: {refs[0]}"

    def write(self, spec: ExternalFileSpec) -> bool:
        """Create the file; False when it already exists (left untouched)."""
        try:
            with open(spec.path, "x", encoding="utf-8", newline="") as f:
                f.write(spec.content)
        except FileExistsError:
            return False
        return True
