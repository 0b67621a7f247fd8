# /from i2f/cli/controller.py
# Canvas Controller: prints diagnostics coming out of a migration run.

from rich.console import Console
from rich.text import Text

from i2f.codemod.diagnostics import Diagnostic, Severity


class Canvas:
    def __init__(self, console: Console = None, verbose: bool = False):
        self.console = console or Console(highlight=False)
        self.verbose = verbose
        self.prefix_debug = "[dim][DEBUG]:[/]"
        self.prefix_info = "[cyan][INFO]:[/]"
        self.prefix_step = "[bright_blue][STEP]:[/]"
        self.prefix_success = "[green][SUCCESS]:[/]"
        self.prefix_warning = "[yellow][WARNING]:[/]"
        self.prefix_error = "[red][ERROR]:[/]"
        self.prefix_fatal = "[bold red][FATAL]:[/]"

    def start_process(self, title: str):
        self.console.print(f"\n🚀 {title} Start\n")

    def end_process(self, message: str):
        self.console.print(f"\n🏁 {message}\n")

    def _print(self, prefix: str, message: str):
        # messages carry file paths and CSS, never rich markup
        line = Text.from_markup(prefix)
        line.append(" ")
        line.append(message)
        self.console.print(line, soft_wrap=True)

    def step(self, message: str):
        self._print(self.prefix_step, message)

    def debug(self, message: str):
        if self.verbose:
            self._print(self.prefix_debug, message)

    def info(self, message: str):
        self._print(self.prefix_info, message)

    def success(self, message: str):
        self._print(self.prefix_success, message)

    def warning(self, message: str):
        self._print(self.prefix_warning, message)

    def error(self, message: str):
        self._print(self.prefix_error, message)

    def fatal(self, message: str):
        self._print(self.prefix_fatal, message)

    def emit(self, diagnostic: Diagnostic):
        """Diagnostics sink used by the migrator."""
        route = {
            Severity.DEBUG: self.debug,
            Severity.INFO: self.info,
            Severity.WARN: self.warning,
            Severity.ERROR: self.error,
            Severity.FATAL: self.fatal,
        }[diagnostic.severity]
        route(str(diagnostic))
