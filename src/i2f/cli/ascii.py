# /from i2f/cli/ascii.py
# Startup banner for the i2f CLI.

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console()


def show_banner(target: Console = None):
    ascii_art = """
   _  ___   __
  (_)|_  ) / _|   inline  template: `...`   styles: [`...`]
  | | / / |  _|      │
  |_|/___||_|        ▼
                  templateUrl: './x.html'   styleUrls: ['./x.scss']
    """
    (target or console).print(Panel(Text(ascii_art), style="bold cyan", title="[bright_blue]Inline-to-File[/]",
                                    border_style="bright_blue"))
