# src/kubeshell/cli/formatter.py
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from kubeshell.core.models import Row


class StatusHighlighter(RegexHighlighter):
    """Colours well-known object states wherever they appear in a cell."""
    base_style = "kube."
    highlights = [
        r"(?P<good>\b(Running|Succeeded|Ready|Active|Bound)\b)",
        r"(?P<good>Deployment has minimum availability\.)",
        r"(?P<warn>\b(Pending|Unknown|Terminating|Not Ready)\b)",
        r"(?P<bad>\b(Failed|CrashLoopBackOff|Error)\b)",
    ]


KUBE_THEME = Theme({
    "kube.good": "green",
    "kube.warn": "yellow",
    "kube.bad": "bold red",
})


class KubeFormatter:
    """
    KubeFormatter: the text sink of every projection.
    Renders list grids and describe reports; projections never print directly.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.console.push_theme(KUBE_THEME)
        self.highlighter = StatusHighlighter()

    def _text(self, value: str) -> Text:
        # Text() keeps '[' in resource data from being parsed as markup
        text = Text(value)
        self.highlighter.highlight(text)
        return text

    def print_table(self, titles: Sequence[str], rows: List[Row]):
        """Prints a numbered list grid. Absent cells print blank."""
        table = Table(show_header=True, header_style="bold magenta", box=None, pad_edge=False)
        for title in titles:
            table.add_column(title, no_wrap=title == titles[0])

        for row in rows:
            cells = [Text(str(row.index), style="dim")]
            cells.extend(self._text(cell.render()) for cell in row.cells)
            table.add_row(*cells)

        self.console.print(table)

    def print_report(self, report: List[Tuple[str, str]]):
        """Prints a describe report as a two column title/value grid."""
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold cyan", no_wrap=True)
        grid.add_column()
        for title, value in report:
            grid.add_row(title, self._text(value.rstrip("\n")))
        self.console.print(grid)

    def warn(self, message: str):
        self.console.print(Text(message, style="bold yellow"))

    def error(self, message: str):
        self.console.print(Text.assemble(("Error: ", "bold red"), message))
