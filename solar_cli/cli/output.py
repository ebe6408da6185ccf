"""
Operator facing output with three visual registers: informational lines,
results and errors.
"""

import json
from typing import Any, Optional

from rich.console import Console
from rich.json import JSON

INFO_STYLE = "green"
RESULT_STYLE = "black on green"
ERROR_STYLE = "bold white on red"


class OutputFormatter:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def _print(self, message: Any, style: str) -> None:
        # User supplied text (messages, memos, relay errors) is printed as is
        self.console.print(
            str(message), style=style, markup=False, emoji=False, soft_wrap=True
        )

    def info(self, message: Any) -> None:
        self._print(message, INFO_STYLE)

    def result(self, message: Any) -> None:
        self._print(message, RESULT_STYLE)

    def error(self, message: Any) -> None:
        self._print(message, ERROR_STYLE)

    def result_json(self, data: Any) -> None:
        self.console.print(JSON(json.dumps(data, default=str), indent=4), soft_wrap=True)
