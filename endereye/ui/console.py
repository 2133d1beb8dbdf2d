"""Terminal input and output surfaces using rich."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from endereye.config import EndereyeConfig
from endereye.geometry.solver import CalculationError, TriangulationResult
from endereye.ui.form import (
    FIELD_NAMES,
    RawInputs,
    ValidationError,
    error_message,
    format_result,
    message,
    parse_fields,
)

_PROMPTS = {
    "x1": "First throw X",
    "z1": "First throw Z",
    "angle1": "First throw angle",
    "x2": "Second throw X",
    "z2": "Second throw Z",
    "angle2": "Second throw angle",
}


class ArgumentInputSource:
    """Six values given on the command line, in FIELD_NAMES order."""

    def __init__(self, values: Sequence[str]) -> None:
        self._values = list(values)

    def read_fields(self) -> RawInputs:
        if len(self._values) != len(FIELD_NAMES):
            raise ValidationError(list(FIELD_NAMES[len(self._values):]) or list(FIELD_NAMES))
        return parse_fields(dict(zip(FIELD_NAMES, self._values)))


class PromptInputSource:
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def read_fields(self) -> RawInputs:
        values = {
            name: Prompt.ask(_PROMPTS[name], console=self._console, default="", show_default=False)
            for name in FIELD_NAMES
        }
        return parse_fields(values)


class ConsoleOutputSink:
    def __init__(self, console: Console | None = None, config: EndereyeConfig | None = None) -> None:
        self._console = console or Console()
        self._config = config or EndereyeConfig()

    def show_result(self, result: TriangulationResult) -> None:
        coordinates, distance = format_result(result, self._config)
        body = Text()
        body.append(coordinates, "bold green")
        body.append("\n")
        body.append(distance, "green")
        self._console.print(Panel(body, title="stronghold", title_align="left"))

    def show_error(self, error: CalculationError) -> None:
        self._console.print(Text(error_message(error.kind, self._config.language), "bold red"))

    def clear(self) -> None:
        self._console.print(Text(message("placeholder", self._config.language), "dim"))
