"""Console rendering of analysis results using rich."""

from __future__ import annotations

import traceback
from typing import IO

from rich.console import Console
from rich.text import Text

from invocation_analyzer.core import DataByProvider, Datum

TITLE = "Invocation Analyzer"
DATA_HEADER = "Data from analysis:"
ERROR = "An error occurred while trying to analyze your profile."

# Styles
STYLE_TITLE = "bold underline"
STYLE_HEADING = "bold"
STYLE_PROVIDER = "white on blue"
STYLE_DATUM = "green"
STYLE_DESCRIPTION = "dim"
STYLE_EMPTY = "yellow"
STYLE_ERROR = "red"


class ConsoleOutput:
    """Writes the analyzer's output to the terminal.

    With ``plaintext`` set, no styling or color codes are emitted.
    """

    def __init__(
        self,
        *,
        plaintext: bool = False,
        verbose: bool = False,
        file: IO[str] | None = None,
        err_file: IO[str] | None = None,
    ) -> None:
        self.plaintext = plaintext
        self.verbose = verbose
        self._console = self._make_console(file=file, stderr=False)
        self._err_console = self._make_console(file=err_file, stderr=True)

    def _make_console(self, *, file: IO[str] | None, stderr: bool) -> Console:
        return Console(
            file=file,
            stderr=stderr,
            no_color=self.plaintext,
            color_system=None if self.plaintext else "auto",
            highlight=False,
            soft_wrap=True,
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def output_header(self, version: str | None = None) -> None:
        title = TITLE if version is None else f"{TITLE} {version}"
        self._console.print()
        self._console.print(Text(title, style=STYLE_TITLE))
        self._console.print()

    def output_note(self, note: str) -> None:
        self._console.print(Text("Note:", style=STYLE_HEADING))
        self._console.print(Text(note))
        self._console.print()

    def output_analysis_input(self, description: str) -> None:
        self._console.print(Text(f"Analyzing {description}"))

    def output_analysis_data(self, data_by_provider: DataByProvider) -> None:
        self._console.print()
        self._console.print(Text(DATA_HEADER, style=STYLE_HEADING))
        self._console.print(self.format_analysis_data(data_by_provider))

    def output_error(self, error: BaseException) -> None:
        self._err_console.print(Text(ERROR, style=STYLE_ERROR))
        self._err_console.print(Text(str(error)))
        if self.verbose:
            self._err_console.print(
                Text("".join(traceback.format_exception(type(error), error, error.__traceback__)))
            )

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_analysis_data(self, data_by_provider: DataByProvider) -> Text:
        """Render data sorted by name, grouped by provider in verbose mode."""
        result = Text()
        if self.verbose:
            for provider in sorted(data_by_provider):
                entries = self._format_data(data_by_provider[provider])
                if entries.plain.strip():
                    result.append("\n")
                    result.append(provider, style=STYLE_PROVIDER)
                    result.append("\n")
                    result.append_text(entries)
        else:
            merged: dict[type[Datum], Datum] = {}
            for data in data_by_provider.values():
                merged.update(data)
            result.append_text(self._format_data(merged))
        return result

    def _format_data(self, data: dict[type[Datum], Datum]) -> Text:
        text = Text()
        for datum_type in sorted(data, key=lambda t: t.__name__):
            text.append_text(self._format_datum(datum_type, data[datum_type]))
        return text

    def _format_datum(self, datum_type: type[Datum], datum: Datum) -> Text:
        text = Text()
        if datum.is_empty:
            body = datum.empty_reason or ""
            style = STYLE_EMPTY
        else:
            body = datum.summary or ""
            style = ""
        if not body.strip():
            return text
        text.append(datum_type.__name__, style=STYLE_DATUM)
        text.append(": ")
        text.append(datum.description, style=STYLE_DESCRIPTION)
        text.append("\n")
        text.append(body, style=style)
        text.append("\n")
        return text
