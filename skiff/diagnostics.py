"""
Skiff diagnostic sink.

The sink is the single place where leveled, human-readable text leaves the
library: warnings from the default-providing accessors and errors reported by
App.main(). It is injected (App -> Context) instead of living as a global
stream, so hosts and tests can swap it for their own collector.

Contract
- error(message) / warning(message): message is a string, or a fault whose
  str() is its message. No return value.

ConsoleDiagnostics renders through a rich console on stderr:
- plain strings as "<prog>: <level>: <message>" lines;
- faults (CommandException) through their own __rich__ renderer, so titles,
  codes and hints show up the same way everywhere.
"""
import copy

from rich.console import Console
from rich.text import Text

from .faults import CommandException
from .utils import Unset, coalesce, styling


class ConsoleDiagnostics:
    """
    Default diagnostic sink writing to a rich stderr console.

    Parameters
    - prog: label printed in front of every line (defaults to "skiff").
    - console: rich Console to print on (defaults to a stderr console).
    - colorful: colorize the level prefix (palette keys "error", "warning",
      "prog-name"; overridable via __main__.__styles__).
    - fancy: render faults inside a panel.
    """
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "error": "bold red",
        "warning": "bold yellow",
    }

    def __init__(self, prog=Unset, /, *, console=Unset, colorful=True, fancy=False):
        self.prog = coalesce(prog, "skiff")
        self.console = coalesce(console, Console(stderr=True))
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

    def error(self, message, /):
        self._emit("error", message)

    def warning(self, message, /):
        self._emit("warning", message)

    def _emit(self, level, message):
        if isinstance(message, CommandException):
            self.console.print(copy.replace(
                message,
                level=level,
                prog=self.prog,
                colorful=self.colorful,
                fancy=self.fancy
            ))
            return

        styler, text = styling(self.colorful, type(self).__palette__)
        self.console.print(Text.assemble(
            text(self.prog, styler("prog-name")),
            ": ",
            text(level, styler(level)),
            ": ",
            str(message)
        ))

    def __repr__(self):
        return f"console-diagnostics(prog={self.prog!r}, colorful={self.colorful!r}, fancy={self.fancy!r})"


__all__ = (
    "ConsoleDiagnostics",
)
