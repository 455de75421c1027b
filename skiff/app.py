"""
Skiff application: the command registry and the dispatch state machine.

Dispatch (App.run)
1. drop the program path (argv[0]);
2. nothing left, or "help" → application help;
3. "version" → "<name> <version>";
4. anything else is a selector: unknown → CommandNotFoundError (with close-match
   suggestions in its hint), known → command.execute(Context(rest)).

Only one level of commands exists; selectors are matched exactly
(case-sensitive, no abbreviations).

App.main() is the host-facing entry point: it runs the dispatch, reports any
skiff fault through the diagnostic sink and turns the outcome into an exit code.
"""
import difflib
import shlex
import sys
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .commands import Command
from .context import Context
from .diagnostics import ConsoleDiagnostics
from .faults import CommandException, CommandNotFoundError
from .internals import RecordType
from .utils import Unset, coalesce, styling


class App(metaclass=RecordType):
    """
    Registry of commands plus the identity shown by help and version.

    Parameters
    - name: program name (help header, usage routes, diagnostics prefix).
    - descr: one-line description (defaults to None, omitted from help).
    - version: version string (defaults to "1.0").
    - colorful, fancy: runtime rendering flags inherited by every command.
    - console: rich Console used for help/version output (stdout by default).
    - diagnostics: sink receiving warnings and reported errors
      (defaults to ConsoleDiagnostics(name) on stderr).
    """
    __introspectable__ = (
        "name",
        "descr",
        "version",
        "commands",
        "colorful",
        "fancy",
        "console",
        "diagnostics",
    )

    __displayable__ = (
        "name",
        "descr",
        "version",
        "commands",
        "colorful",
        "fancy",
    )

    __palette__ = {
        # ==== Header ====
        "program-name": "bold #FF4D94",  # Magenta-pink brand pop
        "program-version": "bold #00E6FF",  # Cyan version (clear contrast)
        "usage-label": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "description-section": "italic #A3A3A3",

        # ==== Commands table ====
        "children-title": "bold #FFFFFF",
        "children-table": "#4B5563",  # Slate border
        "children": "bold #36C5F0",  # Sky-blue commands
        "children-description": "#9CA3AF",

        # ==== Footer / panel ====
        "epilog-section": "#737373",
        "panel-title": "bold #FF4D94",
    }

    def __init__(
            self,
            name,
            descr=Unset,
            version=Unset,
            /,
            *,
            colorful=Unset,
            fancy=Unset,
            console=Unset,
            diagnostics=Unset
    ):
        for field, value in (("name", name), ("descr", descr), ("version", version)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"{type(self).__typename__} {field!r} must be a string")
            elif isinstance(value, str) and not value.strip():
                raise ValueError(f"{type(self).__typename__} {field!r} cannot be empty")
        if name is Unset:
            raise TypeError(f"{type(self).__typename__} 'name' is required")

        self._name = name.strip()
        self._descr = descr.strip() if descr is not Unset else None
        self._version = coalesce(version, "1.0").strip()
        self._commands = {}
        self._colorful = bool(coalesce(colorful, False))
        self._fancy = bool(coalesce(fancy, False))
        self._console = console if console is not Unset else Console()
        self._diagnostics = diagnostics if diagnostics is not Unset else ConsoleDiagnostics(
            self._name, colorful=self._colorful, fancy=self._fancy
        )

    def command(self, name, descr=Unset, /):
        """
        Register a command, or fetch it when the name is already taken.

        The returned Command is the single instance for that name: a second
        call with the same name returns it unchanged (its descr argument is
        ignored), so options added through either reference are shared.

        Raises
        - TypeError: when name or descr is not a string.
        - ValueError: when name is empty, contains whitespace, or is one of the
          reserved selectors "help" and "version" (dispatch consumes them before
          any lookup, so such a command could never run).
        """
        if isinstance(name, str) and (command := self._commands.get(name.strip())):
            return command
        command = Command(name, descr, app=self)
        return self._commands.setdefault(command.name, command)

    def run(self, argv=Unset, /):
        """
        Dispatch a process argument vector.

        Parameters
        - argv:
          • Unset: read sys.argv.
          • str: a full command line (program name first), split via shlex.split.
          • Iterable[str]: the argument vector, program path at index 0.

        Raises
        - CommandNotFoundError: the selector matches no registered command.
        - anything raised by Command.execute (unchanged).
        """
        tokens = _tokens(argv)[1:]

        if not tokens or tokens[0] == "help":
            self.helper()
            return

        if tokens[0] == "version":
            self.versioner()
            return

        selector, *rest = tokens
        try:
            command = self._commands[selector]
        except KeyError:
            suggestions = difflib.get_close_matches(selector, self._commands.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s help' to see all commands" % (suggestions[0], self._name)
            except IndexError:
                hint = "run '%s help' to see all available commands" % self._name
            raise CommandNotFoundError(selector, suggestions=suggestions, hint=hint) from None

        command.execute(Context(rest, diagnostics=self._diagnostics))

    def main(self, argv=Unset, /):
        """
        Host entry point: run() and map the outcome to a process exit code.

        Returns
        - 0 on success.
        - 1 when a skiff fault (CommandException) escaped; the fault is handed
          to the diagnostic sink's error() first.

        Other exceptions raised by handlers propagate unchanged.
        """
        try:
            self.run(argv)
        except CommandException as fault:
            self._diagnostics.error(fault)
            return 1
        return 0

    def helper(self):
        """
        Render application help: identity, usage, and every registered command
        with its description (registration order).
        """
        console = self._console
        styler, text = styling(self._colorful, type(self).__palette__)

        renders = []
        width = console.width - 4 * self._fancy

        renders.append(Text(" — ").join((
            text(self._name, styler("program-name")),
            text(self._version, styler("program-version")),
        )))

        if self._descr:
            renders.append(text(self._descr, styler("description-section")))

        usage = Text()
        usage.append("usage", styler("usage-label")).append(":")
        usage.append(" ")
        usage.append(text(self._name, styler("program-name"))).append(" ")
        usage.append(text("<command> [--<option> <value>]...", styler("metavar")))
        renders.append(usage.append("\n"))

        if self._commands:
            table = Table(
                "name", "help",
                title=text("commands", styler("children-title")),
                width=int(width * (2 / 3)),
                box=ROUNDED,
                style=styler("children-table"),
                header_style=styler("children-title"),
            )
            for name, command in self._commands.items():
                table.add_row(
                    text(name, styler("children")),
                    text(command.descr, styler("children-description")),
                )
            renders.append(table)
        else:
            renders.append(text("no commands registered", styler("epilog-section")))

        renders.append(text(
            "run '%s <command> --help' for the options of a command" % self._name, styler("epilog-section")
        ))

        renderable = Group(*renders)

        if self._fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self._name} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        self._console.print(renderable)

    def versioner(self):
        """
        Render "<name> <version>".
        """
        styler, text = styling(self._colorful, type(self).__palette__)
        self._console.print(Text(" ").join((
            text(self._name, styler("program-name")),
            text(self._version, styler("program-version")),
        )))


def _tokens(argv):
    """
    Normalize the accepted argv shapes into a list of strings.

    Raises
    - TypeError: when argv is not Unset/str/Iterable[str].
    """
    if argv is Unset:
        return list(sys.argv)
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("run() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("run() argument must be a string or an iterable of strings")


__all__ = (
    "App",
)
