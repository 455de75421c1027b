"""
Skiff command layer: declare options, attach a handler, execute.

What this module provides
- Command: a named record owning its option descriptors and one handler.
  • option(name, descr) declares an option (idempotent by name) and returns
    the command, so declarations chain fluently.
  • run(handler) attaches the handler (last one wins) and returns the command.
  • execute(context) intercepts "--help" and otherwise calls the handler.
  • helper() renders the command help (rich, color-aware).

Quick start
    from skiff import App

    app = App("calc", "tiny calculator", "1.2")
    app.command("sum", "add two numbers") \\
        .option("a", "first addend") \\
        .option("b", "second addend") \\
        .run(lambda context: print(context.integer("a") + context.integer("b")))

    app.run(["calc", "sum", "--a", "2", "--b", "3"])

Design notes
- Commands never catch handler failures; faults raised by the accessors and
  any other exception travel unchanged to App.run() and its caller.
- Rendering options (colorful/fancy/console) are inherited from the owning
  App; a detached command renders plain text on a default console.
"""
import re

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .faults import CommandHasNoHandlerError
from .internals import RecordType
from .options import Option
from .utils import Unset, coalesce, styling

# selectors the App consumes before any lookup; commands cannot take them
RESERVED = frozenset({"help", "version"})


class Command(metaclass=RecordType):
    """
    A named command: options metadata plus a single handler.

    Lifecycle
    - Created (usually through App.command) without a handler.
    - Options and handler are attached during the registration phase.
    - Executed 0..n times; options and handler must not change during dispatch.

    Notes
    - options is exposed as a copy (name -> Option, registration order) to
      discourage accidental mutation; use option() to declare new ones.
    """
    __introspectable__ = (
        "name",
        "descr",
        "options",
        "handler",
        "app",
    )

    __displayable__ = (
        "name",
        "descr",
        "options",
    )

    __palette__ = {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "command-name": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "metavar": "bold #FFD600",  # AMBER for parameters
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Options ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for options
        "argument-description": "#9CA3AF",  # Muted gray
        "placeholder": "#737373",  # Dim gray for missing descriptions

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    }

    def __init__(self, name, descr=Unset, /, *, app=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")
        elif re.search(r"\s", name):
            raise ValueError(f"{type(self).__typename__} 'name' cannot contain whitespace")
        elif name in RESERVED:
            raise ValueError(f"{type(self).__typename__} 'name' {name!r} is reserved")

        if not isinstance(descr, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{type(self).__typename__} 'descr' cannot be empty")

        self._name = name
        self._descr = coalesce(descr, "no description")
        self._options = {}
        self._handler = None
        self._app = coalesce(app)

    @property
    def colorful(self):
        return getattr(self._app, "colorful", False)

    @property
    def fancy(self):
        return getattr(self._app, "fancy", False)

    @property
    def console(self):
        console = getattr(self._app, "console", None)
        return console if console is not None else Console()

    @property
    def route(self):
        """the words a user types to reach this command (app name + command name)."""
        return " ".join(filter(None, (getattr(self._app, "name", None), self._name)))

    def option(self, name, descr=Unset, /):
        """
        Declare an option and return this command.

        Re-declaring a name already present keeps the first descriptor; only one
        descriptor per name ever exists.
        """
        option = Option(name, descr)
        self._options.setdefault(option.name, option)
        return self

    def run(self, handler, /):
        """
        Attach the handler called with the Context on execution, and return
        this command. Attaching again replaces the previous handler.
        """
        if not callable(handler):
            raise TypeError(f"{type(self).__typename__} handler must be callable")
        self._handler = handler
        return self

    def execute(self, context, /):
        """
        Run this command against an invocation context.

        Behavior
        - context has "help" → render help, handler not invoked.
        - no handler attached → CommandHasNoHandlerError.
        - otherwise call handler(context); failures propagate unchanged.
        """
        if context.has("help"):
            self.helper()
            return
        if self._handler is None:
            raise CommandHasNoHandlerError(self._name, hint="attach one with %s.run(handler)" % self._name)
        self._handler(context)

    def helper(self):
        """
        Render command help to the console.

        Palette keys
        - usage-label, program-name, command-name, metavar, description-section
        - group-label, option-name, argument-description, placeholder
        - panel-title

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        console = self.console
        styler, text = styling(self.colorful, type(self).__palette__)

        renders = []
        width = console.width - 4 * self.fancy  # Account for panel gutters when fancy=True

        # Usage line: "<app> <command> [--<option> <value>]..."
        usage = Text()
        usage.append("usage", styler("usage-label")).append(":")
        usage.append(" ")
        if app := getattr(self._app, "name", None):
            usage.append(text(app, styler("program-name"))).append(" ")
        usage.append(text(self._name, styler("command-name")))
        for option in self._options.values():
            usage.append(" ").append(Text.assemble(
                "[", text(option.token, styler("option-name")), " ", text("<value>", styler("metavar")), "]"
            ))
        renders.append(usage.append("\n"))

        renders.append(text(self._descr, styler("description-section")).append("\n"))

        # Options section with aligned descriptions and hanging indents
        section = Text()
        section.append(text("options", styler("group-label"))).append(":")
        section.append("\n")

        padding = 2
        indent = max((len(option.token) for option in self._options.values()), default=0) + padding * 2
        indent = min(indent, max(width // 2, padding * 2))

        for option in self._options.values():
            line = Text(" " * padding).append(text(option.token, styler("option-name")))
            if option.descr:
                descr = text(option.descr, styler("argument-description"))
            else:
                descr = text("-", styler("placeholder"))

            if len(line) >= indent:
                line.append("\n").append(" " * indent)
            else:
                line.append(" " * (indent - len(line)))
            wrapped = descr.wrap(console, max(width - indent, 1))
            try:
                line.append(wrapped.pop(0))
            except IndexError:
                pass
            for segment in wrapped:
                line.append("\n").append(" " * indent).append(segment)
            section.append(line).append("\n")

        if not self._options:
            section.append(" " * padding).append(text("no options", styler("placeholder"))).append("\n")

        renders.append(section)
        renders[-1].rstrip()

        renderable = Group(*renders)

        if self.fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{self.route} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        console.print(renderable)


__all__ = (
    "Command",
)
