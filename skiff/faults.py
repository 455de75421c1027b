"""
Skiff faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- CommandException: base type carrying a message + options that knows how to
  render itself (rich) in a friendly, lowercased and actionable way.
- Concrete faults for the dispatch (routing) and option-resolution domains.

Integration
- Dispatch and accessors raise these faults; they propagate to the host.
- App.main() catches them and hands them to the diagnostic sink, which renders
  them via rich (see skiff.diagnostics).
"""
import copy
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, styling


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - routing (2110x)
      • COMMAND_NOT_FOUND, COMMAND_HAS_NO_HANDLER
    - options (2111x)
      • MISSING_REQUIRED_OPTION, BAD_OPTION_TYPE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- routing errors (2110x) ---
    COMMAND_NOT_FOUND       = 21101
    COMMAND_HAS_NO_HANDLER  = 21102

    # --- option errors (2111x) ---
    MISSING_REQUIRED_OPTION = 21111
    BAD_OPTION_TYPE         = 21112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base fault: a message plus read-only rendering options.

    common options
    - title: short lowercased title shown in the header.
    - code: FaultCode of the fault.
    - hint: one actionable sentence.
    - prog, level, colorful, fancy: filled by the reporter right before rendering.
    """
    __palette__ = {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "error-title": "bold #FF4DA6",  # friendly pinky title
        "warning-title": "bold #FFC2E0",  # softer pinky title for warnings
        "message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        styler, text = styling(self.options.get("colorful", False), type(self).__palette__)

        level = self.options.get("level", "error")
        prog = text(getattr(__import__("__main__"), "__prog__", self.options.get("prog", "skiff")), styler("prog-name"))
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize() if "code" in self.options else level, styler("code")),
            " | ",
            text(self.options.get("title", level).title(), styler(level + "-title")),
            " ]"
        )
        message = text(self.message, styler("message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replica = copy.copy(self)
        replica.options = MappingProxyType({**self.options, **overrides})
        return replica


class CommandNotFoundError(CommandException):
    """the selector token does not match any registered command."""

    def __init__(self, name, /, **options):
        super().__init__("command %r not found" % name, **{
            "title": "unknown command",
            "code": FaultCode.COMMAND_NOT_FOUND,
            "hint": "run 'help' to see the available commands",
        } | options)
        self.name = name


class CommandHasNoHandlerError(CommandException):
    """a matched command was never given a handler."""

    def __init__(self, name, /, **options):
        super().__init__("command %r has no handler" % name, **{
            "title": "command without handler",
            "code": FaultCode.COMMAND_HAS_NO_HANDLER,
            "hint": "attach one with .run(handler) before dispatching",
        } | options)
        self.name = name


class MissingRequiredOptionError(CommandException):
    """a non-boolean option was requested without a default and is absent."""

    def __init__(self, name, /, **options):
        super().__init__("missing required option %r" % name, **{
            "title": "missing option",
            "code": FaultCode.MISSING_REQUIRED_OPTION,
            "hint": "pass it as '--%s <value>'" % name,
        } | options)
        self.name = name


class BadOptionTypeError(CommandException):
    """a present raw value could not be converted to the requested kind."""

    def __init__(self, name, expected, /, **options):
        super().__init__("option %r cannot be converted to %s" % (name, expected), **{
            "title": "bad option type",
            "code": FaultCode.BAD_OPTION_TYPE,
            "hint": "pass a valid %s after '--%s'" % (expected, name),
        } | options)
        self.name = name
        self.expected = expected


__all__ = (
    "FaultCode",
    "CommandException",
    "CommandNotFoundError",
    "CommandHasNoHandlerError",
    "MissingRequiredOptionError",
    "BadOptionTypeError",
)
