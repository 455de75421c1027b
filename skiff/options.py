"""
Skiff option descriptors.

An Option is static metadata about a named option a command understands: its
name (the part after the "--" marker) and a short description used by help.
It never carries a runtime value; values live in the per-invocation Context.

Validation (on construction)
- name: non-empty string, trimmed, must not repeat the "--" marker.
- descr: Unset | non-empty string; Unset becomes None (help shows a placeholder).
"""
from .internals import RecordType
from .utils import Unset, coalesce


class Option(metaclass=RecordType):
    """
    Immutable descriptor of a declared option.

    Instances are created by Command.option() and owned by that command.
    """
    __introspectable__ = (
        "name",
        "descr",
    )

    __slots__ = ("_name", "_descr")

    def __init__(self, name, descr=Unset, /):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")
        elif name.startswith("--"):
            raise ValueError(f"{type(self).__typename__} 'name' must not include the '--' marker")

        if not isinstance(descr, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{type(self).__typename__} 'descr' cannot be empty")

        self._name = name
        self._descr = coalesce(descr)

    @property
    def token(self):
        """the literal token that selects this option on the command line."""
        return "--" + self._name

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._name, self._descr) == (other._name, other._descr)

    def __hash__(self):
        return hash((self._name, self._descr))


__all__ = (
    "Option",
)
