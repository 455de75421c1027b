"""
internal plumbing shared by the record-like types of skiff (option, command, app).

RecordType is the metaclass behind them:
- derives a human-friendly __typename__ from the class name (camel-case split
  with hyphens, lowercased), used in messages and representations;
- exposes every name listed in __introspectable__ as a read-only property
  mirroring the private backing field "_<name>" (see utils.mirror);
- provides stable __repr__/__rich_repr__ built from __displayable__ (or
  __introspectable__ when unset).
"""
import functools
import operator
import re

from .utils import Unset, coalesce, mirror, rename


class RecordType(type):
    """
    metaclass for introspectable records.

    conventions
    - __introspectable__: names published as read-only properties.
    - __displayable__: names shown by __repr__/__rich_repr__ (defaults to
      __introspectable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(name='sum', descr='add two numbers', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    "RecordType",
)
