"""Runner protocol and typed function declarations for a script host.

Each runner exposes a named group of documented functions. A host binds them
as ``<runner>.<function>``; helper functions are bound at top level. Argument
types are checked here before a function body runs, so a wrong call is a
usage error rather than an assertion failure.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from numbers import Number
from typing import Any, Callable, List, Protocol, Tuple, Union

from tester.logic.failure_factory import failure_usage
from tester.models.failure import CheckFailure


class ScriptError(Exception):
    """Aborts the running test script with a descriptive failure."""

    def __init__(self, failure: CheckFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self):
        return self.failure.kind


class ArgumentType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    TABLE = "table"


class StringEnum(tuple):
    """A string argument restricted to a fixed set of literals."""

    def __new__(cls, values: Sequence[str]) -> "StringEnum":
        return super().__new__(cls, tuple(values))

    def __repr__(self) -> str:
        return "StringEnum" + super().__repr__()


ArgType = Union[ArgumentType, StringEnum]


@dataclass(frozen=True)
class Argument:
    name: str
    types: Tuple[ArgType, ...]
    doc: str = ""

    @property
    def optional(self) -> bool:
        return self.name.endswith("?")

    @property
    def display_name(self) -> str:
        return self.name.rstrip("?")


@dataclass(frozen=True)
class Function:
    name: str
    args: Tuple[Argument, ...]
    doc: str
    func: Callable[..., Any] = field(compare=False, repr=False)


class Runner(Protocol):
    def name(self) -> str:
        ...

    def functions(self) -> List[Function]:
        ...

    def helper_functions(self) -> List[Function]:
        ...


def _accepts(arg_type: ArgType, value: Any) -> bool:
    if isinstance(arg_type, StringEnum):
        return isinstance(value, str) and value in arg_type
    if arg_type is ArgumentType.STRING:
        return isinstance(value, str)
    if arg_type is ArgumentType.NUMBER:
        return isinstance(value, Number) and not isinstance(value, bool)
    if arg_type is ArgumentType.TABLE:
        return isinstance(value, Mapping) or (
            isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
        )
    return False


def _type_name(arg_type: ArgType) -> str:
    if isinstance(arg_type, StringEnum):
        return "one of " + "|".join(arg_type)
    return arg_type.value


def check_arguments(qualified_name: str, function: Function, args: Sequence[Any]) -> None:
    """Raise ``ScriptError`` unless ``args`` fit the declared arguments."""
    required = [a for a in function.args if not a.optional]
    if len(args) < len(required) or len(args) > len(function.args):
        raise ScriptError(
            failure_usage(
                f"{qualified_name}: expected {len(required)}"
                + (f"-{len(function.args)}" if len(function.args) != len(required) else "")
                + f" arguments, got {len(args)}"
            )
        )
    for position, (declared, value) in enumerate(zip(function.args, args), start=1):
        if declared.optional and value is None:
            continue
        if not any(_accepts(t, value) for t in declared.types):
            expected = " or ".join(_type_name(t) for t in declared.types)
            raise ScriptError(
                failure_usage(
                    f"{qualified_name}: bad argument #{position} ({declared.display_name}): "
                    f"{expected} expected, got {type(value).__name__}"
                )
            )


__all__ = [
    "ScriptError",
    "ArgumentType",
    "StringEnum",
    "Argument",
    "Function",
    "Runner",
    "check_arguments",
]
