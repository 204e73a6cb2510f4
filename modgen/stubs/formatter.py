"""Rendering of method signatures into Go stub functions."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence

from ..models import MethodSignature

_NUMERIC_TYPES = {
    "byte",
    "complex64",
    "complex128",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
}


class StubPolicy(str, Enum):
    """What a generated stub body does when called."""

    PANIC = "panic"
    ZERO_VALUES = "zero_values"


class StubFormatter:
    """Formats one signature as a method on the generated model type."""

    def __init__(self, policy: StubPolicy = StubPolicy.PANIC) -> None:
        self.policy = StubPolicy(policy)

    def format(self, signature: MethodSignature, receiver: str) -> str:
        args = ", ".join(f"{param.name} {param.type_text}" for param in signature.parameters)
        header = (
            f"func (s *{receiver}) {signature.name}({args}) "
            f"{_format_returns(signature.returns)}{{"
        )
        body = self._body(signature.returns)
        return f"{header}\n{body}}}\n\n"

    def format_all(self, signatures: Sequence[MethodSignature], receiver: str) -> str:
        return "".join(self.format(signature, receiver) for signature in signatures)

    def _body(self, returns: Sequence[str]) -> str:
        if self.policy is StubPolicy.PANIC:
            return '\tpanic("not implemented")\n'
        if not returns:
            return ""
        values = ", ".join(zero_value(type_text) for type_text in returns)
        return f"\treturn {values}\n"


def zero_value(type_text: str) -> str:
    """Placeholder return value for `type_text` under the zero-value policy."""
    if type_text == "error":
        return "errUnimplemented"
    if type_text == "bool":
        return "false"
    if type_text == "string":
        return '""'
    if type_text in _NUMERIC_TYPES:
        return "0"
    return "nil"


def _format_returns(returns: Sequence[str]) -> str:
    items: List[str] = list(returns)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"({','.join(items)})"


__all__ = ["StubFormatter", "StubPolicy", "zero_value"]
