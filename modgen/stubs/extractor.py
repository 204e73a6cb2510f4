"""Extraction of exported method signatures from a parsed reference client."""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Optional, Set

from ..logging import get_logger
from ..models import MethodSignature, Parameter
from ..parsing.go import FieldGroup, FunctionDecl, SyntaxTree
from .qualifier import qualify_return_type

# Lifecycle methods implemented by the module template itself, keyed by version.
EXCLUSION_SETS: dict[str, frozenset[str]] = {
    "1": frozenset({"Close"}),
    "2": frozenset({"Close", "Name", "Reconfigure"}),
}
DEFAULT_EXCLUSION_VERSION = "2"
EXCLUDED_METHODS: frozenset[str] = EXCLUSION_SETS[DEFAULT_EXCLUSION_VERSION]

_BLANK_IDENTIFIER = "_"


def exclusion_set(version: str = DEFAULT_EXCLUSION_VERSION, extra: Iterable[str] = ()) -> frozenset[str]:
    """Return the named exclusion set, extended with `extra` method names."""
    try:
        base = EXCLUSION_SETS[version]
    except KeyError:
        known = ", ".join(sorted(EXCLUSION_SETS))
        raise ValueError(f"Unknown exclusion set version {version!r}; known versions: {known}") from None
    return base | frozenset(extra)


class SignatureExtractor:
    """Turns function declarations into normalized, qualified method signatures."""

    def __init__(
        self,
        resource_subtype: str,
        resource_subtype_pascal: str,
        *,
        excluded: Optional[AbstractSet[str]] = None,
    ) -> None:
        self.resource_subtype = resource_subtype
        self.resource_subtype_pascal = resource_subtype_pascal
        self.excluded = frozenset(EXCLUDED_METHODS if excluded is None else excluded)
        self.logger = get_logger("stubs.extractor")

    def extract(self, tree: SyntaxTree) -> List[MethodSignature]:
        signatures: List[MethodSignature] = []
        seen: Set[str] = set()
        for decl in tree.functions:
            if not self.retains(decl.name):
                self.logger.debug("Skipping %s (line %d)", decl.name or "<anonymous>", decl.line)
                continue
            if decl.name in seen:
                self.logger.debug("Skipping duplicate %s (line %d)", decl.name, decl.line)
                continue
            seen.add(decl.name)
            signatures.append(self.signature_for(decl))
        self.logger.debug(
            "Retained %d of %d functions", len(signatures), len(tree.functions)
        )
        return signatures

    def retains(self, name: str) -> bool:
        """Return True when a function called `name` should be stubbed."""
        if not name or not name[0].isupper():
            return False
        return name not in self.excluded

    def signature_for(self, decl: FunctionDecl) -> MethodSignature:
        return MethodSignature(
            name=decl.name,
            parameters=tuple(_flatten_parameters(decl.parameters)),
            returns=tuple(
                qualify_return_type(type_text, self.resource_subtype, self.resource_subtype_pascal)
                for type_text in _flatten_results(decl.results)
            ),
        )


def _flatten_parameters(groups: Iterable[FieldGroup]) -> Iterable[Parameter]:
    for group in groups:
        if not group.names:
            yield Parameter(name=_BLANK_IDENTIFIER, type_text=group.type_text)
            continue
        for name in group.names:
            yield Parameter(name=name, type_text=group.type_text)


def _flatten_results(groups: Iterable[FieldGroup]) -> Iterable[str]:
    for group in groups:
        for _ in group.names or (None,):
            yield group.type_text


__all__ = [
    "DEFAULT_EXCLUSION_VERSION",
    "EXCLUDED_METHODS",
    "EXCLUSION_SETS",
    "SignatureExtractor",
    "exclusion_set",
]
