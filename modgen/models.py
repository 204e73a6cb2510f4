"""Core data models shared across modgen components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Tuple

RESOURCE_TYPES: tuple[str, ...] = ("component", "service")

_WORD_SPLIT = re.compile(r"[\s_\-]+")


def pascal_case(value: str) -> str:
    """Return `value` in PascalCase (``my-module`` -> ``MyModule``)."""
    parts = [part for part in _WORD_SPLIT.split(value.strip()) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def camel_case(value: str) -> str:
    """Return `value` in camelCase (``my-module`` -> ``myModule``)."""
    pascal = pascal_case(value)
    if not pascal:
        return pascal
    return pascal[0].lower() + pascal[1:]


def parse_resource(resource: str) -> Tuple[str, str]:
    """Split a resource string such as ``"arm component"`` into (type, subtype)."""
    parts = resource.split()
    if len(parts) != 2:
        raise ValueError(
            f"Resource must look like '<subtype> <component|service>', got {resource!r}"
        )
    subtype, resource_type = parts[0].lower(), parts[1].lower()
    if resource_type not in RESOURCE_TYPES:
        raise ValueError(
            f"Unknown resource type {resource_type!r}; expected one of {', '.join(RESOURCE_TYPES)}"
        )
    return resource_type, subtype


@dataclass(frozen=True)
class ModuleDescriptor:
    """Immutable description of the module a stub file is generated for."""

    module_name: str
    namespace: str
    resource_type: str
    resource_subtype: str
    model_name: str
    sdk_version: str

    module_pascal: str = field(init=False)
    module_camel: str = field(init=False)
    module_lowercase: str = field(init=False)
    resource_subtype_pascal: str = field(init=False)
    model_pascal: str = field(init=False)
    model_camel: str = field(init=False)
    model_triple: str = field(init=False)
    api: str = field(init=False)

    def __post_init__(self) -> None:
        for name in ("module_name", "namespace", "resource_subtype", "model_name", "sdk_version"):
            if not getattr(self, name).strip():
                raise ValueError(f"{name} must not be empty")
        if self.resource_type not in RESOURCE_TYPES:
            raise ValueError(
                f"Unknown resource type {self.resource_type!r}; "
                f"expected one of {', '.join(RESOURCE_TYPES)}"
            )

        derived = {
            "module_pascal": pascal_case(self.module_name),
            "module_camel": camel_case(self.module_name),
            "module_lowercase": pascal_case(self.module_name).lower(),
            "resource_subtype_pascal": pascal_case(self.resource_subtype),
            "model_pascal": pascal_case(self.model_name),
            "model_camel": camel_case(self.model_name),
            "model_triple": f"{self.namespace}:{self.module_name}:{self.model_name}",
            "api": f"rdk:{self.resource_type}:{self.resource_subtype}",
        }
        for name, value in derived.items():
            object.__setattr__(self, name, value)

    @classmethod
    def from_resource(
        cls,
        *,
        module_name: str,
        namespace: str,
        resource: str,
        model_name: str,
        sdk_version: str,
    ) -> "ModuleDescriptor":
        resource_type, resource_subtype = parse_resource(resource)
        return cls(
            module_name=module_name,
            namespace=namespace,
            resource_type=resource_type,
            resource_subtype=resource_subtype,
            model_name=model_name,
            sdk_version=sdk_version,
        )

    @property
    def model_type(self) -> str:
        """Name of the generated receiver type, e.g. ``myModuleMyModel``."""
        return self.module_camel + self.model_pascal

    @property
    def obj_name(self) -> str:
        """Interface name the model registers as inside the subtype package."""
        if self.resource_type == "component":
            return self.resource_subtype_pascal
        return "Service"


@dataclass(frozen=True)
class Parameter:
    """Single ``name type`` pair of a method signature."""

    name: str
    type_text: str


@dataclass(frozen=True)
class MethodSignature:
    """Normalized exported method taken from the reference client."""

    name: str
    parameters: Tuple[Parameter, ...] = ()
    returns: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("MethodSignature name must not be empty")


@dataclass(frozen=True)
class RenderModel:
    """Values substituted into the module template."""

    module: ModuleDescriptor
    model_type: str
    obj_name: str
    imports: str
    functions: str


__all__ = [
    "MethodSignature",
    "ModuleDescriptor",
    "Parameter",
    "RESOURCE_TYPES",
    "RenderModel",
    "camel_case",
    "parse_resource",
    "pascal_case",
]
