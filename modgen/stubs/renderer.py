"""Jinja2 rendering of the generated Go module file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Set

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound
from jinja2 import TemplateError as JinjaTemplateError

from ..errors import TemplateError
from ..models import ModuleDescriptor, RenderModel
from ..parsing.go import ImportSpec

MODULE_TEMPLATE = "module.go.j2"
SDK_MODULE_PATH = "go.viam.com/rdk"
_DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


def template_imports(module: ModuleDescriptor) -> List[str]:
    """Import paths the module template declares on its own."""
    return [
        "context",
        "errors",
        reference_package_path(module),
        f"{SDK_MODULE_PATH}/logging",
        f"{SDK_MODULE_PATH}/resource",
    ]


def reference_package_path(module: ModuleDescriptor) -> str:
    return f"{SDK_MODULE_PATH}/{module.resource_type}s/{module.resource_subtype}"


def build_import_block(imports: Iterable[ImportSpec], module: ModuleDescriptor) -> str:
    """Render reference imports for the template, minus those it already provides.

    The reference package's own path and anything colliding with a template
    import (same path or same package name) are dropped.
    """
    provided_paths = set(template_imports(module))
    provided_names = {_package_name(path) for path in provided_paths}

    lines: List[str] = []
    seen: Set[str] = set()
    for spec in imports:
        if spec.path in provided_paths or spec.path in seen:
            continue
        if spec.name not in {"_", "."} and _effective_name(spec) in provided_names:
            continue
        seen.add(spec.path)
        lines.append(f"\t{spec.render()}")
    return "\n".join(lines)


def build_render_model(module: ModuleDescriptor, imports: str, functions: str) -> RenderModel:
    return RenderModel(
        module=module,
        model_type=module.model_type,
        obj_name=module.obj_name,
        imports=imports,
        functions=functions,
    )


class TemplateRenderer:
    """Fills the module template with descriptor fields, imports and stubs."""

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        self.templates_dir = templates_dir
        if templates_dir is None:
            self._env = default_environment()
        else:
            self._env = _create_env(templates_dir)

    def render(self, model: RenderModel) -> bytes:
        try:
            template = self._env.get_template(MODULE_TEMPLATE)
            rendered = template.render(
                module=model.module,
                model_type=model.model_type,
                obj_name=model.obj_name,
                imports=model.imports,
                functions=model.functions,
            )
        except TemplateNotFound as exc:
            raise TemplateError(f"module template not found: {exc.name}") from exc
        except JinjaTemplateError as exc:
            raise TemplateError(f"failed to render module template: {exc}") from exc
        return rendered.encode("utf-8")


@lru_cache(maxsize=1)
def default_environment() -> Environment:
    """Process-wide environment over the packaged templates; never mutated after creation."""
    return _create_env(None)


def _create_env(templates_dir: Optional[Path]) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(_DEFAULT_TEMPLATES_DIR))
    loader = FileSystemLoader(directories)
    return Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def _package_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def _effective_name(spec: ImportSpec) -> str:
    return spec.name or _package_name(spec.path)


__all__ = [
    "MODULE_TEMPLATE",
    "TemplateRenderer",
    "build_import_block",
    "build_render_model",
    "default_environment",
    "reference_package_path",
    "template_imports",
]
