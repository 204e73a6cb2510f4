"""Pipeline that turns a module descriptor into a rendered Go stub file."""

from __future__ import annotations

from typing import Optional

from .config import ModgenConfig, default_config
from .logging import get_logger
from .models import ModuleDescriptor
from .parsing.go import GoSourceParser
from .reference.fetcher import ReferenceFetcher
from .stubs.extractor import SignatureExtractor
from .stubs.formatter import StubFormatter, StubPolicy
from .stubs.renderer import TemplateRenderer, build_import_block, build_render_model


class StubGenerator:
    """Coordinates fetch, parse, extraction, formatting and rendering.

    Each call owns its fetched source, syntax tree and render model, so one
    generator can serve concurrent calls for different descriptors.
    """

    def __init__(
        self,
        config: ModgenConfig | None = None,
        *,
        fetcher: ReferenceFetcher | None = None,
        parser: GoSourceParser | None = None,
        formatter: StubFormatter | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or default_config()
        self.fetcher = fetcher or ReferenceFetcher(
            self.config.reference.base_url, timeout=self.config.reference.timeout
        )
        self.parser = parser or GoSourceParser()
        self.formatter = formatter or StubFormatter(self.config.stubs.policy)
        self.renderer = renderer or TemplateRenderer(self.config.templates_dir)
        self.logger = get_logger("generator")

    def generate(
        self, module: ModuleDescriptor, *, formatter: StubFormatter | None = None
    ) -> bytes:
        """Fetch the reference client for `module` and return the rendered stub file.

        `formatter` overrides the configured one for this call only.
        """
        source = self.fetcher.fetch_for(module)
        return self.generate_from_source(module, source, formatter=formatter)

    def generate_from_source(
        self,
        module: ModuleDescriptor,
        source: str,
        *,
        formatter: StubFormatter | None = None,
    ) -> bytes:
        """Render the stub file from already retrieved reference source."""
        tree = self.parser.parse(source)

        extractor = SignatureExtractor(
            module.resource_subtype,
            module.resource_subtype_pascal,
            excluded=self.config.stubs.excluded_methods(),
        )
        signatures = extractor.extract(tree)
        functions = (formatter or self.formatter).format_all(signatures, module.model_type)
        imports = build_import_block(tree.imports, module)

        output = self.renderer.render(build_render_model(module, imports, functions))
        self.logger.info(
            "Generated %d stubs for %s %s (%s)",
            len(signatures),
            module.resource_subtype,
            module.resource_type,
            module.model_triple,
        )
        return output


def generate_stubs(
    module: ModuleDescriptor,
    *,
    config: ModgenConfig | None = None,
    policy: Optional[StubPolicy] = None,
) -> bytes:
    """Generate the Go stub file for `module`; raises on any stage failure."""
    formatter = StubFormatter(policy) if policy is not None else None
    return StubGenerator(config, formatter=formatter).generate(module)


__all__ = ["StubGenerator", "generate_stubs"]
