"""Stub synthesis: signature extraction, type qualification, formatting and rendering."""

from .extractor import EXCLUDED_METHODS, EXCLUSION_SETS, SignatureExtractor, exclusion_set
from .formatter import StubFormatter, StubPolicy
from .qualifier import qualify_return_type
from .renderer import TemplateRenderer, build_import_block, build_render_model

__all__ = [
    "EXCLUDED_METHODS",
    "EXCLUSION_SETS",
    "SignatureExtractor",
    "StubFormatter",
    "StubPolicy",
    "TemplateRenderer",
    "build_import_block",
    "build_render_model",
    "exclusion_set",
    "qualify_return_type",
]
