"""Go module stub generation for Viam SDK resources."""

from .errors import FetchError, ParseError, StubGenerationError, TemplateError
from .generator import StubGenerator, generate_stubs
from .models import MethodSignature, ModuleDescriptor, Parameter, RenderModel

__all__ = [
    "FetchError",
    "MethodSignature",
    "ModuleDescriptor",
    "Parameter",
    "ParseError",
    "RenderModel",
    "StubGenerationError",
    "StubGenerator",
    "TemplateError",
    "generate_stubs",
]
