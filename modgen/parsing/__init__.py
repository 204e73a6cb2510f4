"""Source parsers producing declaration trees."""

from .go import FieldGroup, FunctionDecl, GoSourceParser, ImportSpec, SyntaxTree

__all__ = ["FieldGroup", "FunctionDecl", "GoSourceParser", "ImportSpec", "SyntaxTree"]
