"""Qualification of return types relocated out of the reference package."""

from __future__ import annotations


def qualify_return_type(type_text: str, resource_subtype: str, resource_subtype_pascal: str) -> str:
    """Prefix types exported by the reference package with the subtype package name.

    ``Properties`` becomes ``arm.Properties``, ``*Properties`` becomes
    ``*arm.Properties`` and ``[]Properties`` becomes ``[]arm.Properties``.
    Builtins and already qualified names are returned unchanged.
    """
    if not type_text:
        return type_text

    is_pointer = type_text.startswith("*")
    text = type_text[1:] if is_pointer else type_text
    if not text:
        return type_text

    if text[0].isupper():
        text = f"{resource_subtype}.{text}"
    elif text.startswith("[]") and len(text) > 2 and text[2].isupper():
        text = f"[]{resource_subtype}.{text[2:]}"
    elif text == resource_subtype_pascal:
        text = f"{resource_subtype}.{resource_subtype_pascal}"

    if is_pointer:
        text = f"*{text}"
    return text


__all__ = ["qualify_return_type"]
