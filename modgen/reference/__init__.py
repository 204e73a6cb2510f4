"""Retrieval of reference client sources from the SDK repository."""

from .fetcher import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ReferenceFetcher

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "ReferenceFetcher"]
