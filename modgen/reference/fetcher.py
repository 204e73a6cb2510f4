"""Fetches the canonical ``client.go`` for a resource at a given SDK release."""

from __future__ import annotations

from http.client import HTTPException
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import FetchError
from ..logging import get_logger
from ..models import ModuleDescriptor

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/viamrobotics/rdk"
DEFAULT_TIMEOUT = 30.0


class ReferenceFetcher:
    """Downloads reference client source text over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = get_logger("reference")

    def reference_url(self, version: str, resource_type: str, resource_subtype: str) -> str:
        """Return the raw URL of the client source for the given release."""
        tag = version if version.startswith("v") else f"v{version}"
        return f"{self.base_url}/refs/tags/{tag}/{resource_type}s/{resource_subtype}/client.go"

    def fetch_for(self, module: ModuleDescriptor) -> str:
        return self.fetch(module.sdk_version, module.resource_type, module.resource_subtype)

    def fetch(self, version: str, resource_type: str, resource_subtype: str) -> str:
        """Retrieve the reference source; raises :class:`FetchError` on any failure."""
        url = self.reference_url(version, resource_type, resource_subtype)
        self.logger.debug("Fetching reference client from %s", url)

        request = Request(url, headers={"Accept": "text/plain"}, method="GET")
        try:
            with urlopen(request, timeout=self.timeout) as response:  # type: ignore[arg-type]
                status = getattr(response, "status", 200)
                if status != 200:
                    raise FetchError(
                        f"unexpected http GET status: {status} getting {url}",
                        url=url,
                        status=status,
                    )
                raw = response.read()
        except HTTPError as exc:
            raise FetchError(
                f"unexpected http GET status: {exc.code} {exc.reason} getting {url}",
                url=url,
                status=exc.code,
            ) from exc
        except URLError as exc:
            raise FetchError(f"cannot get client code from {url}: {exc.reason}", url=url) from exc
        except (HTTPException, OSError) as exc:
            # Covers timeouts, resets and truncated bodies (IncompleteRead).
            raise FetchError(f"error reading response body from {url}: {exc}", url=url) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(f"response body from {url} is not valid UTF-8", url=url) from exc

        self.logger.debug("Received %d bytes of reference source", len(raw))
        return text


__all__ = ["DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "ReferenceFetcher"]
