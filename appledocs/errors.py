"""Error types raised by the Apple documentation client."""

from typing import Optional


class AppleDocsError(Exception):
    """Base class for documentation client failures."""
    pass


class UpstreamUnavailable(AppleDocsError):
    """The upstream API could not be reached (timeout or connection failure)."""

    def __init__(self, url: str, reason: str, detail: Optional[str] = None):
        self.url = url
        self.reason = reason
        self.detail = detail
        message = f"Upstream unavailable ({reason}) for {url}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class UpstreamError(AppleDocsError):
    """The upstream API answered with a non-success status."""

    def __init__(self, url: str, status: int, message: str = ""):
        self.url = url
        self.status = status
        self.message = message or f"HTTP {status}"
        super().__init__(f"Upstream error {status} for {url}: {self.message}")


class NotFound(UpstreamError):
    """The requested path does not resolve to a document."""

    def __init__(self, url: str, status: int = 404, message: str = "Document not found"):
        super().__init__(url, status, message)


class AmbiguousFrameworkRequest(AppleDocsError):
    """A framework name was requested as if it were a symbol path."""

    def __init__(self, requested_path: str, technology, canonical_path: str):
        self.requested_path = requested_path
        self.technology = technology
        self.canonical_path = canonical_path
        super().__init__(
            f"'{requested_path}' is the framework {technology.title}; "
            f"use '{canonical_path}' or a framework/symbol path"
        )
