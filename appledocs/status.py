"""Beta/deprecation classification of documentation metadata."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_DEPRECATION_MESSAGE = "This API is deprecated"


class APIStatus(str, Enum):
    DEPRECATED = "deprecated"
    BETA_ALL = "beta_all"
    BETA_SOME = "beta_some"
    NONE = "none"


@dataclass(frozen=True)
class StatusIndicator:
    status: APIStatus
    message: Optional[str] = None


def classify_status(metadata) -> StatusIndicator:
    """Classify a document's availability from its platform list.

    Deprecation on any platform wins over beta flags and carries the message
    of the first deprecated platform. Otherwise all-beta and some-beta are
    distinguished.
    """
    platforms = metadata.platforms if metadata is not None else []

    deprecated = [p for p in platforms if p.is_deprecated]
    if deprecated:
        return StatusIndicator(APIStatus.DEPRECATED, deprecated[0].message or DEFAULT_DEPRECATION_MESSAGE)

    beta_count = sum(1 for p in platforms if p.beta)
    if platforms and beta_count == len(platforms):
        return StatusIndicator(APIStatus.BETA_ALL)
    if beta_count:
        return StatusIndicator(APIStatus.BETA_SOME)
    return StatusIndicator(APIStatus.NONE)
