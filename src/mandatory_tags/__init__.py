from __future__ import annotations

from .blocks import extract_block
from .constants import REQUIRED_TAGS
from .errors import ComplianceError, ConfigurationError, ResolutionError, RetrievalError, TagCheckError
from .scanner import ProviderRecord, ScanConfig, ScanResult, check_all_aws_providers, scan_providers
from .source import GitSourceResolver, SourceResolver
from .tags import extract_tags, find_missing_tags
from .version import __version__

__all__ = [
    "REQUIRED_TAGS",
    "ComplianceError",
    "ConfigurationError",
    "GitSourceResolver",
    "ProviderRecord",
    "ResolutionError",
    "RetrievalError",
    "ScanConfig",
    "ScanResult",
    "SourceResolver",
    "TagCheckError",
    "__version__",
    "check_all_aws_providers",
    "check_content",
    "extract_block",
    "extract_tags",
    "find_missing_tags",
    "scan_providers",
]


def check_content(content: str, *, required_tags: tuple[str, ...] | list[str] = REQUIRED_TAGS) -> list[ProviderRecord]:
    return check_all_aws_providers(content, ScanConfig(required_tags=tuple(required_tags)))
