from __future__ import annotations

import re

BASE_PATH = "namespaces/live.cloud-platform.service.justice.gov.uk"
RESOURCE_FILE = ("resources", "main.tf")
DEFAULT_BASE_REF = "main"

REQUIRED_TAGS: tuple[str, ...] = (
    "business-unit",
    "application",
    "is-production",
    "owner",
    "namespace",
    "service-area",
    "source-code",
    "slack-channel",
)

PROVIDER_RE = re.compile(r'provider\s+"aws"')
ALIAS_RE = re.compile(r'alias\s*=\s*"([^"]+)"')
# Tag maps are flat, so the first closing brace ends the map.
DEFAULT_TAGS_RE = re.compile(r"default_tags\s*\{\s*tags\s*=\s*\{([^}]+)\}", re.DOTALL)
TAG_KEY_RE = re.compile(r'^\s*"?([a-zA-Z][a-zA-Z0-9_-]*)"?\s*=', re.MULTILINE)

__all__ = [
    "ALIAS_RE",
    "BASE_PATH",
    "DEFAULT_BASE_REF",
    "DEFAULT_TAGS_RE",
    "PROVIDER_RE",
    "REQUIRED_TAGS",
    "RESOURCE_FILE",
    "TAG_KEY_RE",
]
