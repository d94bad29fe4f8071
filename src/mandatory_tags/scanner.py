from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .blocks import extract_block, find_provider_starts
from .constants import ALIAS_RE, DEFAULT_TAGS_RE, REQUIRED_TAGS
from .errors import ComplianceError
from .tags import extract_tags, find_missing_tags

DEFAULT_PROVIDER_NAME = "aws (default)"
NO_PROVIDERS_MESSAGE = "❌ No AWS providers found in the file"


@dataclass(frozen=True)
class ScanConfig:
    required_tags: tuple[str, ...] = REQUIRED_TAGS


@dataclass(frozen=True)
class ProviderRecord:
    name: str
    tags: tuple[str, ...]
    missing: tuple[str, ...] = ()
    has_default_tags: bool = True

    @property
    def compliant(self) -> bool:
        return self.has_default_tags and not self.missing

    def violation(self) -> str | None:
        if not self.has_default_tags:
            return f"❌ Provider '{self.name}' does not have default_tags block with all required tags"
        if self.missing:
            return f"❌ Provider '{self.name}' is missing tags: [{' '.join(self.missing)}]"
        return None


@dataclass(frozen=True)
class ScanResult:
    providers: tuple[ProviderRecord, ...]
    missing: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(p.compliant for p in self.providers)

    def violations(self) -> list[str]:
        return [v for v in (p.violation() for p in self.providers) if v]


def provider_name(block: str) -> str:
    match = ALIAS_RE.search(block)
    if match:
        return f"aws (alias: {match.group(1)})"
    return DEFAULT_PROVIDER_NAME


def scan_provider_block(block: str, config: ScanConfig) -> ProviderRecord:
    name = provider_name(block)
    tags_match = DEFAULT_TAGS_RE.search(block)

    if not tags_match:
        logging.debug(f"Provider '{name}' has no default_tags block")
        return ProviderRecord(name=name, tags=(), missing=config.required_tags, has_default_tags=False)

    tags = extract_tags(tags_match.group(1))
    missing = find_missing_tags(tags, config.required_tags)
    logging.debug(f"Provider '{name}' declares tags {tags}, missing {missing}")
    return ProviderRecord(name=name, tags=tuple(tags), missing=tuple(missing))


def scan_providers(content: str, config: ScanConfig | None = None) -> ScanResult:
    """Scan every ``provider "aws"`` block in ``content``, in file order.

    Raises ComplianceError when the file declares no AWS provider at all.
    """
    config = config or ScanConfig()
    starts = find_provider_starts(content)
    if not starts:
        raise ComplianceError([NO_PROVIDERS_MESSAGE])

    providers: list[ProviderRecord] = []
    missing: dict[str, tuple[str, ...]] = {}
    for start in starts:
        record = scan_provider_block(extract_block(content[start:]), config)
        providers.append(record)
        if not record.compliant:
            # Unaliased providers share a name; the first one in the file is kept.
            missing.setdefault(record.name, record.missing)

    offending = sum(1 for p in providers if not p.compliant)
    logging.info(f"Found {len(providers)} AWS provider(s), {offending} with missing tags")
    return ScanResult(providers=tuple(providers), missing=missing)


def check_all_aws_providers(content: str, config: ScanConfig | None = None) -> list[ProviderRecord]:
    result = scan_providers(content, config)
    if not result.ok:
        raise ComplianceError(result.violations(), result.providers)
    return list(result.providers)
