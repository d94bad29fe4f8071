from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .scanner import ProviderRecord


class TagCheckError(Exception):
    prefix: ClassVar[str] = ""

    def describe(self) -> str:
        if self.prefix:
            return f"{self.prefix}: {self}"
        return str(self)


class ConfigurationError(TagCheckError):
    pass


class ResolutionError(TagCheckError):
    prefix = "Could not determine namespace"


class RetrievalError(TagCheckError):
    prefix = "Could not read file from branch"


class ComplianceError(TagCheckError):
    def __init__(
        self,
        violations: list[str],
        providers: tuple[ProviderRecord, ...] = (),
    ) -> None:
        self.violations = list(violations)
        self.providers = providers
        super().__init__("\n".join(self.violations))
