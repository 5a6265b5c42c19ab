"""
Value Object: Source

Источник, приложенный автором к статье: ссылка или текст из PDF.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError


class SourceKind(str, Enum):
    """Вид источника."""

    URL = "url"
    PDF = "pdf"


@dataclass(frozen=True)
class Source:
    """
    Источник статьи.

    value - URL для ссылок или извлечённый текст для PDF.
    status/reason заполняются проверкой ссылки (valid / invalid / broken).
    """

    type: SourceKind
    value: str
    name: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.type, str) and not isinstance(self.type, SourceKind):
            try:
                object.__setattr__(self, 'type', SourceKind(self.type))
            except ValueError:
                raise DomainValidationError(f"Unsupported source type: {self.type}")
        if not self.value or not self.value.strip():
            raise DomainValidationError("Source value cannot be empty")

    @property
    def is_url(self) -> bool:
        return self.type is SourceKind.URL

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "value": self.value}
        if self.name:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Source":
        return cls(
            type=data.get("type", SourceKind.URL.value),
            value=data.get("value", ""),
            name=data.get("name"),
            status=data.get("status"),
            reason=data.get("reason"),
        )
