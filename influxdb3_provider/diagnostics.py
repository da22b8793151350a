"""
Diagnostics reported back to the provider host.

Provider operations do not raise for API or validation failures; they collect
Diagnostic entries so every problem found in one pass reaches the user.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from common.exception.exceptions import UnexpectedStatusError


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    severity: Severity
    summary: str
    detail: str
    attribute: Optional[str] = None


@dataclass
class Diagnostics:
    items: List[Diagnostic] = field(default_factory=list)

    def add_error(self, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail))

    def add_attribute_error(self, attribute: str, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail, attribute))

    def add_warning(self, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.WARNING, summary, detail))

    def extend(self, other: "Diagnostics") -> None:
        self.items.extend(other.items)

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.items)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.severity == Severity.ERROR]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def format_error_response(error: Exception) -> str:
    """Render an API error for a diagnostic detail.

    Status errors carrying a decoded error body are shown with status, error
    code and message; anything else falls back to the exception text.
    """
    if isinstance(error, UnexpectedStatusError) and error.error_message is not None:
        lines = [f"HTTP Status Code: {error.status_code}\n"]
        if error.error_code is not None:
            lines.append(f"Error Code: {error.error_code}\n")
        lines.append(f"Error Message: {error.error_message}\n")
        return "".join(lines)
    return str(error)
