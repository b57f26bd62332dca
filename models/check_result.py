"""
Check Result model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List


@dataclass(frozen=True)
class ReleaseEvent:
    """A newly observed release, handed to the notification dispatcher."""

    identifier: str
    tag: str


@dataclass
class CheckResult:
    """Represents the result of checking one repository during a cycle."""

    identifier: str
    previous_tag: str = ""
    current_tag: Optional[str] = None
    changed: bool = False
    error: Optional[str] = None
    skipped: bool = False
    notification_errors: List[str] = field(default_factory=list)
    check_time: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        status = "NEW RELEASE" if self.changed else "NO CHANGE"
        if self.skipped:
            status = "SKIPPED"
        if self.error:
            status = f"ERROR: {self.error}"

        failures = ""
        if self.notification_errors:
            failures = f"\n  Notification failures: {len(self.notification_errors)}"

        return (
            f"[{status}] {self.identifier}\n"
            f"  Current:  {self.current_tag or '-'}\n"
            f"  Previous: {self.previous_tag or '-'}"
            f"{failures}"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'identifier': self.identifier,
            'previous_tag': self.previous_tag,
            'current_tag': self.current_tag,
            'changed': self.changed,
            'error': self.error,
            'skipped': self.skipped,
            'notification_errors': list(self.notification_errors),
            'check_time': self.check_time.isoformat() if self.check_time else None,
        }

    @property
    def status(self) -> str:
        """Get status string."""
        if self.error:
            return 'error'
        if self.skipped:
            return 'skipped'
        return 'updated' if self.changed else 'unchanged'
