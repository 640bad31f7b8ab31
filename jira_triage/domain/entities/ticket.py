"""Ticket entity — a feature request or bug report received from Jira."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ticket:
    key: str
    title: str | None = None
    description: str | None = None
    reporter: str | None = None
    created: str | None = None
    priority: str | None = None
    components: tuple[str, ...] = ()
    labels: tuple[str, ...] = ()
    status: str | None = None

    def searchable_text(self) -> str:
        """Lower-cased title + description, used by the keyword policies."""
        return f"{self.title or ''} {self.description or ''}".lower()

    def lowered_components(self) -> list[str]:
        return [c.lower() for c in self.components if c]

    def lowered_labels(self) -> list[str]:
        return [label.lower() for label in self.labels if label]
