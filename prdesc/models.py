"""Data model for a single run: file changes, diff stats, the final summary."""

from dataclasses import dataclass, field
from enum import Enum

from prdesc import STATUS_LABELS


class ChangeStatus(str, Enum):
    """Change type from the first letter of a name-status line."""
    ADDED = 'A'
    MODIFIED = 'M'
    DELETED = 'D'
    RENAMED = 'R'
    COPIED = 'C'

    @property
    def label(self) -> str:
        return STATUS_LABELS[self.value]

    @classmethod
    def from_letter(cls, letter: str) -> 'ChangeStatus':
        """Map a git status letter; type changes, unmerged etc. count as Modified."""
        try:
            return cls(letter[:1].upper())
        except ValueError:
            return cls.MODIFIED


class Category(str, Enum):
    SOURCE = 'Source'
    TESTS = 'Tests'
    CONFIGURATION = 'Configuration'
    CI_CD = 'CI/CD'
    DOCUMENTATION = 'Documentation'
    STYLES = 'Styles'
    OTHER = 'Other'


@dataclass(frozen=True)
class FileChange:
    """One changed file as reported by git diff --name-status."""
    status: ChangeStatus
    path: str
    category: Category

    @property
    def is_deleted(self) -> bool:
        return self.status is ChangeStatus.DELETED

    def to_dict(self) -> dict:
        return {
            'status': self.status.label,
            'path': self.path,
            'category': self.category.value,
        }


@dataclass(frozen=True)
class DiffStats:
    """Aggregate counts from git diff --shortstat."""
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0

    def to_dict(self) -> dict:
        return {
            'additions': self.additions,
            'deletions': self.deletions,
            'filesChanged': self.files_changed,
        }


@dataclass(frozen=True)
class ChangeSummary:
    """Everything rendered for one invocation."""
    title: str
    prose: str
    files: tuple[FileChange, ...] = ()
    stats: DiffStats = field(default_factory=DiffStats)
    breaking_changes: tuple[str, ...] = ()
    suggested_reviewers: tuple[str, ...] = ()
    template: str = 'default'

    @property
    def additions(self) -> int:
        return self.stats.additions

    @property
    def deletions(self) -> int:
        return self.stats.deletions

    @property
    def files_changed(self) -> int:
        return self.stats.files_changed

    @property
    def is_empty(self) -> bool:
        return len(self.files) == 0

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'summary': self.prose,
            'files': [f.to_dict() for f in self.files],
            'stats': self.stats.to_dict(),
            'breakingChanges': list(self.breaking_changes),
            'suggestedReviewers': list(self.suggested_reviewers),
            'template': self.template,
        }


def count_categories(files) -> dict[Category, int]:
    """Files per category, in first-seen order."""
    counts: dict[Category, int] = {}
    for f in files:
        counts[f.category] = counts.get(f.category, 0) + 1
    return counts
