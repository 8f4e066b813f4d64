"""Change Analyzer - Turn git diff/log text into a PR summary."""

import posixpath
import re
from dataclasses import dataclass

from prdesc import CATEGORY_COMMIT_TYPES, COMMIT_TYPE_NAMES
from prdesc.git.parser import parse_name_status, parse_shortstat, split_diff_by_file, title_from_branch
from prdesc.git.runner import GitRunner
from prdesc.models import Category, ChangeSummary, DiffStats, FileChange, count_categories

TEMPLATE_DEFAULT = "default"
TEMPLATE_CONVENTIONAL = "conventional"

# Clause per category, in the order they appear in the prose summary
SUMMARY_CLAUSES: list[tuple[Category, str]] = [
    (Category.SOURCE, "updates {} source file(s)"),
    (Category.TESTS, "modifies {} test file(s)"),
    (Category.CONFIGURATION, "changes {} config file(s)"),
    (Category.DOCUMENTATION, "updates {} doc(s)"),
    (Category.CI_CD, "touches {} CI/CD file(s)"),
    (Category.STYLES, "modifies {} style file(s)"),
]

MISC_SUMMARY = "This PR contains miscellaneous changes."

MANIFEST_FILES = {'package.json', 'pyproject.toml', 'setup.cfg', 'cargo.toml', 'composer.json'}

_BREAKING_MARKER_RE = re.compile(r'BREAKING[\s-]CHANGE', re.IGNORECASE)
_BANG_PREFIX_RE = re.compile(r'^[a-f0-9]+\s+\w+(\([^)]*\))?!:')
_VERSION_REMOVED_RE = re.compile(r'^-\s*"?version"?\s*[:=]')


@dataclass
class AnalyzerConfig:
    """Tunable limits for the heuristics."""
    max_reviewers: int = 3
    reviewer_history_depth: int = 5
    breaking_log_depth: int = 20
    max_removed_exports: int = 5
    suggest_reviewers: bool = True


class ChangeAnalyzer:
    """Derives categories, prose, breaking changes and reviewers from git text."""

    TEST_MARKERS = ('test', 'spec')
    DOC_MARKERS = ('readme', 'changelog', 'docs')
    CONFIG_NAMES = ('package.json', 'tsconfig.json')
    CI_DIRS = ('.github/', '.circleci/', '.gitlab/')
    CI_EXTENSIONS = ('yml', 'yaml')
    STYLE_EXTENSIONS = ('css', 'scss', 'sass', 'less')
    SOURCE_EXTENSIONS = ('ts', 'tsx', 'js', 'jsx')

    def __init__(self, git: GitRunner, config: AnalyzerConfig | None = None):
        self.git = git
        self.config = config or AnalyzerConfig()

    def categorize(self, path: str) -> Category:
        name = posixpath.basename(path).lower()
        ext = name.rsplit('.', 1)[-1]

        if any(m in name for m in self.TEST_MARKERS) or '__tests__' in path:
            return Category.TESTS
        if any(m in name for m in self.DOC_MARKERS):
            return Category.DOCUMENTATION
        if name in self.CONFIG_NAMES or 'config' in name:
            return Category.CONFIGURATION
        if ext in self.CI_EXTENSIONS or any(d in path for d in self.CI_DIRS):
            return Category.CI_CD
        if ext in self.STYLE_EXTENSIONS:
            return Category.STYLES
        if ext in self.SOURCE_EXTENSIONS:
            return Category.SOURCE
        return Category.OTHER

    def parse_files(self, name_status: str) -> list[FileChange]:
        return [
            FileChange(status=status, path=path, category=self.categorize(path))
            for status, path in parse_name_status(name_status)
        ]

    def detect_breaking_changes(self, diff: str, files: list[FileChange]) -> list[str]:
        """Best-effort signals that this branch breaks a public contract."""
        breaking = []

        for line in self.git.recent_commits(self.config.breaking_log_depth):
            if _BREAKING_MARKER_RE.search(line) or _BANG_PREFIX_RE.match(line):
                breaking.append(f"Commit: {line.strip()}")

        removed_exports = [
            line for line in diff.split('\n')
            if line.startswith('-export ') and not line.startswith('---')
        ]
        for line in removed_exports[:self.config.max_removed_exports]:
            breaking.append(f"Removed export: {line[1:].strip()}")

        for f in files:
            if f.is_deleted and ('index.' in f.path or 'api.' in f.path):
                breaking.append(f"Deleted API file: {f.path}")

        for path, section in split_diff_by_file(diff).items():
            if posixpath.basename(path).lower() not in MANIFEST_FILES:
                continue
            if any(_VERSION_REMOVED_RE.match(line) for line in section.split('\n')):
                breaking.append(f"Version field changed in {path}")

        return breaking

    def suggest_reviewers(self, files: list[FileChange]) -> list[str]:
        """Most frequent recent authors of the touched files, excluding the current user."""
        counts: dict[str, int] = {}
        for f in files:
            for author in self.git.file_authors(f.path, self.config.reviewer_history_depth):
                counts[author] = counts.get(author, 0) + 1

        current_user = self.git.current_user()
        counts.pop(current_user, None)

        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(counts.items(), key=lambda item: -item[1])
        return [name for name, _ in ranked[:self.config.max_reviewers]]

    def summarize(self, files: list[FileChange], stats: DiffStats) -> str:
        counts = count_categories(files)

        parts = [clause.format(counts[cat]) for cat, clause in SUMMARY_CLAUSES if counts.get(cat)]
        summary = f"This PR {', '.join(parts)}." if parts else MISC_SUMMARY
        return (
            f"{summary} Overall: +{stats.additions} / -{stats.deletions} "
            f"across {stats.files_changed} file(s)."
        )

    def conventional_title(self, branch: str, files: list[FileChange]) -> str:
        """'feat/add-login' -> 'feat: Add Login'; otherwise type from the dominant category."""
        head, sep, rest = branch.strip().partition('/')
        if sep and head.lower() in COMMIT_TYPE_NAMES:
            return f"{head.lower()}: {title_from_branch(rest)}"

        commit_type = CATEGORY_COMMIT_TYPES[self._dominant_category(files).value]
        return f"{commit_type}: {title_from_branch(branch)}"

    def _dominant_category(self, files: list[FileChange]) -> Category:
        counts = count_categories(files)
        if not counts:
            return Category.SOURCE
        order = list(Category)
        return max(counts, key=lambda cat: (counts[cat], -order.index(cat)))

    def build(self, name_status: str, shortstat: str, diff: str, branch: str,
              breaking: bool = False, template: str = TEMPLATE_DEFAULT) -> ChangeSummary:
        """Assemble the full summary from captured git output."""
        files = self.parse_files(name_status)
        stats = parse_shortstat(shortstat, default_files=len(files))

        if template == TEMPLATE_CONVENTIONAL:
            title = self.conventional_title(branch, files)
        else:
            title = title_from_branch(branch)

        breaking_changes = self.detect_breaking_changes(diff, files) if breaking else []
        reviewers = self.suggest_reviewers(files) if self.config.suggest_reviewers else []

        return ChangeSummary(
            title=title,
            prose=self.summarize(files, stats),
            files=tuple(files),
            stats=stats,
            breaking_changes=tuple(breaking_changes),
            suggested_reviewers=tuple(reviewers),
            template=template,
        )
