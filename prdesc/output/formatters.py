"""Report Formatters - Markdown, JSON and terminal renderings of a ChangeSummary."""

import json
from pathlib import Path

from prdesc.models import ChangeSummary
from prdesc.output import (
    Colors, badge, bold, colorize_status, dim, error, heading, highlight, info, success,
)

STATUS_WIDTH = 10


def format_markdown(summary: ChangeSummary) -> str:
    lines = [
        f"## {summary.title}",
        "",
        "### Summary",
        summary.prose,
        "",
        "### Changes",
        "",
        "| Status | File | Category |",
        "|--------|------|----------|",
    ]
    for f in summary.files:
        lines.append(f"| {f.status.label} | `{f.path}` | {f.category.value} |")

    lines.extend([
        "",
        "### Stats",
        f"- **Files changed:** {summary.files_changed}",
        f"- **Additions:** +{summary.additions}",
        f"- **Deletions:** -{summary.deletions}",
    ])

    if summary.breaking_changes:
        lines.extend(["", "### Breaking Changes"])
        lines.extend(f"- {item}" for item in summary.breaking_changes)

    if summary.suggested_reviewers:
        lines.extend(["", "### Suggested Reviewers"])
        lines.extend(f"- @{name}" for name in summary.suggested_reviewers)

    return "\n".join(lines)


def format_json(summary: ChangeSummary) -> str:
    return json.dumps(summary.to_dict(), indent=2)


def write_markdown(summary: ChangeSummary, path: str) -> Path:
    """Persist the Markdown rendering. Raises OSError on write failure."""
    target = Path(path)
    target.write_text(format_markdown(summary), encoding='utf-8')
    return target


def display_report(summary: ChangeSummary) -> None:
    """Print the colored terminal report."""
    print()
    print(f"{badge('  PR  ')} {info('Pull Request Description Generator')}")
    print()
    print(f"{bold('Title:')} {summary.title}")
    print()
    print(heading("Summary"))
    print(dim(summary.prose))
    print()
    print(heading("Changed Files"))

    for f in summary.files:
        label = colorize_status(f.status.value, f.status.label.ljust(STATUS_WIDTH))
        print(f"  {label} {f.path} {dim(f'({f.category.value})')}")

    print()
    print(heading("Stats"))
    print(
        f"  {success(f'+{summary.additions}')} additions  "
        f"{error(f'-{summary.deletions}')} deletions  "
        f"{info(str(summary.files_changed))} files"
    )

    if summary.breaking_changes:
        print()
        print(badge(" BREAKING CHANGES ", Colors.BG_RED))
        for item in summary.breaking_changes:
            print(f"  {error('!')} {item}")

    if summary.suggested_reviewers:
        print()
        print(heading("Suggested Reviewers"))
        for name in summary.suggested_reviewers:
            print(f"  {highlight('@' + name)}")

    print()
