"""Parsers for git's textual diff output."""

import re

from prdesc.models import ChangeStatus, DiffStats

_INSERTIONS_RE = re.compile(r'(\d+) insertion')
_DELETIONS_RE = re.compile(r'(\d+) deletion')
_FILES_RE = re.compile(r'(\d+) files? changed')
_TITLE_SEPARATORS_RE = re.compile(r'[-_/]')
_WORD_START_RE = re.compile(r'\b\w')

DEFAULT_TITLE = "Changes"


def parse_name_status(output: str) -> list[tuple[ChangeStatus, str]]:
    """Parse 'git diff --name-status' output.

    Renames and copies carry two paths ("R100\\told\\tnew"); the last one wins.
    """
    entries = []
    for line in output.split('\n'):
        if not line.strip():
            continue
        parts = line.split('\t')
        if len(parts) < 2:
            continue
        entries.append((ChangeStatus.from_letter(parts[0]), parts[-1]))
    return entries


def parse_shortstat(output: str, default_files: int = 0) -> DiffStats:
    """Parse ' 3 files changed, 10 insertions(+), 2 deletions(-)'.

    Missing parts count as zero; a missing file count falls back to default_files.
    """
    additions = _INSERTIONS_RE.search(output)
    deletions = _DELETIONS_RE.search(output)
    files = _FILES_RE.search(output)
    return DiffStats(
        additions=int(additions.group(1)) if additions else 0,
        deletions=int(deletions.group(1)) if deletions else 0,
        files_changed=int(files.group(1)) if files else default_files,
    )


def title_from_branch(branch: str) -> str:
    """'feature/add-login_page' -> 'Feature Add Login Page'."""
    branch = branch.strip()
    if not branch or branch == 'HEAD':
        return DEFAULT_TITLE
    spaced = ' '.join(_TITLE_SEPARATORS_RE.sub(' ', branch).split())
    if not spaced:
        return DEFAULT_TITLE
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), spaced)


def split_diff_by_file(diff: str) -> dict[str, str]:
    """Split a unified diff into {path: section} using 'diff --git' headers."""
    files = {}
    current_file = None
    current_lines = []

    for line in diff.split('\n'):
        if line.startswith('diff --git'):
            if current_file:
                files[current_file] = '\n'.join(current_lines)
            match = re.search(r'diff --git a/(.+?) b/(.+)$', line)
            current_file = match.group(2) if match else None
            current_lines = [line]
        elif current_file:
            current_lines.append(line)

    if current_file:
        files[current_file] = '\n'.join(current_lines)

    return files
