"""Shared fixtures: a scripted stand-in for git."""

import re

import pytest

from prdesc.git import GitRunner, GitError, CommandTrace

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


class FakeGit(GitRunner):
    """GitRunner whose commands are answered from a dict.

    Keys are git argument tuples. Unknown commands fail like a real git error,
    so run() degrades them to "".
    """

    def __init__(self, responses: dict[tuple[str, ...], str] | None = None):
        super().__init__()
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def _run_git(self, *args: str) -> str:
        self.calls.append(args)
        ok = args in self.responses
        self.trace.append(CommandTrace(args, 0.0, ok))
        if not ok:
            raise GitError(f"Git command failed: git {' '.join(args)}")
        return self.responses[args]


NAME_STATUS = "M\tsrc/app.ts\nA\tsrc/app.test.ts\nD\tsrc/index.ts"
SHORTSTAT = " 3 files changed, 42 insertions(+), 7 deletions(-)"
FULL_DIFF = (
    "diff --git a/src/index.ts b/src/index.ts\n"
    "deleted file mode 100644\n"
    "--- a/src/index.ts\n"
    "+++ /dev/null\n"
    "@@ -1,2 +0,0 @@\n"
    "-export { App } from './app';\n"
    "-export default App;\n"
)


def repo_responses(base: str = "main") -> dict[tuple[str, ...], str]:
    """Responses for a repo on 'feature/add-login' with three changed files."""
    return {
        ('--version',): 'git version 2.43.0',
        ('rev-parse', '--is-inside-work-tree'): 'true',
        ('rev-parse', '--verify', '--quiet', base): '3f9c2ab',
        ('diff', '--name-status', f'{base}...HEAD'): NAME_STATUS,
        ('diff', '--shortstat', f'{base}...HEAD'): SHORTSTAT,
        ('diff', f'{base}...HEAD'): FULL_DIFF,
        ('rev-parse', '--abbrev-ref', 'HEAD'): 'feature/add-login',
        ('log', '--oneline', '--no-decorate', '-20', '--no-merges'): 'a1b2c3d feat!: drop legacy entry point\nb2c3d4e chore: tidy',
        ('log', '--format=%an', '-5', '--', 'src/app.ts'): 'Bob\nAlice',
        ('log', '--format=%an', '-5', '--', 'src/app.test.ts'): 'Bob',
        ('log', '--format=%an', '-5', '--', 'src/index.ts'): 'Carol',
        ('config', 'user.name'): 'Alice',
    }


@pytest.fixture
def make_git():
    """Return a factory for FakeGit, optionally starting from the sample repo."""
    def _make(responses=None, *, repo=True, base="main"):
        merged = repo_responses(base) if repo else {}
        merged.update(responses or {})
        return FakeGit(merged)
    return _make


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip
