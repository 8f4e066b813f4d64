"""Git Runner - Invoke git and capture its text output."""

import subprocess
import time
from dataclasses import dataclass, field

UNRESOLVED_HEAD = "head"
UNRESOLVED_FAIL = "fail"

# Keep non-ASCII paths verbatim instead of C-quoted
GIT_OPTIONS = ('-c', 'core.quotePath=false')


class GitError(Exception):
    """Raised when git operations fail."""
    pass


@dataclass
class CommandTrace:
    """One git invocation, kept for --verbose."""
    args: tuple[str, ...]
    elapsed: float
    ok: bool

    @property
    def command(self) -> str:
        return 'git ' + ' '.join(self.args)


@dataclass
class BaseResolution:
    """Which ref the diff is taken against, and why."""
    requested: str
    ref: str

    @property
    def substituted(self) -> bool:
        return self.ref != self.requested


@dataclass
class GitRunner:
    """Runs git commands in a working tree.

    run() never raises: a failed command yields "" and callers treat that as
    "no data". Only verify_in_repo() and an unresolvable base in strict mode
    are fatal.
    """
    cwd: str | None = None
    trace: list[CommandTrace] = field(default_factory=list)

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stripped stdout."""
        start = time.time()
        try:
            result = subprocess.run(
                ['git', *GIT_OPTIONS, *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.cwd,
            )
        except subprocess.CalledProcessError as e:
            self.trace.append(CommandTrace(args, time.time() - start, False))
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            self.trace.append(CommandTrace(args, time.time() - start, False))
            raise GitError("Git is not installed or not in PATH")
        self.trace.append(CommandTrace(args, time.time() - start, True))
        return result.stdout.strip()

    def run(self, *args: str) -> str:
        """Run a git command; any failure becomes an empty string."""
        try:
            return self._run_git(*args)
        except GitError:
            return ""

    def verify_in_repo(self) -> None:
        """Fail fast if git is missing or we're not in a working tree."""
        self._run_git('--version')
        if self.run('rev-parse', '--is-inside-work-tree') != 'true':
            raise GitError("Not inside a git repository.")

    def ref_exists(self, ref: str) -> bool:
        return bool(self.run('rev-parse', '--verify', '--quiet', ref))

    def resolve_base(self, requested: str, fallbacks: list[str],
                     unresolved: str = UNRESOLVED_HEAD) -> BaseResolution:
        """Pick the ref to diff against.

        The requested ref wins if it exists, then the first existing fallback.
        With nothing found, compare against HEAD or raise, per `unresolved`.
        """
        if self.ref_exists(requested):
            return BaseResolution(requested=requested, ref=requested)

        for fallback in fallbacks:
            if fallback != requested and self.ref_exists(fallback):
                return BaseResolution(requested=requested, ref=fallback)

        if unresolved == UNRESOLVED_FAIL:
            raise GitError(f"Base branch '{requested}' not found and no fallback branch exists.")
        return BaseResolution(requested=requested, ref='HEAD')

    def diff(self, base: str, *options: str) -> str:
        """git diff against base...HEAD, then the working tree, then the index."""
        return (
            self.run('diff', *options, f'{base}...HEAD')
            or self.run('diff', *options, 'HEAD')
            or self.run('diff', *options, '--cached')
        )

    def current_branch(self) -> str:
        return self.run('rev-parse', '--abbrev-ref', 'HEAD')

    def current_user(self) -> str:
        return self.run('config', 'user.name')

    def recent_commits(self, count: int) -> list[str]:
        """One-line log of the last `count` non-merge commits."""
        output = self.run('log', '--oneline', '--no-decorate', f'-{count}', '--no-merges')
        return [line for line in output.split('\n') if line.strip()]

    def file_authors(self, path: str, count: int) -> list[str]:
        """Author names of the last `count` commits touching path, newest first."""
        output = self.run('log', '--format=%an', f'-{count}', '--', path)
        return [line.strip() for line in output.split('\n') if line.strip()]
