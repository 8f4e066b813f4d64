"""
Tests for GitRunner: soft failures, base resolution, the diff fallback chain.

Run with:
    pytest tests/test_git.py -v
"""

import subprocess

import pytest

from prdesc.git import GitRunner, GitError

from conftest import FakeGit


class TestRunGit:
    """GitRunner._run_git() / run() against a patched subprocess."""

    def test_returns_stripped_stdout(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            assert cmd == ['git', '-c', 'core.quotePath=false', 'rev-parse', '--abbrev-ref', 'HEAD']
            return subprocess.CompletedProcess(cmd, 0, stdout="feature/x\n", stderr="")
        monkeypatch.setattr(subprocess, "run", fake_run)

        git = GitRunner()
        assert git.run('rev-parse', '--abbrev-ref', 'HEAD') == "feature/x"
        assert git.trace[0].ok is True
        assert git.trace[0].command == "git rev-parse --abbrev-ref HEAD"

    def test_failed_command_becomes_empty(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(128, cmd, stderr="fatal: bad revision")
        monkeypatch.setattr(subprocess, "run", fake_run)

        git = GitRunner()
        assert git.run('diff', 'nope...HEAD') == ""
        assert git.trace[0].ok is False

    def test_failed_command_raises_internally(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(128, cmd, stderr="fatal: bad revision")
        monkeypatch.setattr(subprocess, "run", fake_run)

        with pytest.raises(GitError, match="bad revision"):
            GitRunner()._run_git('diff', 'nope...HEAD')

    def test_missing_git_binary(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError("git")
        monkeypatch.setattr(subprocess, "run", fake_run)

        git = GitRunner()
        assert git.run('status') == ""
        with pytest.raises(GitError, match="not installed"):
            git.verify_in_repo()


class TestVerifyInRepo:

    def test_inside_work_tree(self):
        git = FakeGit({
            ('--version',): 'git version 2.43.0',
            ('rev-parse', '--is-inside-work-tree'): 'true',
        })
        git.verify_in_repo()

    def test_outside_work_tree(self):
        git = FakeGit({('--version',): 'git version 2.43.0'})
        with pytest.raises(GitError, match="Not inside a git repository"):
            git.verify_in_repo()

    def test_inside_git_dir_is_not_a_work_tree(self):
        git = FakeGit({
            ('--version',): 'git version 2.43.0',
            ('rev-parse', '--is-inside-work-tree'): 'false',
        })
        with pytest.raises(GitError):
            git.verify_in_repo()


class TestResolveBase:

    FALLBACKS = ["origin/main", "origin/master", "master", "HEAD~1"]

    def _git(self, *existing):
        return FakeGit({('rev-parse', '--verify', '--quiet', ref): 'abc123' for ref in existing})

    def test_requested_branch_exists(self):
        resolution = self._git("develop").resolve_base("develop", self.FALLBACKS)
        assert resolution.ref == "develop"
        assert resolution.substituted is False

    def test_first_existing_fallback_is_used(self):
        resolution = self._git("origin/master", "master").resolve_base("main", self.FALLBACKS)
        assert resolution.ref == "origin/master"
        assert resolution.requested == "main"
        assert resolution.substituted is True

    def test_nothing_found_compares_against_head(self):
        resolution = self._git().resolve_base("main", self.FALLBACKS)
        assert resolution.ref == "HEAD"

    def test_nothing_found_strict_mode_fails(self):
        with pytest.raises(GitError, match="Base branch 'main' not found"):
            self._git().resolve_base("main", self.FALLBACKS, unresolved="fail")


class TestDiffChain:

    def test_prefers_merge_base_range(self):
        git = FakeGit({
            ('diff', '--name-status', 'main...HEAD'): "M\ta.ts",
            ('diff', '--name-status', 'HEAD'): "M\tb.ts",
        })
        assert git.diff('main', '--name-status') == "M\ta.ts"

    def test_falls_back_to_working_tree(self):
        git = FakeGit({('diff', '--shortstat', 'HEAD'): " 1 file changed"})
        assert git.diff('main', '--shortstat') == " 1 file changed"

    def test_falls_back_to_index(self):
        git = FakeGit({('diff', '--cached'): "diff --git a/x b/x"})
        assert git.diff('main') == "diff --git a/x b/x"
        assert git.calls == [('diff', 'main...HEAD'), ('diff', 'HEAD'), ('diff', '--cached')]

    def test_all_empty(self):
        assert FakeGit().diff('main', '--name-status') == ""


class TestQueries:

    def test_recent_commits(self):
        git = FakeGit({('log', '--oneline', '--no-decorate', '-20', '--no-merges'): "abc feat: a\n\ndef fix: b"})
        assert git.recent_commits(20) == ["abc feat: a", "def fix: b"]

    def test_file_authors(self):
        git = FakeGit({('log', '--format=%an', '-5', '--', 'src/a.ts'): "Bob\n Carol \n"})
        assert git.file_authors('src/a.ts', 5) == ["Bob", "Carol"]

    def test_current_user_missing(self):
        assert FakeGit().current_user() == ""
