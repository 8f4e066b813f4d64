# PYTHON_ARGCOMPLETE_OK
"""CLI Main Entry Point"""

import dataclasses
import os
import sys
import time

from prdesc.analysis import ChangeAnalyzer, TEMPLATE_CONVENTIONAL, TEMPLATE_DEFAULT
from prdesc.config import BASE_ENV_VAR, Config, load_config
from prdesc.git import GitRunner, GitError, BaseResolution
from prdesc.models import ChangeSummary
from prdesc.output import print_error, print_success, print_warning, log_debug
from prdesc.output.formatters import display_report, format_json, format_markdown, write_markdown

from prdesc.cli.args import parse_args
from prdesc.cli.commands import display_config, run_init_config, run_install_completion


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.init_config:
        return run_init_config(), True
    return 0, False


def _get_base_branch(args, config: Config) -> str:
    """Resolve the requested base branch.

    Precedence: --base > positional BASE > environment variable > config file
    """
    return args.base or args.base_branch or os.environ.get(BASE_ENV_VAR) or config.base_branch


def _report_substitution(resolution: BaseResolution) -> None:
    if not resolution.substituted:
        return
    if resolution.ref == 'HEAD':
        print_warning(f"Branch '{resolution.requested}' not found. Comparing against HEAD instead.")
    else:
        print_warning(f"Branch '{resolution.requested}' not found. Using '{resolution.ref}' instead.")


def _print_verbose_stats(args, git: GitRunner, timings: dict) -> None:
    """Print each git command and stage timings to stderr."""
    if not args.verbose:
        return
    print(file=sys.stderr)
    for trace in git.trace:
        status = "ok" if trace.ok else "failed"
        log_debug(f"{trace.command} ({trace.elapsed:.2f}s, {status})")
    stages = ", ".join(f"{name}={elapsed:.2f}s" for name, elapsed in timings.items())
    if stages:
        log_debug(f"Timings: {stages}")


def _emit(args, summary: ChangeSummary) -> int:
    """Print the summary in the requested format and persist markdown if asked."""
    if args.json:
        print(format_json(summary))
    elif args.markdown:
        if not args.output:
            print(format_markdown(summary))
    else:
        display_report(summary)

    if not args.output:
        return 0

    try:
        path = write_markdown(summary, args.output)
    except OSError as e:
        print_error(f"Could not write {args.output}: {e}")
        return 1

    if args.json:
        print(f"Markdown saved to {path}", file=sys.stderr)
    elif args.markdown:
        print_success(f"Written to {path}")
    else:
        print_success(f"Markdown saved to {path}")
    return 0


def _describe_flow(args, config: Config, git: GitRunner, timings: dict) -> int:
    """Main description flow.

    Returns:
        int: Exit code
    """
    t0 = time.time()
    try:
        git.verify_in_repo()
        resolution = git.resolve_base(
            _get_base_branch(args, config),
            config.fallback_branches,
            config.unresolved_base,
        )
    except GitError as e:
        print_error(str(e))
        return 1
    _report_substitution(resolution)

    base = resolution.ref
    name_status = git.diff(base, '--name-status')
    if not name_status:
        timings['git'] = time.time() - t0
        print_warning(f"No changes detected against '{base}'. Try a different base branch with --base.")
        return 0

    shortstat = git.diff(base, '--shortstat')
    diff = git.diff(base) if args.breaking else ""
    branch = git.current_branch()
    timings['git'] = time.time() - t0

    t0 = time.time()
    analyzer = ChangeAnalyzer(git, config.analyzer_config())
    summary = analyzer.build(
        name_status,
        shortstat,
        diff,
        branch,
        breaking=args.breaking,
        template=TEMPLATE_CONVENTIONAL if args.template else TEMPLATE_DEFAULT,
    )
    timings['analysis'] = time.time() - t0

    if summary.is_empty:
        print_warning(f"No changes detected against '{base}'. Try a different base branch with --base.")
        return 0

    return _emit(args, summary)


def main(argv: list[str] | None = None, git: GitRunner | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    # Apply CLI overrides to config
    config = load_config()
    if args.no_reviewers:
        config = dataclasses.replace(config, suggest_reviewers=False)

    git = git or GitRunner()
    timings: dict[str, float] = {}
    exit_code = _describe_flow(args, config, git, timings)
    _print_verbose_stats(args, git, timings)
    return exit_code
