"""CLI Commands"""

import os
import sys
from pathlib import Path

from prdesc.config import BASE_ENV_VAR, Config, ConfigManager, load_config, save_config, get_config_path
from prdesc.output import bold, dim, info, print_success, print_error


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {ConfigManager.CONFIG_FILENAME} found)")

    env_base = os.environ.get(BASE_ENV_VAR)
    if env_base:
        print(f"  {dim('Environment overrides:')}")
        print(f"    {BASE_ENV_VAR}={env_base}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    base_branch:            {info(config.base_branch)}")
    print(f"    fallback_branches:      {info(', '.join(config.fallback_branches) or 'none')}")
    print(f"    unresolved_base:        {info(config.unresolved_base)}")
    print(f"    max_reviewers:          {info(str(config.max_reviewers))}")
    print(f"    reviewer_history_depth: {info(str(config.reviewer_history_depth))}")
    print(f"    breaking_log_depth:     {info(str(config.breaking_log_depth))}")
    print(f"    max_removed_exports:    {info(str(config.max_removed_exports))}")
    print(f"    suggest_reviewers:      {info(str(config.suggest_reviewers).lower())}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  {ConfigManager.CONFIG_FILENAME} (in current directory)")
    print(f"    Global: ~/{ConfigManager.CONFIG_FILENAME}")
    print(f"\n  {dim('Run')} prdesc --init-config {dim('to create one')}\n")

    return 0


def run_init_config() -> int:
    """Write the default configuration to the current directory."""
    path = Path.cwd() / ConfigManager.CONFIG_FILENAME
    if path.exists():
        print_error(f"{path} already exists")
        return 1

    try:
        save_config(Config(), global_config=False)
    except OSError as e:
        print_error(f"Could not write {path}: {e}")
        return 1

    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete prdesc)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell prdesc | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish prdesc | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
