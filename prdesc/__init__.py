"""
PR Description Generator

Summarizes the current branch against a base branch from git's text output.
"""

__version__ = "1.0.0"

# git --name-status letters
STATUS_LABELS = {
    'A': 'Added',
    'M': 'Modified',
    'D': 'Deleted',
    'R': 'Renamed',
    'C': 'Copied',
}

# Conventional commit type used for the --template title, keyed by dominant category
CATEGORY_COMMIT_TYPES = {
    'Source': 'feat',
    'Tests': 'test',
    'Configuration': 'chore',
    'CI/CD': 'ci',
    'Documentation': 'docs',
    'Styles': 'style',
    'Other': 'chore',
}

COMMIT_TYPE_NAMES = [
    'feat', 'fix', 'refactor', 'chore', 'docs',
    'test', 'style', 'perf', 'ci', 'build',
]
