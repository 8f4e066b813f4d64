"""Git Operations Package"""

from prdesc.git.runner import (
    GitRunner,
    GitError,
    BaseResolution,
    CommandTrace,
    UNRESOLVED_HEAD,
    UNRESOLVED_FAIL,
)
from prdesc.git.parser import (
    parse_name_status,
    parse_shortstat,
    title_from_branch,
    split_diff_by_file,
    DEFAULT_TITLE,
)

__all__ = [
    "GitRunner",
    "GitError",
    "BaseResolution",
    "CommandTrace",
    "UNRESOLVED_HEAD",
    "UNRESOLVED_FAIL",
    "parse_name_status",
    "parse_shortstat",
    "title_from_branch",
    "split_diff_by_file",
    "DEFAULT_TITLE",
]
