"""Change Analysis Package"""

from prdesc.analysis.analyzer import (
    ChangeAnalyzer,
    AnalyzerConfig,
    SUMMARY_CLAUSES,
    MISC_SUMMARY,
    TEMPLATE_DEFAULT,
    TEMPLATE_CONVENTIONAL,
)

__all__ = [
    "ChangeAnalyzer",
    "AnalyzerConfig",
    "SUMMARY_CLAUSES",
    "MISC_SUMMARY",
    "TEMPLATE_DEFAULT",
    "TEMPLATE_CONVENTIONAL",
]
