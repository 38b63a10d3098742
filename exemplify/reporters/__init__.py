"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from exemplify.reporters.base import Reporter
from exemplify.reporters.rich_reporter import RichReporter
from exemplify.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
]
