"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from exemplify.core.models import ScanIssue
from exemplify.core.scanner import ExtractionReport
from exemplify.transforms.plain import to_dict


def issue_to_dict(issue: ScanIssue) -> dict:
    return {
        "severity": issue.severity,
        "code": issue.code.value,
        "message": issue.message,
        "file_path": issue.file_path,
        "line_number": issue.line_number,
        "related": [
            {"file_path": loc.file_path, "line_number": loc.line_number}
            for loc in issue.related
        ],
    }


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, result: ExtractionReport, target: str) -> None:
        """生成 JSON 格式报告"""
        report_data = {
            "target": target,
            "examples": [to_dict(example) for example in result.examples],
            "issues": [issue_to_dict(issue) for issue in result.issues],
            "stats": result.stats,
            "summary": {
                "examples": len(result.examples),
                "errors": len(result.errors),
                "warnings": len(result.warnings),
                "passed": not result.has_errors,
            },
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
