"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from exemplify.core.scanner import ExtractionReport


class Reporter(Protocol):
    """报告器协议"""

    def report(self, result: ExtractionReport, target: str) -> None:
        """生成报告"""
        ...
