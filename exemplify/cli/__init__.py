"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from exemplify.cli.app import app, extract, version

__all__ = [
    "app",
    "extract",
    "version",
]
