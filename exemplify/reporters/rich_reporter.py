"""
Rich 终端报告器 - 使用 Rich 库输出示例列表和扫描问题
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from exemplify.core.models import ScanIssue
from exemplify.core.scanner import ExtractionReport

# 最多显示的问题数
MAX_ISSUES = 20


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, result: ExtractionReport, target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.print("─" * 80, style="dim")
        self.console.print("📚 exemplify 示例提取报告", style="bold cyan", justify="center")
        self.console.print("─" * 80, style="dim")

        self._print_summary(result, target)

        if result.examples:
            self._print_examples(result)

        if result.issues:
            self._print_issues(result.issues)

        self.console.print()

    def _print_summary(self, result: ExtractionReport, target: str) -> None:
        """打印汇总面板"""
        color = "red" if result.has_errors else ("yellow" if result.warnings else "green")

        content = Text()
        content.append("示例: ", style="bold")
        content.append(f"{len(result.examples)}\n", style=f"bold {color}")
        content.append(f"文件: {result.files_scanned}  区域: {result.regions_found}\n", style="dim")
        content.append("错误: ", style="bold")
        content.append(f"{len(result.errors)}", style="red" if result.errors else "green")
        content.append("  警告: ", style="bold")
        content.append(f"{len(result.warnings)}\n\n", style="yellow" if result.warnings else "green")
        content.append(f"目标: {target}", style="dim")

        self.console.print(Panel(
            content,
            title="[bold]📊 扫描结果[/bold]",
            border_style=color,
        ))

    def _print_examples(self, result: ExtractionReport) -> None:
        """打印示例列表"""
        self.console.print()
        self.console.print("[bold]◆ 示例[/bold]")
        self.console.print()

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("名称", style="cyan")
        table.add_column("标题")
        table.add_column("片段", justify="right")
        table.add_column("语言")
        table.add_column("行数", justify="right")
        table.add_column("来源", style="dim")

        for example in sorted(result.examples, key=lambda e: e.name):
            sources = sorted({part.source.file_path for part in example.parts if part.source})
            table.add_row(
                escape(example.name),
                escape(example.title) if example.title else "[dim]-[/dim]",
                ", ".join(str(part.part) for part in example.parts),
                escape(example.language) if example.language else "[dim]-[/dim]",
                str(len(example.lines)),
                ", ".join(sources),
            )

        self.console.print(table)

    def _print_issues(self, issues: list[ScanIssue]) -> None:
        """打印问题详情"""
        self.console.print()
        self.console.print("[bold]◆ 问题详情[/bold]")
        self.console.print()

        # 按严重程度排序
        sorted_issues = sorted(
            issues,
            key=lambda x: (0 if x.severity == "error" else 1, x.file_path, x.line_number),
        )

        for i, issue in enumerate(sorted_issues[:MAX_ISSUES], 1):
            if issue.severity == "error":
                icon = "❌"
                style = "red"
            else:
                icon = "⚠️"
                style = "yellow"

            self.console.print(f"  {i}. [{style}]{icon} {issue.code.value}: {escape(issue.message)}[/{style}]")
            self.console.print(f"     [dim]{issue.file_path}:{issue.line_number}[/dim]")
            for related in issue.related:
                self.console.print(f"     [dim]→ see {related}[/dim]")

        if len(issues) > MAX_ISSUES:
            self.console.print(f"  [dim]... 还有 {len(issues) - MAX_ISSUES} 个问题未显示[/dim]")
