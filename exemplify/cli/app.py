"""
CLI 入口模块 - 使用 Typer 构建命令行界面

示例提取流程：
1. 发现源文件
2. 扫描标记并组装示例
3. 输出示例（打印或写入目录）
4. 生成报告
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from exemplify.core import (
    DEFAULT_EXTENSIONS,
    ExampleStore,
    ParserSettings,
    extract_examples,
)
from exemplify.core.settings import (
    DEFAULT_CALLOUT_TOKEN,
    DEFAULT_END_TOKEN,
    DEFAULT_START_TOKEN,
)
from exemplify.filters import discover_source_files
from exemplify.reporters import JsonReporter, Reporter, RichReporter
from exemplify.transforms import OutputFormat, output_file_name, render, write_examples

# 创建 Typer 应用实例
app = typer.Typer(
    name="exemplify",
    help="exemplify: extract documentation examples from marked-up source files.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """日志输出到 stderr，verbose 时显示 DEBUG"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def extract(
    sources: List[Path] = typer.Option(
        [Path(".")],
        "--source",
        "-s",
        help="Source directory (or file) to scan, may be repeated",
    ),
    extensions: List[str] = typer.Option(
        DEFAULT_EXTENSIONS,
        "--extension",
        "-e",
        help="File extension to scan, may be repeated",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Write each example to this directory",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.PLAIN,
        "--format",
        "-f",
        help="Example output format",
    ),
    report_format: str = typer.Option(
        "rich",
        "--report",
        "-r",
        help="Report format: rich (default) or json",
    ),
    print_examples: bool = typer.Option(
        False,
        "--print",
        help="Print rendered examples to stdout (ignored with --report json)",
    ),
    start_token: str = typer.Option(DEFAULT_START_TOKEN, "--start-token", help="Region start marker"),
    end_token: str = typer.Option(DEFAULT_END_TOKEN, "--end-token", help="Region end marker"),
    callout_token: str = typer.Option(DEFAULT_CALLOUT_TOKEN, "--callout-token", help="Callout marker"),
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Number of files scanned in parallel"),
    use_gitignore: bool = typer.Option(
        True,
        "--gitignore/--no-gitignore",
        help="Skip files ignored by .gitignore",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """
    Scan source files for example markers and emit the assembled examples.

    Examples:
        exemplify extract -s src -e ts
        exemplify extract -s src -e ts -o docs/examples --format asciidoc
        exemplify extract -s . --print
        exemplify extract -s . --report json
    """
    configure_logging(verbose)

    try:
        settings = ParserSettings(start_token, end_token, callout_token)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    # 1. 发现源文件
    try:
        files = discover_source_files(sources, extensions, use_gitignore=use_gitignore)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    # JSON 报告独占 stdout，进度信息改走 stderr
    status = Console(stderr=True) if report_format == "json" else console

    if verbose:
        status.print(f"[dim]Found {len(files)} source files[/dim]")

    # 2. 扫描并组装
    def on_file_scanned(file_path: str, region_count: int) -> None:
        status.print(f"[dim]  ({region_count} regions) {file_path}[/dim]")

    store = ExampleStore()
    result = extract_examples(
        files,
        store,
        settings,
        workers=workers,
        on_file=on_file_scanned if verbose else None,
        root=Path.cwd(),
    )

    # 3. 输出示例
    # JSON 报告已包含示例内容，stdout 只输出报告本身
    if print_examples and report_format == "json":
        logger.info("--print is ignored with --report json; examples are included in the report")
    elif print_examples:
        # 原样输出，不经过 Rich 的换行和制表符展开
        for example in store.all():
            typer.echo(f"Example {output_file_name(example, output_format)}:")
            typer.echo(render(example, output_format))

    if output_dir is not None:
        try:
            written = write_examples(store.all(), output_dir, output_format)
        except (ValueError, OSError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        if verbose:
            status.print(f"[dim]Wrote {len(written)} files to {output_dir}[/dim]")

    # 4. 生成报告
    reporter: Reporter
    if report_format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(console)

    reporter.report(result, ", ".join(str(s) for s in sources))

    # 5. 设置退出码
    if result.has_errors:
        raise typer.Exit(1)
    raise typer.Exit(0)


@app.command()
def version() -> None:
    """Show the version of exemplify."""
    from exemplify import __version__
    console.print(f"[bold]exemplify[/bold] v{__version__}")


if __name__ == "__main__":
    app()
