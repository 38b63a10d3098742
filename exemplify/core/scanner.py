"""
扫描流程

单个文件的扫描是纯顺序的；多个文件可以在线程池中并行扫描，
结果始终按输入顺序返回，组装阶段在全部文件扫描完成后统一进行，
ExampleStore 在每轮扫描中只被写入一次。
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from exemplify.core.assembler import assemble_examples
from exemplify.core.models import (
    Example,
    FileScanResult,
    IssueCode,
    ScanIssue,
    SourceLocation,
)
from exemplify.core.regions import track_regions
from exemplify.core.settings import DEFAULT_SETTINGS, ParserSettings
from exemplify.core.store import ExampleStore

logger = logging.getLogger(__name__)

# 进度回调类型：(文件路径, 区域数)
ProgressCallback = Callable[[str, int], None]

PathLike = Union[str, Path]


@dataclass
class ExtractionReport:
    """
    一轮扫描的汇总

    Attributes:
        examples: 写入存储的示例
        issues: 所有文件和组装阶段的问题
        files_scanned: 扫描的文件数
        regions_found: 已闭合的区域数
    """
    examples: list[Example] = field(default_factory=list)
    issues: list[ScanIssue] = field(default_factory=list)
    files_scanned: int = 0
    regions_found: int = 0

    @property
    def errors(self) -> list[ScanIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ScanIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def stats(self) -> dict[str, int]:
        return {
            "files_scanned": self.files_scanned,
            "regions_found": self.regions_found,
            "examples": len(self.examples),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
        }


def split_lines(text: str) -> list[str]:
    """按行切分，兼容 \\r\\n，末尾换行不产生空行"""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def scan_text(
    text: str,
    file_path: str,
    settings: ParserSettings = DEFAULT_SETTINGS,
) -> FileScanResult:
    """扫描一段源码文本"""
    return track_regions(split_lines(text), file_path, settings)


def scan_file(
    path: PathLike,
    settings: ParserSettings = DEFAULT_SETTINGS,
    display_path: Optional[str] = None,
) -> FileScanResult:
    """
    读取并扫描单个文件

    Args:
        path: 文件路径
        settings: 标记配置
        display_path: 报告中使用的路径（默认为 path 本身）

    Returns:
        FileScanResult 对象；读取失败时包含 UnreadableFile 问题
    """
    path = Path(path)
    shown = display_path or str(path)

    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Failed to read {shown}: {e}")
        issue = ScanIssue.create(
            IssueCode.UNREADABLE_FILE,
            f"Cannot read file: {e}",
            SourceLocation(shown, 0),
        )
        return FileScanResult(file_path=shown, issues=[issue])

    result = scan_text(content, shown, settings)
    logger.debug(f"Scanned {shown}: {len(result.regions)} regions, {len(result.issues)} issues")
    return result


def scan_files(
    paths: Sequence[PathLike],
    settings: ParserSettings = DEFAULT_SETTINGS,
    workers: int = 1,
    on_file: Optional[ProgressCallback] = None,
    root: Optional[Path] = None,
) -> list[FileScanResult]:
    """
    扫描多个文件

    Args:
        paths: 文件列表，其顺序即扫描顺序
        settings: 标记配置
        workers: 线程数，大于 1 时并行扫描
        on_file: 每个文件扫描完成后的回调
        root: 报告路径的相对根目录

    Returns:
        与 paths 顺序一致的扫描结果
    """

    def display(path: Path) -> str:
        if root is not None:
            try:
                return path.relative_to(root).as_posix()
            except ValueError:
                pass
        return str(path)

    def scan_one(path: PathLike) -> FileScanResult:
        path = Path(path)
        return scan_file(path, settings, display(path))

    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            # map 保持输入顺序
            results = list(ex.map(scan_one, paths))
    else:
        results = [scan_one(path) for path in paths]

    if on_file:
        for result in results:
            on_file(result.file_path, len(result.regions))

    return results


def extract_examples(
    paths: Sequence[PathLike],
    store: ExampleStore,
    settings: ParserSettings = DEFAULT_SETTINGS,
    workers: int = 1,
    on_file: Optional[ProgressCallback] = None,
    root: Optional[Path] = None,
) -> ExtractionReport:
    """
    执行一轮完整扫描：扫描 -> 组装 -> 写入存储

    可恢复的问题不会中断扫描，存储中始终包含成功组装的示例。
    """
    results = scan_files(paths, settings, workers=workers, on_file=on_file, root=root)
    assembly = assemble_examples(results)

    store.begin_pass()
    for example in assembly.examples:
        store.put(example)

    issues: list[ScanIssue] = []
    for result in results:
        issues.extend(result.issues)
    issues.extend(assembly.issues)

    report = ExtractionReport(
        examples=assembly.examples,
        issues=issues,
        files_scanned=len(results),
        regions_found=sum(len(result.regions) for result in results),
    )
    logger.info(
        f"Extracted {len(report.examples)} examples from {report.files_scanned} files "
        f"({len(report.errors)} errors, {len(report.warnings)} warnings)"
    )
    return report
