"""
区域追踪器模块 - 将单个文件中的标记序列转换为区域列表

处理规则：
- 维护一个打开区域的栈，允许嵌套；End 关闭最内层区域
- 内容行会累积到所有打开的区域中，标记行本身不计入任何区域
- 行注解只附着在最内层区域
- 文件结束时仍未闭合的区域逐个报告 UnterminatedRegion
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from exemplify.core.errors import MarkerError, MissingNameOnStart
from exemplify.core.markers import find_marker_token, parse_marker_line
from exemplify.core.models import (
    Callout,
    FileScanResult,
    IssueCode,
    Marker,
    MarkerKind,
    Region,
    RegionLine,
    ScanIssue,
    SourceLocation,
)
from exemplify.core.settings import DEFAULT_SETTINGS, ParserSettings

logger = logging.getLogger(__name__)

# 行尾注解标记前可被剥离的注释符
COMMENT_LEADERS: tuple[str, ...] = ("//", "/*", "#", "--")


@dataclass
class _OpenRegion:
    """栈中的打开区域"""
    region: Region
    discarded: bool = False
    pending_callouts: list[Callout] = field(default_factory=list)

    def append(self, text: str, line_number: int) -> None:
        self.region.lines.append(RegionLine(text, line_number))
        if self.pending_callouts:
            offset = len(self.region.lines) - 1
            for callout in self.pending_callouts:
                callout.offset = offset
                self.region.callouts.append(callout)
            self.pending_callouts.clear()


def strip_comment_leader(text: str) -> tuple[str, Optional[str]]:
    """去掉行尾的注释符，返回 (代码文本, 注释符)"""
    text = text.rstrip()
    for leader in COMMENT_LEADERS:
        if text.endswith(leader):
            return text[:-len(leader)].rstrip(), leader
    return text, None


def split_callout_line(line: str, marker: Marker) -> tuple[str, Optional[str]]:
    """
    从带注解的行中剥离标记

    Args:
        line: 原始行
        marker: 该行的 Callout 标记

    Returns:
        (剥离后的代码文本, 被剥离的注释符) 元组；代码文本为空表示独立注解行
    """
    before, comment = strip_comment_leader(line[:marker.column])
    after = line[marker.end_column:]

    if comment == "/*" and after.lstrip().startswith("*/"):
        after = after.lstrip()[2:]

    if after.strip():
        return (before + after).rstrip(), comment
    return before, comment


class RegionTracker:
    """
    单文件区域追踪器

    逐行调用 feed()，最后调用 finish() 获取结果。
    状态只属于一个文件，多个文件可以并行使用各自的实例。
    """

    def __init__(self, file_path: str, settings: ParserSettings = DEFAULT_SETTINGS):
        self.file_path = file_path
        self.settings = settings
        self._stack: list[_OpenRegion] = []
        self._regions: list[Region] = []
        self._issues: list[ScanIssue] = []
        self._last_started: Optional[tuple[str, int]] = None
        self._line_number = 0
        self._finished = False

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _location(self, line_number: Optional[int] = None) -> SourceLocation:
        return SourceLocation(self.file_path, line_number or self._line_number)

    def _report(self, code: IssueCode, message: str, line_number: Optional[int] = None) -> None:
        issue = ScanIssue.create(code, message, self._location(line_number))
        logger.debug(f"{issue}")
        self._issues.append(issue)

    def feed(self, line: str) -> None:
        """处理下一行"""
        if self._finished:
            raise RuntimeError("RegionTracker.feed() called after finish()")

        self._line_number += 1

        try:
            marker = parse_marker_line(line, self.settings, self._line_number)
            if marker is not None and marker.kind is MarkerKind.START:
                self._open_region(marker)
                return
        except MarkerError as e:
            self._reject_marker(line, e)
            return

        if marker is None:
            self._append_content(line)
        elif marker.kind is MarkerKind.END:
            self._close_region()
        else:
            self._handle_callout(line, marker)

    def feed_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.feed(line)

    def finish(self) -> FileScanResult:
        """结束扫描，报告未闭合区域并返回结果"""
        if not self._finished:
            self._finished = True
            for open_region in self._stack:
                if open_region.discarded:
                    continue
                region = open_region.region
                self._report(
                    IssueCode.UNTERMINATED_REGION,
                    f"Region '{region.name}' part {region.part} is never closed",
                    region.start_line,
                )
            self._stack.clear()
            self._regions.sort(key=lambda r: r.start_line)

        return FileScanResult(
            file_path=self.file_path,
            regions=list(self._regions),
            issues=sorted(self._issues, key=lambda i: i.line_number),
        )

    # ------------------------------------------------------------
    # 标记处理
    # ------------------------------------------------------------

    def _open_region(self, marker: Marker) -> None:
        name = marker.name
        part = marker.part

        if not name:
            if self._last_started is None:
                raise MissingNameOnStart("Start marker has no 'name' and there is no example to continue")
            name, last_part = self._last_started
            if part is None:
                part = last_part + 1
        elif part is None:
            part = 1

        region = Region(
            name=name,
            part=part,
            file_path=self.file_path,
            start_line=self._line_number,
            title=marker.title,
            language=marker.language,
            indentation=marker.indentation,
        )
        self._stack.append(_OpenRegion(region))
        self._last_started = (name, part)

    def _reject_marker(self, line: str, error: MarkerError) -> None:
        located = find_marker_token(line, self.settings)
        self._report(error.code, error.message)

        # 被拒绝的 Start 仍占据一层栈，吸收与之匹配的 End
        if located is None:
            return
        kind, column = located

        if kind is MarkerKind.START:
            placeholder = Region(name="", part=0, file_path=self.file_path, start_line=self._line_number)
            self._stack.append(_OpenRegion(placeholder, discarded=True))
        elif kind is MarkerKind.CALLOUT:
            # 注解无效时仍保留其前面的代码
            text, _ = strip_comment_leader(line[:column])
            if text:
                self._append_content(text)

    def _close_region(self) -> None:
        if not self._stack:
            self._report(IssueCode.UNMATCHED_END, "End marker without an open region")
            return

        open_region = self._stack.pop()
        if open_region.discarded:
            return

        region = open_region.region
        region.end_line = self._line_number

        for callout in open_region.pending_callouts:
            self._report(
                IssueCode.ORPHAN_CALLOUT,
                f"Callout '{callout.value}' in region '{region.name}' has no line to attach to",
            )

        self._regions.append(region)

    def _append_content(self, text: str) -> None:
        for open_region in self._stack:
            open_region.append(text, self._line_number)

    def _handle_callout(self, line: str, marker: Marker) -> None:
        text, comment = split_callout_line(line, marker)
        value = marker.value or ""

        if not self._stack:
            self._report(IssueCode.ORPHAN_CALLOUT, f"Callout '{value}' outside of any region")
            return

        innermost = self._stack[-1]

        if text:
            self._append_content(text)
            innermost.region.callouts.append(Callout(len(innermost.region.lines) - 1, value, comment))
            return

        # 独立注解行：附着到上一行内容，否则等待下一行
        if innermost.region.lines:
            innermost.region.callouts.append(Callout(len(innermost.region.lines) - 1, value, comment))
        else:
            innermost.pending_callouts.append(Callout(0, value, comment))


def track_regions(
    lines: Iterable[str],
    file_path: str,
    settings: ParserSettings = DEFAULT_SETTINGS,
) -> FileScanResult:
    """对一组行执行完整的区域追踪"""
    tracker = RegionTracker(file_path, settings)
    tracker.feed_lines(lines)
    return tracker.finish()
