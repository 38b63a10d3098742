"""
数据模型定义

包含标记解析、区域追踪、示例组装各阶段使用的数据类。
Marker / Region 只在单个文件的扫描过程中存在，
Example / Part 在整个文档构建期间保存在 ExampleStore 中。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional


class MarkerKind(Enum):
    """标记类型"""
    START = "start"
    END = "end"
    CALLOUT = "callout"


@dataclass(frozen=True)
class SourceLocation:
    """源文件位置 (行号 1-based)"""
    file_path: str
    line_number: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line_number}"


@dataclass
class Marker:
    """
    识别出的标记

    Attributes:
        kind: 标记类型
        attributes: 属性块中的原始键值对
        column: 标记 token 在行内的起始列 (0-based)
        end_column: 标记（含属性块）结束后的列
        line_number: 行号，由调用方填写
    """
    kind: MarkerKind
    attributes: dict[str, str] = field(default_factory=dict)
    column: int = 0
    end_column: int = 0
    line_number: int = 0

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get("name")

    @property
    def title(self) -> Optional[str]:
        return self.attributes.get("title")

    @property
    def language(self) -> Optional[str]:
        return self.attributes.get("language")

    @property
    def value(self) -> Optional[str]:
        return self.attributes.get("value")

    @property
    def part(self) -> Optional[int]:
        raw = self.attributes.get("part")
        return int(raw) if raw is not None else None

    @property
    def indentation(self) -> int:
        raw = self.attributes.get("indentation")
        return int(raw) if raw is not None else 0


@dataclass
class Callout:
    """
    行注解

    Attributes:
        offset: 在所属区域/片段内的行偏移 (0-based)
        value: 显示给渲染器的文本
        comment: 标记前被剥离的注释符（如 //），渲染时可重新输出
    """
    offset: int
    value: str
    comment: Optional[str] = None


@dataclass
class RegionLine:
    """区域中的一行内容及其源行号"""
    text: str
    line_number: int


@dataclass
class Region:
    """
    单个文件内由 Start/End 标记包围的连续区域

    Attributes:
        name: 所属示例名称
        part: 片段序号
        file_path: 源文件路径
        start_line: Start 标记所在行号
        end_line: End 标记所在行号（未闭合时为 None）
        title: 标题
        language: 显式声明的语言
        indentation: 需要剥离的缩进字符数
        lines: 按顺序累积的原始行
        callouts: 附着在区域内的注解
    """
    name: str
    part: int
    file_path: str
    start_line: int
    end_line: Optional[int] = None
    title: Optional[str] = None
    language: Optional[str] = None
    indentation: int = 0
    lines: list[RegionLine] = field(default_factory=list)
    callouts: list[Callout] = field(default_factory=list)

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.file_path, self.start_line)

    @property
    def text_lines(self) -> list[str]:
        return [line.text for line in self.lines]


@dataclass
class Part:
    """
    示例的一个片段 - 由一个 Region 生成

    Attributes:
        part: 片段序号
        lines: 剥离缩进后的内容行
        language: 解析后的语言（显式声明或继承自前一片段）
        declared_language: 区域自身声明的语言
        title: 区域自身声明的标题
        callouts: 注解列表
        source: 来源区域的位置
    """
    part: int
    lines: list[str] = field(default_factory=list)
    language: Optional[str] = None
    declared_language: Optional[str] = None
    title: Optional[str] = None
    callouts: list[Callout] = field(default_factory=list)
    source: Optional[SourceLocation] = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass
class Example:
    """
    由名称唯一标识的文档示例，可跨越多个文件和多个片段

    Attributes:
        name: 示例名称
        parts: 按 part 升序排列的片段
        title: 第一个声明的标题
    """
    name: str
    parts: list[Part] = field(default_factory=list)
    title: Optional[str] = None

    @property
    def language(self) -> Optional[str]:
        """第一个能解析出的语言，供整体渲染使用"""
        for part in self.parts:
            if part.language:
                return part.language
        return None

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.parts)

    @property
    def lines(self) -> list[str]:
        result: list[str] = []
        for part in self.parts:
            result.extend(part.lines)
        return result

    @property
    def callouts(self) -> list[Callout]:
        """所有片段的注解，偏移换算到整个示例的行号上"""
        result: list[Callout] = []
        base = 0
        for part in self.parts:
            for callout in part.callouts:
                result.append(Callout(base + callout.offset, callout.value, callout.comment))
            base += len(part.lines)
        return result


Severity = Literal["error", "warning"]


class IssueCode(str, Enum):
    """问题代码"""
    MALFORMED_ATTRIBUTE_BLOCK = "MalformedAttributeBlock"
    INVALID_NUMERIC_ATTRIBUTE = "InvalidNumericAttribute"
    UNTERMINATED_REGION = "UnterminatedRegion"
    DUPLICATE_PART = "DuplicatePart"
    MISSING_NAME_ON_START = "MissingNameOnStart"
    UNMATCHED_END = "UnmatchedEnd"
    ORPHAN_CALLOUT = "OrphanCallout"
    UNREADABLE_FILE = "UnreadableFile"


WARNING_CODES = {IssueCode.UNMATCHED_END, IssueCode.ORPHAN_CALLOUT}


@dataclass
class ScanIssue:
    """
    扫描问题

    Attributes:
        severity: 严重程度 (error, warning)
        code: 问题代码
        message: 问题描述
        file_path: 相关文件路径
        line_number: 行号
        related: 其他相关位置（如被丢弃的重复片段）
    """
    severity: Severity
    code: IssueCode
    message: str
    file_path: str
    line_number: int
    related: list[SourceLocation] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        code: IssueCode,
        message: str,
        location: SourceLocation,
        related: Optional[list[SourceLocation]] = None,
    ) -> "ScanIssue":
        severity: Severity = "warning" if code in WARNING_CODES else "error"
        return cls(
            severity=severity,
            code=code,
            message=message,
            file_path=location.file_path,
            line_number=location.line_number,
            related=list(related or []),
        )

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.file_path, self.line_number)

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line_number}: {self.code.value}: {self.message}"


@dataclass
class FileScanResult:
    """
    单个文件的扫描结果

    Attributes:
        file_path: 文件路径
        regions: 已闭合的区域（按 Start 行号排序）
        issues: 该文件中发现的问题
    """
    file_path: str
    regions: list[Region] = field(default_factory=list)
    issues: list[ScanIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)
