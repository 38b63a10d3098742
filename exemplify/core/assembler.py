"""
示例组装器模块 - 将所有文件的区域按名称归组为示例

组装是一个纯函数式的归约：
1. 按扫描顺序遍历区域，按 name 归组
2. 同一 (name, part) 出现多次时保留第一个，其余报告 DuplicatePart
3. 片段按 part 升序排列，剥离缩进，解析语言和标题
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from exemplify.core.models import (
    Callout,
    Example,
    FileScanResult,
    IssueCode,
    Part,
    Region,
    ScanIssue,
)

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    """
    组装结果

    Attributes:
        examples: 组装完成的示例（按首次出现的扫描顺序）
        issues: 组装过程中发现的问题
    """
    examples: list[Example] = field(default_factory=list)
    issues: list[ScanIssue] = field(default_factory=list)

    def get(self, name: str) -> Optional[Example]:
        for example in self.examples:
            if example.name == name:
                return example
        return None


def strip_indentation(line: str, indentation: int) -> str:
    """
    剥离行首最多 indentation 个空白字符

    不足 indentation 个时只剥离已有的空白，不会删除非空白字符。
    """
    if indentation <= 0:
        return line
    prefix = line[:indentation]
    return line[len(prefix) - len(prefix.lstrip()):]


def build_part(region: Region) -> Part:
    """由区域生成片段（语言继承在 build_example 中处理）"""
    return Part(
        part=region.part,
        lines=[strip_indentation(line.text, region.indentation) for line in region.lines],
        language=region.language,
        declared_language=region.language,
        title=region.title,
        callouts=[Callout(c.offset, c.value, c.comment) for c in region.callouts],
        source=region.location,
    )


def build_example(name: str, regions: Iterable[Region]) -> Example:
    """由同名的一组区域构建示例，调用方保证 part 不重复"""
    parts = [build_part(region) for region in sorted(regions, key=lambda r: r.part)]

    # 未声明语言的片段继承前一个声明过语言的片段
    inherited: Optional[str] = None
    for part in parts:
        if part.declared_language:
            inherited = part.declared_language
        part.language = part.declared_language or inherited

    title = next((part.title for part in parts if part.title), None)
    return Example(name=name, parts=parts, title=title)


def assemble_examples(results: Iterable[FileScanResult]) -> AssemblyResult:
    """
    跨文件组装示例

    Args:
        results: 按扫描顺序排列的文件扫描结果

    Returns:
        AssemblyResult 对象
    """
    groups: dict[str, dict[int, Region]] = {}
    issues: list[ScanIssue] = []

    for result in results:
        for region in result.regions:
            parts = groups.setdefault(region.name, {})
            kept = parts.get(region.part)
            if kept is not None:
                issue = ScanIssue.create(
                    IssueCode.DUPLICATE_PART,
                    f"Part {region.part} of example '{region.name}' is already defined at {kept.location}; "
                    f"keeping the first definition",
                    region.location,
                    related=[kept.location],
                )
                logger.warning(f"{issue}")
                issues.append(issue)
                continue
            parts[region.part] = region

    examples = [build_example(name, parts.values()) for name, parts in groups.items()]
    return AssemblyResult(examples=examples, issues=issues)
