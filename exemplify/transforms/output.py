"""
输出模块 - 选择渲染格式并把示例写入输出目录
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable

from exemplify.core.models import Example
from exemplify.transforms.asciidoctor import render_asciidoc
from exemplify.transforms.plain import render_json, render_plain

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """示例输出格式"""
    PLAIN = "plain"
    ASCIIDOC = "asciidoc"
    JSON = "json"


RENDERERS: dict[OutputFormat, Callable[[Example], str]] = {
    OutputFormat.PLAIN: render_plain,
    OutputFormat.ASCIIDOC: render_asciidoc,
    OutputFormat.JSON: render_json,
}

FILE_SUFFIXES: dict[OutputFormat, str] = {
    OutputFormat.PLAIN: "",
    OutputFormat.ASCIIDOC: ".adoc",
    OutputFormat.JSON: ".json",
}


def render(example: Example, output_format: OutputFormat = OutputFormat.PLAIN) -> str:
    return RENDERERS[output_format](example)


def output_file_name(example: Example, output_format: OutputFormat = OutputFormat.PLAIN) -> str:
    """示例名中的 / 会形成子目录，如 foo/bar.adoc"""
    return f"{example.name}{FILE_SUFFIXES[output_format]}"


def write_examples(
    examples: Iterable[Example],
    output_dir: Path,
    output_format: OutputFormat = OutputFormat.PLAIN,
) -> list[Path]:
    """
    将示例写入输出目录

    Args:
        examples: 要写入的示例
        output_dir: 输出目录
        output_format: 渲染格式

    Returns:
        写入的文件路径列表

    Raises:
        ValueError: 示例名称会写到输出目录之外
    """
    root = output_dir.resolve()
    written: list[Path] = []

    for example in examples:
        target = (root / output_file_name(example, output_format)).resolve()
        if target == root or root not in target.parents:
            raise ValueError(f"Example name '{example.name}' escapes the output directory")

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render(example, output_format), encoding="utf-8")
        logger.debug(f"Wrote {target}")
        written.append(target)

    return written
