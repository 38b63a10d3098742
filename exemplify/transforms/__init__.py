"""
Transforms Layer - 输出层

把组装好的示例渲染为纯文本、Asciidoctor 或 JSON。
"""

from exemplify.transforms.plain import to_dict, render_plain, render_json
from exemplify.transforms.asciidoctor import render_asciidoc
from exemplify.transforms.output import (
    OutputFormat,
    render,
    output_file_name,
    write_examples,
)

__all__ = [
    "to_dict",
    "render_plain",
    "render_json",
    "render_asciidoc",
    "OutputFormat",
    "render",
    "output_file_name",
    "write_examples",
]
