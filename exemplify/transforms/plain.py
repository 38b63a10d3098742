"""
纯文本 / JSON 输出 - 示例对外的数据契约
"""

import json
from typing import Any

from exemplify.core.models import Example, Part


def part_to_dict(part: Part) -> dict[str, Any]:
    data: dict[str, Any] = {
        "part": part.part,
        "text": part.text,
        "callouts": [{"offset": c.offset, "value": c.value} for c in part.callouts],
    }
    if part.language:
        data["language"] = part.language
    return data


def to_dict(example: Example) -> dict[str, Any]:
    """
    将示例转换为渲染器使用的结构

    { name, title?, parts: [{ part, language?, text, callouts: [{offset, value}] }] }
    """
    data: dict[str, Any] = {"name": example.name}
    if example.title:
        data["title"] = example.title
    data["parts"] = [part_to_dict(part) for part in example.parts]
    return data


def render_plain(example: Example) -> str:
    """拼接所有片段的文本"""
    return example.text


def render_json(example: Example) -> str:
    return json.dumps(to_dict(example), indent=2, ensure_ascii=False)
