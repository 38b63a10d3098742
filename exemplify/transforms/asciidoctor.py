"""
Asciidoctor 输出 - 将示例渲染为带标题、语言和注解的源码块

输出格式：
    .标题
    [source,语言]
    ----
    代码行 // <1>
    ----
    <1> 注解内容
"""

from exemplify.core.models import Example


def _callout_suffix(numbers: list[int], comment: str | None) -> str:
    marks = " ".join(f"<{n}>" for n in numbers)
    if comment in ("//", "#", "--"):
        return f" {comment} {marks}"
    if comment == "/*":
        return f" /* {marks} */"
    return f" {marks}"


def render_asciidoc(example: Example) -> str:
    """渲染单个示例"""
    lines: list[str] = []

    if example.title:
        lines.append(f".{example.title}")

    language = example.language
    lines.append(f"[source,{language}]" if language else "[source]")
    lines.append("----")

    callouts = example.callouts
    by_line: dict[int, list[int]] = {}
    comments: dict[int, str | None] = {}
    for number, callout in enumerate(callouts, 1):
        by_line.setdefault(callout.offset, []).append(number)
        comments.setdefault(callout.offset, callout.comment)

    for offset, line in enumerate(example.lines):
        if offset in by_line:
            line = line + _callout_suffix(by_line[offset], comments[offset])
        lines.append(line)

    lines.append("----")

    for number, callout in enumerate(callouts, 1):
        lines.append(f"<{number}> {callout.value}")

    return "\n".join(lines) + "\n"
