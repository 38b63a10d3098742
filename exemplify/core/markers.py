"""
标记解析器模块 - 识别源码行中的标记注释并解析属性块

支持三种标记：
1. 开始标记：##exemplify-start##{name="foo" part=1}
2. 结束标记：##exemplify-end##
3. 行注解：code(); // ##callout##{value="说明"}

属性块语法：
    block := '{' (pair (',' | 空白)*)* '}'
    pair  := key ('=' | ':') value
    value := 裸 token (字母、数字、-、_、/) | 双引号字符串

属性块由一个小型词法器 + 递归下降解析器处理，错误以 MarkerError 抛出。
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from exemplify.core.errors import InvalidNumericAttribute, MalformedAttributeBlock
from exemplify.core.models import Marker, MarkerKind
from exemplify.core.settings import DEFAULT_SETTINGS, ParserSettings


# ============================================================
# 词法定义
# ============================================================

_TOKEN_PATTERNS = [
    ("STRING", r'"(?:[^"\\]|\\.)*"'),
    ("BARE", r"[A-Za-z0-9_\-/]+"),
    ("ASSIGN", r"[=:]"),
    ("COMMA", r","),
    ("LBRACE", r"\{"),
    ("RBRACE", r"\}"),
    ("WS", r"\s+"),
    ("QUOTE", r'"'),
    ("MISMATCH", r"."),
]

_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS))

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")

_ESCAPE_RE = re.compile(r"\\(.)")

# 数值属性：键 -> 最小值
NUMERIC_ATTRIBUTES: dict[str, int] = {
    "part": 1,
    "indentation": 0,
}


@dataclass
class _Token:
    kind: str
    text: str
    column: int


def _tokenize(line: str, pos: int) -> Iterator[_Token]:
    """惰性产生 token，跳过空白；解析器读到 '}' 后不再消费后续文本"""
    while pos < len(line):
        match = _TOKEN_RE.match(line, pos)
        if match is None:
            break
        kind = match.lastgroup or "MISMATCH"
        if kind != "WS":
            yield _Token(kind, match.group(), pos)
        pos = match.end()
    yield _Token("EOF", "", pos)


class _AttributeParser:
    """属性块的递归下降解析器"""

    def __init__(self, line: str, pos: int):
        self._tokens = _tokenize(line, pos)
        self._current = next(self._tokens)

    def _advance(self) -> _Token:
        token = self._current
        if token.kind != "EOF":
            self._current = next(self._tokens)
        return token

    def _expect(self, kind: str, what: str) -> _Token:
        token = self._current
        if token.kind != kind:
            found = token.text or "end of line"
            raise MalformedAttributeBlock(f"Expected {what} but found '{found}'", token.column)
        return self._advance()

    def parse_block(self) -> tuple[dict[str, str], int]:
        """解析完整属性块，返回 (属性, 块结束列)"""
        self._expect("LBRACE", "'{'")
        attributes: dict[str, str] = {}

        while True:
            token = self._current
            if token.kind == "RBRACE":
                self._advance()
                return attributes, token.column + 1
            if token.kind == "COMMA":
                self._advance()
                continue
            if token.kind == "EOF":
                raise MalformedAttributeBlock("Unterminated attribute block, missing '}'", token.column)

            key, value = self._parse_pair()
            if key in attributes:
                raise MalformedAttributeBlock(f"Duplicate attribute '{key}'", token.column)
            attributes[key] = value

    def _parse_pair(self) -> tuple[str, str]:
        key_token = self._current
        if key_token.kind != "BARE" or not _KEY_RE.match(key_token.text):
            found = key_token.text or "end of line"
            raise MalformedAttributeBlock(f"Expected attribute name but found '{found}'", key_token.column)
        self._advance()
        self._expect("ASSIGN", "'=' or ':'")
        return key_token.text, self._parse_value()

    def _parse_value(self) -> str:
        token = self._current
        if token.kind == "STRING":
            self._advance()
            return _ESCAPE_RE.sub(r"\1", token.text[1:-1])
        if token.kind == "BARE":
            self._advance()
            return token.text
        if token.kind == "QUOTE":
            raise MalformedAttributeBlock("Unterminated string value", token.column)
        found = token.text or "end of line"
        raise MalformedAttributeBlock(f"Expected attribute value but found '{found}'", token.column)


def parse_attribute_block(line: str, pos: int = 0) -> tuple[dict[str, str], int]:
    """
    从 pos 开始解析属性块

    Args:
        line: 源码行
        pos: 属性块开始位置（允许前导空白）

    Returns:
        (属性字典, 块结束位置) 元组

    Raises:
        MalformedAttributeBlock: 语法错误
        InvalidNumericAttribute: part / indentation 不是合法整数
    """
    attributes, end = _AttributeParser(line, pos).parse_block()
    _validate_numeric(attributes, pos)
    return attributes, end


def _validate_numeric(attributes: dict[str, str], column: int) -> None:
    for key, minimum in NUMERIC_ATTRIBUTES.items():
        raw = attributes.get(key)
        if raw is None:
            continue
        expected = "a positive integer" if minimum > 0 else "a non-negative integer"
        if not (raw.isascii() and raw.isdigit()) or int(raw) < minimum:
            raise InvalidNumericAttribute(key, raw, column, expected)


def find_marker_token(line: str, settings: ParserSettings = DEFAULT_SETTINGS) -> Optional[tuple[MarkerKind, int]]:
    """查找行内最先出现的标记 token，返回 (类型, 列)"""
    found: Optional[tuple[MarkerKind, int]] = None
    candidates = (
        (MarkerKind.START, settings.start_token),
        (MarkerKind.END, settings.end_token),
        (MarkerKind.CALLOUT, settings.callout_token),
    )
    for kind, token in candidates:
        index = line.find(token)
        if index >= 0 and (found is None or index < found[1]):
            found = (kind, index)
    return found


def parse_marker_line(
    line: str,
    settings: ParserSettings = DEFAULT_SETTINGS,
    line_number: int = 0,
) -> Optional[Marker]:
    """
    判断一行源码是否包含标记

    Args:
        line: 源码行（不含换行符）
        settings: 标记 token 配置
        line_number: 行号，写入返回的 Marker

    Returns:
        Marker 对象；普通源码行返回 None

    Raises:
        MarkerError: 标记存在但属性块非法
    """
    located = find_marker_token(line, settings)
    if located is None:
        return None

    kind, column = located

    if kind is MarkerKind.END:
        return Marker(
            kind=kind,
            column=column,
            end_column=column + len(settings.end_token),
            line_number=line_number,
        )

    token = settings.start_token if kind is MarkerKind.START else settings.callout_token
    attributes, end_column = parse_attribute_block(line, column + len(token))

    if kind is MarkerKind.CALLOUT and "value" not in attributes:
        raise MalformedAttributeBlock("Callout marker requires a 'value' attribute", column)

    return Marker(
        kind=kind,
        attributes=attributes,
        column=column,
        end_column=end_column,
        line_number=line_number,
    )
