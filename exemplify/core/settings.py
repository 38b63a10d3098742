"""
解析配置

标记 token 可配置，默认值与源码中常用的写法一致。
"""

from dataclasses import dataclass


# ============================================================
# 配置常量
# ============================================================

DEFAULT_START_TOKEN = "##exemplify-start##"
DEFAULT_END_TOKEN = "##exemplify-end##"
DEFAULT_CALLOUT_TOKEN = "##callout##"

# 默认扫描的源文件扩展名
DEFAULT_EXTENSIONS: list[str] = [
    ".ts", ".tsx", ".js", ".jsx", ".mjs",
    ".py", ".rs", ".go", ".java", ".kt", ".scala",
    ".c", ".h", ".cpp", ".hpp", ".cs", ".swift",
    ".rb", ".php", ".sh", ".sql",
]


@dataclass(frozen=True)
class ParserSettings:
    """
    标记解析配置

    Attributes:
        start_token: 区域开始标记
        end_token: 区域结束标记
        callout_token: 行注解标记
    """
    start_token: str = DEFAULT_START_TOKEN
    end_token: str = DEFAULT_END_TOKEN
    callout_token: str = DEFAULT_CALLOUT_TOKEN

    def __post_init__(self) -> None:
        tokens = self.tokens
        if any(not token for token in tokens):
            raise ValueError("Marker tokens must not be empty")
        if len(set(tokens)) != len(tokens):
            raise ValueError("Marker tokens must be distinct")

    @property
    def tokens(self) -> tuple[str, str, str]:
        return (self.start_token, self.end_token, self.callout_token)


DEFAULT_SETTINGS = ParserSettings()
