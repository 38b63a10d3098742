"""
标记解析异常

解析器以异常报告单个标记的错误，区域追踪器捕获后转换为 ScanIssue，
不会中断整个文件的扫描。
"""

from exemplify.core.models import IssueCode


class MarkerError(Exception):
    """标记解析错误基类"""

    code: IssueCode = IssueCode.MALFORMED_ATTRIBUTE_BLOCK

    def __init__(self, message: str, column: int = 0):
        super().__init__(message)
        self.message = message
        self.column = column


class MalformedAttributeBlock(MarkerError):
    """属性块语法错误"""

    code = IssueCode.MALFORMED_ATTRIBUTE_BLOCK


class InvalidNumericAttribute(MarkerError):
    """part / indentation 不是合法的整数"""

    code = IssueCode.INVALID_NUMERIC_ATTRIBUTE

    def __init__(self, key: str, value: str, column: int = 0, expected: str = "a non-negative integer"):
        super().__init__(f"Attribute '{key}' must be {expected}, got '{value}'", column)
        self.key = key
        self.value = value


class MissingNameOnStart(MarkerError):
    """Start 标记缺少 name 且没有可延续的示例"""

    code = IssueCode.MISSING_NAME_ON_START


class DuplicateExampleError(ValueError):
    """同一扫描轮次内重复写入同名示例"""

    def __init__(self, name: str):
        super().__init__(f"Example '{name}' was already stored in this scan pass")
        self.name = name
