"""
exemplify - 从源码中提取带标记的文档示例

源码中使用注释标记示例区域：

    //##exemplify-start##{name="foo/bar" title="Example" part=1}
    ...
    //##exemplify-end##

扫描后按名称组装为多片段、可跨文件的示例，供文档渲染使用。
"""

__version__ = "0.1.0"

from exemplify.core import (
    Example,
    ExampleStore,
    ExtractionReport,
    ParserSettings,
    Part,
    ScanIssue,
    extract_examples,
    scan_file,
    scan_text,
)

__all__ = [
    "__version__",
    "Example",
    "ExampleStore",
    "ExtractionReport",
    "ParserSettings",
    "Part",
    "ScanIssue",
    "extract_examples",
    "scan_file",
    "scan_text",
]
