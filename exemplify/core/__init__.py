"""
Core Layer - 核心层

包含标记解析器、区域追踪器、示例组装器和示例存储。
"""

from exemplify.core.settings import (
    ParserSettings,
    DEFAULT_SETTINGS,
    DEFAULT_EXTENSIONS,
)
from exemplify.core.models import (
    MarkerKind,
    Marker,
    SourceLocation,
    Callout,
    Region,
    Part,
    Example,
    IssueCode,
    ScanIssue,
    FileScanResult,
)
from exemplify.core.errors import (
    MarkerError,
    MalformedAttributeBlock,
    InvalidNumericAttribute,
    MissingNameOnStart,
    DuplicateExampleError,
)
from exemplify.core.markers import (
    parse_marker_line,
    parse_attribute_block,
)
from exemplify.core.regions import (
    RegionTracker,
    track_regions,
)
from exemplify.core.assembler import (
    AssemblyResult,
    assemble_examples,
    strip_indentation,
)
from exemplify.core.store import ExampleStore
from exemplify.core.scanner import (
    ExtractionReport,
    scan_text,
    scan_file,
    scan_files,
    extract_examples,
)

__all__ = [
    # settings
    "ParserSettings",
    "DEFAULT_SETTINGS",
    "DEFAULT_EXTENSIONS",
    # models
    "MarkerKind",
    "Marker",
    "SourceLocation",
    "Callout",
    "Region",
    "Part",
    "Example",
    "IssueCode",
    "ScanIssue",
    "FileScanResult",
    # errors
    "MarkerError",
    "MalformedAttributeBlock",
    "InvalidNumericAttribute",
    "MissingNameOnStart",
    "DuplicateExampleError",
    # markers
    "parse_marker_line",
    "parse_attribute_block",
    # regions
    "RegionTracker",
    "track_regions",
    # assembler
    "AssemblyResult",
    "assemble_examples",
    "strip_indentation",
    # store
    "ExampleStore",
    # scanner
    "ExtractionReport",
    "scan_text",
    "scan_file",
    "scan_files",
    "extract_examples",
]
