"""gcovtool - reconstruct line coverage from gcov notes and data files"""

from .gcov import (
    ARC_ON_TREE,
    ARC_FAKE,
    ARC_FALLTHROUGH,
    GCOV_VERSION_4_0_7,
    GCOV_VERSION_8_1,
    GCOV_VERSION_9_0,
    GCOV_VERSION_9_1,
    read_notes,
    read_data,
    builder,
    Arc,
    Block,
    Function,
    Line,
    SourceFile,
    SourceRegistry,
    CompilationUnit,
    GcovBuilder,
    GcovError,
    MissingFileError,
    UnsupportedFormatError,
    ChecksumMismatchError,
    ParsingError,
)
from .solver import solve_function
from .core import (
    parse,
    parse_files,
    load_unit,
    CoverageReport,
    FileCoverage,
    LineCoverage,
)

__all__ = [
    "ARC_ON_TREE",
    "ARC_FAKE",
    "ARC_FALLTHROUGH",
    "GCOV_VERSION_4_0_7",
    "GCOV_VERSION_8_1",
    "GCOV_VERSION_9_0",
    "GCOV_VERSION_9_1",
    "read_notes",
    "read_data",
    "builder",
    "Arc",
    "Block",
    "Function",
    "Line",
    "SourceFile",
    "SourceRegistry",
    "CompilationUnit",
    "GcovBuilder",
    "GcovError",
    "MissingFileError",
    "UnsupportedFormatError",
    "ChecksumMismatchError",
    "ParsingError",
    "solve_function",
    "parse",
    "parse_files",
    "load_unit",
    "CoverageReport",
    "FileCoverage",
    "LineCoverage",
]
