"""high-level reconstruction of per-line coverage from gcov notes and data"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .gcov import (
    CompilationUnit,
    Function,
    Line,
    MissingFileError,
    ParsingError,
    SourceRegistry,
    read_data,
    read_notes,
)
from .solver import solve_function

LOGGER = logging.getLogger("gcovtool")

NOTES_SUFFIX = ".gcno"
DATA_SUFFIX = ".gcda"

UnitLike = Union[CompilationUnit, Tuple[Optional[bytes], Optional[bytes]]]


@dataclass(frozen=True)
class LineCoverage:
    """execution status of one instrumented source line"""

    line: int
    executed: bool
    count: int = 0


@dataclass
class FileCoverage:
    """coverage summary of one source file"""

    file: str
    instrumented: int
    executed: int
    lines: List[LineCoverage] = field(default_factory=list)

    @property
    def percent(self) -> float:
        if not self.instrumented:
            return 0.0
        return self.executed / self.instrumented * 100

    def find_line(self, number: int) -> Optional[LineCoverage]:
        return next((line for line in self.lines if line.line == number), None)


def collect_lines(functions: Sequence[Function], registry: SourceRegistry) -> None:
    """
    mark-and-collect pass: flag every line some block touches and record
    which blocks touch it
    """
    for source in registry:
        source.reset_lines()

    for position, function in enumerate(functions):
        for block_index, block in enumerate(function.blocks):
            for source_index, line_number in block.iter_lines():
                line = registry[source_index].lines[line_number]
                line.exists = True
                line.blocks.add((position, block_index))


def accumulate_counts(functions: Sequence[Function], registry: SourceRegistry) -> None:
    """
    count-accumulation pass: a line owned by a single block takes that block's
    count (once per visit); a line shared by several blocks takes only the flow
    entering the group from outside it
    """
    shared: Dict[Tuple[int, int], Line] = {}

    for function in functions:
        for block in function.blocks:
            for source_index, line_number in block.iter_lines():
                line = registry[source_index].lines[line_number]
                if len(line.blocks) == 1:
                    line.count += block.count
                else:
                    shared[(source_index, line_number)] = line

    for line in shared.values():
        line.count = _external_inflow(functions, line)


def _external_inflow(functions: Sequence[Function], line: Line) -> int:
    total = 0
    for position, block_index in line.blocks:
        block = functions[position].blocks[block_index]
        for arc in block.entry_arcs:
            if (position, arc.src) not in line.blocks:
                total += arc.count
    return total


def summarize(registry: SourceRegistry) -> List[FileCoverage]:
    """build one summary per registered file, in registration order"""
    summaries = []
    for source in registry:
        lines = [
            LineCoverage(number, line.count > 0, line.count)
            for number, line in enumerate(source.lines)
            if line.exists
        ]
        executed = sum(1 for line in lines if line.executed)
        summaries.append(FileCoverage(source.name, len(lines), executed, lines))
    return summaries


def _as_unit(unit: UnitLike, position: int) -> CompilationUnit:
    if isinstance(unit, CompilationUnit):
        return unit
    notes, data = unit
    return CompilationUnit(f"unit {position}", notes, data)


class CoverageReport:
    """
    coverage of one or more compilation units sharing a source registry
    keeps the decoded functions around for inspection
    """

    def __init__(
        self,
        files: List[FileCoverage],
        functions: Optional[List[Function]] = None,
    ):
        self.files = files
        self.functions = functions or []

    @classmethod
    def from_units(cls, units: Iterable[UnitLike]) -> "CoverageReport":
        """decode, solve and aggregate a sequence of compilation units"""
        registry = SourceRegistry()
        functions: List[Function] = []

        for position, unit in enumerate(units):
            unit = _as_unit(unit, position)
            if unit.notes is None:
                raise MissingFileError(f"no notes buffer for {unit.name}")
            unit_functions = read_notes(unit.notes, registry)
            if unit.data is None:
                raise MissingFileError(f"no data buffer for {unit.name}")
            if not unit_functions:
                raise ParsingError(f"no functions in notes for {unit.name}")
            read_data(unit.data, unit_functions)
            LOGGER.debug("%s: %d functions", unit.name, len(unit_functions))
            functions.extend(unit_functions)

        for function in functions:
            solve_function(function)
        collect_lines(functions, registry)
        accumulate_counts(functions, registry)
        return cls(summarize(registry), functions)

    @classmethod
    def from_files(cls, paths: Iterable[Union[str, Path]]) -> "CoverageReport":
        """create a report from notes/data file pairs on disk"""
        return cls.from_units([load_unit(path) for path in paths])

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[FileCoverage]:
        return iter(self.files)

    def find(self, name: str) -> Optional[FileCoverage]:
        return next((f for f in self.files if f.file == name), None)

    def filter_by_file(self, file_filter: str) -> "CoverageReport":
        """return a report restricted to files whose name contains the filter"""
        matching = [f for f in self.files if file_filter.lower() in f.file.lower()]
        return CoverageReport(matching, self.functions)

    @property
    def instrumented(self) -> int:
        return sum(f.instrumented for f in self.files)

    @property
    def executed(self) -> int:
        return sum(f.executed for f in self.files)

    def records(self) -> List[Dict[str, object]]:
        """flat {file, line, executed} records in report order"""
        return [
            {"file": f.file, "line": line.line, "executed": line.executed}
            for f in self.files
            for line in f.lines
        ]


def unit_paths(path: Union[str, Path]) -> Tuple[Path, Path]:
    """notes and data paths for a base path, with or without either suffix"""
    base = str(path)
    for suffix in (NOTES_SUFFIX, DATA_SUFFIX):
        if base.endswith(suffix):
            base = base[: -len(suffix)]
            break
    return Path(base + NOTES_SUFFIX), Path(base + DATA_SUFFIX)


def load_unit(path: Union[str, Path]) -> CompilationUnit:
    """read the notes/data pair of one compilation unit from disk"""
    notes_path, data_path = unit_paths(path)
    for required in (notes_path, data_path):
        if not required.is_file():
            raise MissingFileError(f"file not found: {required}")
    return CompilationUnit(
        str(notes_path.with_suffix("")),
        notes_path.read_bytes(),
        data_path.read_bytes(),
    )


def parse(units: Iterable[UnitLike]) -> List[FileCoverage]:
    """
    reconstruct per-line coverage for a sequence of compilation units

    each unit is a CompilationUnit or a (notes bytes, data bytes) pair.
    source files named identically in several units are merged. returns one
    FileCoverage per source file in the order files were first seen.
    """
    return CoverageReport.from_units(units).files


def parse_files(paths: Iterable[Union[str, Path]]) -> List[FileCoverage]:
    """like parse(), reading ``<path>.gcno`` and ``<path>.gcda`` for each path"""
    return CoverageReport.from_files(paths).files
