#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
A pure-Python library for decoding and writing gcov notes and data files.

The compiler's coverage instrumentation emits two binary artifacts per
compilation unit: a notes file (.gcno) describing each function's control-flow
graph and the source lines of every basic block, and a data file (.gcda) with
the runtime counters of the arcs that were directly instrumented. Both share
the same framing: a magic word, a version word, a timestamp, then a sequence of
(tag, length-in-words) records. Byte order is whichever of big- or
little-endian makes the first word equal the expected magic.

References:
 - gcov-io.h in the GCC sources

Example Usage:
    # Decoding a unit
    registry = gcov.SourceRegistry()
    functions = gcov.read_notes(notes_bytes, registry)
    gcov.read_data(data_bytes, functions)

    # Synthesizing a unit
    b = gcov.builder(version=gcov.GCOV_VERSION_9_1)
    f = b.add_function("main", "hello.c", line=3)
    f.add_blocks(3)
    f.add_arc(0, 1, flags=gcov.ARC_ON_TREE)
    f.add_arc(1, 2, count=1)
    f.add_lines(1, [4, 5])
    b.write("hello")  # hello.gcno, hello.gcda
"""

import dataclasses
import logging
import struct
from enum import IntEnum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

LOGGER = logging.getLogger("gcovtool")

# --- Constants ---
GCOV_NOTE_MAGIC = 0x67636E6F  # "gcno"
GCOV_DATA_MAGIC = 0x67636461  # "gcda"

# Version words are the release string packed into four ASCII bytes.
GCOV_VERSION_4_0_7 = 0x3430372A  # "407*", gcc 4.0.7
GCOV_VERSION_8_1 = 0x4138312A  # "A81*", gcc 8.1
GCOV_VERSION_9_0 = 0x4139302A  # "A90*", gcc 9.0
GCOV_VERSION_9_1 = 0x4139312A  # "A91*", gcc 9.1

ARC_ON_TREE = 1 << 0
ARC_FAKE = 1 << 1
ARC_FALLTHROUGH = 1 << 2

_WORD_SIZE = 4
_OLD_OBJECT_SUMMARY_WORDS = 6
_NEW_OBJECT_SUMMARY_WORDS = 2
_PROGRAM_SUMMARY_FIXED_WORDS = 3
# checksum, then num/runs and three 64-bit sums of a pre-9.0 summary
_OLD_SUMMARY_LENGTH = 9


class NotesTag(IntEnum):
    """Record tags understood in notes files."""

    FUNCTION = 0x01000000
    BLOCKS = 0x01410000
    ARCS = 0x01430000
    LINES = 0x01450000


class DataTag(IntEnum):
    """Record tags understood in data files."""

    FUNCTION = 0x01000000
    COUNTER_ARCS = 0x01A10000
    OBJECT_SUMMARY = 0xA1000000
    PROGRAM_SUMMARY = 0xA3000000


# --- Public API ---


class GcovError(Exception):
    """Base exception for gcov decoding errors."""

    pass


class MissingFileError(GcovError):
    """A notes or data buffer for a compilation unit could not be obtained."""

    pass


class UnsupportedFormatError(GcovError):
    """The leading word matches the expected magic in neither byte order."""

    pass


class ChecksumMismatchError(GcovError):
    """A data file function checksum disagrees with its notes file function."""

    pass


class ParsingError(GcovError):
    """A structural violation in a notes or data file."""

    pass


@dataclasses.dataclass(eq=False)
class Arc:
    """A control-flow edge between two blocks of the same function."""

    src: int  # index of the source block
    dst: int  # index of the destination block
    flags: int = 0
    count: int = 0
    resolved: bool = False

    @property
    def on_tree(self) -> bool:
        """Spanning-tree arcs are never measured; their count is derived."""
        return bool(self.flags & ARC_ON_TREE)

    @property
    def fake(self) -> bool:
        return bool(self.flags & ARC_FAKE)

    @property
    def fallthrough(self) -> bool:
        return bool(self.flags & ARC_FALLTHROUGH)


@dataclasses.dataclass(eq=False)
class Block:
    """A basic block and its solver state."""

    entry_arcs: List[Arc] = dataclasses.field(default_factory=list)
    exit_arcs: List[Arc] = dataclasses.field(default_factory=list)
    # line numbers, with a file switch encoded as 0 followed by a source index
    lines: List[int] = dataclasses.field(default_factory=list)
    pending_out: int = 0
    pending_in: int = 0
    count: int = 0
    count_valid: bool = False
    on_unresolved: bool = False
    on_resolved: bool = False
    call_site: bool = False

    def iter_lines(self) -> Iterator[Tuple[int, int]]:
        """Yields (source index, line number) pairs from the encoded line list."""
        source_index = None
        tokens = iter(self.lines)
        for token in tokens:
            if token == 0:
                source_index = next(tokens, None)
            elif source_index is not None:
                yield source_index, token


@dataclasses.dataclass(eq=False)
class Function:
    """A function's control-flow graph; owns its blocks."""

    ident: int
    checksum: int
    name: str
    source: str
    first_line: int
    blocks: List[Block] = dataclasses.field(default_factory=list)

    @property
    def arcs(self) -> List[Arc]:
        """All arcs in block order, in the order the data file counts them."""
        return [arc for block in self.blocks for arc in block.exit_arcs]

    def measured_arcs(self) -> List[Arc]:
        """Returns arcs that carry a counter in the data file."""
        return [arc for arc in self.arcs if not arc.on_tree]

    def unresolved_arcs(self) -> List[Arc]:
        return [arc for arc in self.arcs if not arc.resolved]


@dataclasses.dataclass(eq=False)
class Line:
    """Coverage state of one source line."""

    exists: bool = False
    count: int = 0
    # (function position, block index) of every block touching this line
    blocks: set = dataclasses.field(default_factory=set)


@dataclasses.dataclass(eq=False)
class SourceFile:
    """A source file referenced by one or more functions."""

    name: str
    index: int
    line_count: int = 1
    lines: List[Line] = dataclasses.field(default_factory=list)
    functions: List[Function] = dataclasses.field(default_factory=list)

    def extend_to(self, line_number: int) -> None:
        """Grows the known line bound so that ``line_number`` is addressable."""
        if line_number >= self.line_count:
            self.line_count = line_number + 1

    def add_function(self, function: Function) -> None:
        if function not in self.functions:
            self.functions.append(function)

    def reset_lines(self) -> None:
        """Allocates a fresh line table covering the known line bound."""
        self.lines = [Line() for _ in range(self.line_count)]


class SourceRegistry:
    """Source files keyed by exact name, in registration order."""

    def __init__(self):
        self.files: List[SourceFile] = []
        self._by_name: Dict[str, SourceFile] = {}

    def find_or_add(self, name: str) -> SourceFile:
        """Returns the file registered under ``name``, registering it if needed."""
        source = self._by_name.get(name)
        if source is None:
            source = SourceFile(name, len(self.files))
            self.files.append(source)
            self._by_name[name] = source
        return source

    def find(self, name: str) -> Optional[SourceFile]:
        return self._by_name.get(name)

    def __getitem__(self, index: int) -> SourceFile:
        return self.files[index]

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)


@dataclasses.dataclass
class CompilationUnit:
    """The notes and data buffers of one compilation unit."""

    name: str
    notes: Optional[bytes]
    data: Optional[bytes]


def version_tag(version: int) -> str:
    """Renders a version word as its four-character release tag, e.g. 'A91*'."""
    return struct.pack(">I", version).decode("latin-1")


# --- Parser Implementation ---


class _Cursor:
    """Reads words, counters and strings from a buffer at an advancing offset."""

    def __init__(self, buffer: bytes):
        self._buffer = bytes(buffer)
        self.offset = 0
        self.big_endian = True
        self._word = struct.Struct(">I")

    def set_big_endian(self, big_endian: bool) -> None:
        self.big_endian = big_endian
        self._word = struct.Struct(">I" if big_endian else "<I")

    def _take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self._buffer):
            raise EOFError(
                f"read of {size} bytes at offset {self.offset} runs past end of buffer"
            )
        chunk = self._buffer[self.offset : end]
        self.offset = end
        return chunk

    def read_word(self) -> int:
        return self._word.unpack(self._take(_WORD_SIZE))[0]

    def read_counter(self) -> int:
        # 64-bit counters are written low word first
        low = self.read_word()
        high = self.read_word()
        return (high << 32) | low

    def read_string(self) -> str:
        length = self.read_word() * _WORD_SIZE
        raw = self._take(length)
        return raw.rstrip(b"\0").decode("utf-8", errors="replace")

    def skip_words(self, count: int) -> None:
        if count > 0:
            self._take(count * _WORD_SIZE)

    def skip_to(self, offset: int) -> None:
        if offset > self.offset:
            self._take(offset - self.offset)


def _byteswap(word: int) -> int:
    return int.from_bytes(word.to_bytes(4, "big"), "little")


def _open_cursor(buffer: bytes, magic: int, kind: str) -> _Cursor:
    cursor = _Cursor(buffer)
    try:
        raw = cursor.read_word()
    except EOFError:
        raise UnsupportedFormatError(f"{kind} buffer is too short to hold a magic")
    if raw == magic:
        cursor.set_big_endian(True)
    elif _byteswap(raw) == magic:
        cursor.set_big_endian(False)
    else:
        raise UnsupportedFormatError(
            f"unsupported {kind} format: magic 0x{raw:08x} (expected 0x{magic:08x})"
        )
    LOGGER.debug(
        "%s buffer is %s-endian", kind, "big" if cursor.big_endian else "little"
    )
    return cursor


class _NotesParser:
    """Builds functions, blocks, arcs and line associations from a notes buffer."""

    def __init__(self, registry: SourceRegistry):
        self.registry = registry
        self.functions: List[Function] = []
        self.version = 0
        self._function: Optional[Function] = None
        self._source: Optional[SourceFile] = None
        self._handlers = {
            NotesTag.FUNCTION: self._read_function,
            NotesTag.BLOCKS: self._read_blocks,
            NotesTag.ARCS: self._read_arcs,
            NotesTag.LINES: self._read_lines,
        }

    def parse(self, buffer: bytes) -> List[Function]:
        cursor = _open_cursor(buffer, GCOV_NOTE_MAGIC, "notes")
        try:
            self.version = cursor.read_word()
            cursor.read_word()  # timestamp
            LOGGER.debug("notes version %s", version_tag(self.version))
            while True:
                tag = cursor.read_word()
                handler = self._handlers.get(tag)
                if handler is None:
                    # header extras and unknown records are scanned past
                    continue
                length = cursor.read_word()
                handler(cursor, length)
        except EOFError:
            pass
        self._finish_function()
        return self.functions

    def _finish_function(self) -> None:
        if self._function is not None:
            self.functions.append(self._function)
            self._function = None

    def _current_function(self, record: str) -> Function:
        if self._function is None:
            raise ParsingError(f"{record} record outside of a function")
        return self._function

    def _block(self, function: Function, index: int) -> Block:
        if index >= len(function.blocks):
            raise ParsingError(
                f"block {index} out of range in function {function.name!r} "
                f"({len(function.blocks)} blocks)"
            )
        return function.blocks[index]

    def _read_function(self, cursor: _Cursor, length: int) -> None:
        self._finish_function()
        ident = cursor.read_word()
        checksum = cursor.read_word()
        if self.version >= GCOV_VERSION_4_0_7:
            cursor.read_word()  # cfg checksum
        name = cursor.read_string()
        if self.version >= GCOV_VERSION_8_1:
            cursor.read_word()  # artificial
        source_name = cursor.read_string()
        first_line = cursor.read_word()
        if self.version >= GCOV_VERSION_8_1:
            cursor.skip_words(2)  # start column, end line
        if self.version >= GCOV_VERSION_9_1:
            cursor.read_word()  # end column

        function = Function(ident, checksum, name, source_name, first_line)
        source = self.registry.find_or_add(source_name)
        source.extend_to(first_line)
        source.add_function(function)
        self._function = function
        LOGGER.debug("function %r (0x%x) in %s:%d", name, ident, source_name, first_line)

    def _read_blocks(self, cursor: _Cursor, length: int) -> None:
        function = self._current_function("blocks")
        if self.version >= GCOV_VERSION_8_1:
            count = cursor.read_word()
        else:
            count = length
            cursor.skip_words(count)  # per-block flags
        function.blocks = [Block() for _ in range(count)]

    def _read_arcs(self, cursor: _Cursor, length: int) -> None:
        function = self._current_function("arcs")
        src = cursor.read_word()
        block = self._block(function, src)
        for _ in range((length - 1) // 2):
            dst = cursor.read_word()
            flags = cursor.read_word()
            target = self._block(function, dst)
            arc = Arc(src, dst, flags)
            block.exit_arcs.append(arc)
            block.pending_out += 1
            target.entry_arcs.append(arc)
            target.pending_in += 1
            if arc.fake:
                block.call_site = True

    def _read_lines(self, cursor: _Cursor, length: int) -> None:
        function = self._current_function("lines")
        block = self._block(function, cursor.read_word())
        emitted = None
        while True:
            line_number = cursor.read_word()
            if line_number == 0:
                name = cursor.read_string()
                if not name:
                    break
                self._source = self.registry.find_or_add(name)
                continue
            if self._source is None:
                raise ParsingError(
                    f"line {line_number} in function {function.name!r} "
                    "precedes any source file"
                )
            if emitted is not self._source:
                block.lines.extend((0, self._source.index))
                emitted = self._source
            block.lines.append(line_number)
            self._source.extend_to(line_number)


class _DataParser:
    """Attaches measured arc counters from a data buffer to decoded functions."""

    def __init__(self, functions: Sequence[Function]):
        self.functions = functions
        self.version = 0
        self._by_ident: Dict[int, Function] = {}
        for function in functions:
            self._by_ident.setdefault(function.ident, function)
        self._function: Optional[Function] = None
        self._unmatched = False
        self._handlers = {
            DataTag.FUNCTION: self._read_function,
            DataTag.COUNTER_ARCS: self._read_arc_counters,
            DataTag.OBJECT_SUMMARY: self._read_object_summary,
            DataTag.PROGRAM_SUMMARY: self._read_program_summary,
        }

    def parse(self, buffer: bytes) -> None:
        cursor = _open_cursor(buffer, GCOV_DATA_MAGIC, "data")
        try:
            self.version = cursor.read_word()
            cursor.read_word()  # timestamp
            LOGGER.debug("data version %s", version_tag(self.version))
            while True:
                tag = cursor.read_word()
                if tag == 0:
                    continue
                length = cursor.read_word()
                end = cursor.offset + length * _WORD_SIZE
                handler = self._handlers.get(tag)
                if handler is not None:
                    handler(cursor, length)
                cursor.skip_to(end)
        except EOFError:
            pass

    def _read_function(self, cursor: _Cursor, length: int) -> None:
        ident = cursor.read_word()
        function = self._by_ident.get(ident)
        self._function = function
        if function is None:
            # checksum words are skipped with the rest of the record
            LOGGER.warning("data file function 0x%x has no notes counterpart", ident)
            self._unmatched = True
            return
        self._unmatched = False
        checksum = cursor.read_word()
        if checksum != function.checksum:
            raise ChecksumMismatchError(
                f"checksum mismatch for function {function.name!r}: "
                f"notes 0x{function.checksum:08x}, data 0x{checksum:08x}"
            )
        if self.version >= GCOV_VERSION_4_0_7:
            cursor.read_word()  # cfg checksum

    def _read_arc_counters(self, cursor: _Cursor, length: int) -> None:
        function = self._function
        if function is None:
            if self._unmatched:
                LOGGER.warning("skipping arc counters of an unmatched function")
                self._unmatched = False
                return
            raise ParsingError("arc counters record without a preceding function")
        if not function.blocks:
            raise ParsingError(f"arc counters for function {function.name!r} without blocks")

        for block in function.blocks:
            for arc in block.exit_arcs:
                if arc.on_tree:
                    continue
                arc.count = cursor.read_counter()
                arc.resolved = True
                block.pending_out -= 1
                function.blocks[arc.dst].pending_in -= 1
        self._function = None

    def _read_object_summary(self, cursor: _Cursor, length: int) -> None:
        if self.version >= GCOV_VERSION_9_0:
            cursor.skip_words(_NEW_OBJECT_SUMMARY_WORDS)
        else:
            cursor.skip_words(_OLD_OBJECT_SUMMARY_WORDS)

    def _read_program_summary(self, cursor: _Cursor, length: int) -> None:
        cursor.skip_words(_PROGRAM_SUMMARY_FIXED_WORDS)
        cursor.skip_words(length - _PROGRAM_SUMMARY_FIXED_WORDS)


# --- Writer Implementation ---


class _RecordWriter:
    def __init__(self, big_endian: bool):
        self.big_endian = big_endian
        self._word = struct.Struct(">I" if big_endian else "<I")
        self._chunks: List[bytes] = []
        self._size = 0

    def _append(self, chunk: bytes) -> None:
        self._chunks.append(chunk)
        self._size += len(chunk)

    def word(self, value: int) -> None:
        self._append(self._word.pack(value & 0xFFFFFFFF))

    def counter(self, value: int) -> None:
        self.word(value & 0xFFFFFFFF)
        self.word(value >> 32)

    def string(self, text: str) -> None:
        if not text:
            self.word(0)
            return
        raw = text.encode("utf-8")
        # always terminated by at least one NUL
        padded = (len(raw) // _WORD_SIZE + 1) * _WORD_SIZE
        self.word(padded // _WORD_SIZE)
        self._append(raw.ljust(padded, b"\0"))

    def record(self, tag: int, payload: "_RecordWriter") -> None:
        self.word(tag)
        self.word(len(payload) // _WORD_SIZE)
        self._append(payload.getvalue())

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)

    def __len__(self) -> int:
        return self._size


class FunctionBuilder:
    """Accumulates one function's graph, lines and arc counts."""

    def __init__(
        self, ident: int, checksum: int, name: str, source: str, line: int
    ):
        self.ident = ident
        self.checksum = checksum
        self.name = name
        self.source = source
        self.line = line
        self.block_count = 0
        self.arcs: List[Tuple[int, int, int, int]] = []
        self.lines: Dict[int, List[Tuple[str, List[int]]]] = {}

    def add_blocks(self, count: int) -> "FunctionBuilder":
        self.block_count += count
        return self

    def add_arc(self, src: int, dst: int, flags: int = 0, count: int = 0) -> "FunctionBuilder":
        """Adds an arc; ``count`` is written to the data file unless on tree."""
        for index in (src, dst):
            if not 0 <= index < self.block_count:
                raise ValueError(
                    f"block {index} out of range ({self.block_count} blocks)"
                )
        self.arcs.append((src, dst, flags, count))
        return self

    def add_lines(
        self, block: int, lines: Sequence[int], source: Optional[str] = None
    ) -> "FunctionBuilder":
        """Attributes ``lines`` of ``source`` (default: the function's file) to a block."""
        if not 0 <= block < self.block_count:
            raise ValueError(f"block {block} out of range ({self.block_count} blocks)")
        if any(line <= 0 for line in lines):
            raise ValueError("line numbers must be positive")
        self.lines.setdefault(block, []).append((source or self.source, list(lines)))
        return self

    def ordered_arcs(self) -> List[Tuple[int, int, int, int]]:
        """Arcs grouped by source block, as the decoder lists them."""
        return sorted(self.arcs, key=lambda arc: arc[0])


class GcovBuilder:
    """A builder for synthesizing matching notes and data buffers."""

    def __init__(
        self,
        version: int = GCOV_VERSION_9_1,
        big_endian: bool = False,
        stamp: int = 0,
        cwd: Optional[str] = None,
    ):
        self.version = version
        self.big_endian = big_endian
        self.stamp = stamp
        self.cwd = cwd
        self.functions: List[FunctionBuilder] = []

    def add_function(
        self,
        name: str,
        source: str,
        line: int,
        ident: Optional[int] = None,
        checksum: int = 0,
    ) -> FunctionBuilder:
        if ident is None:
            ident = len(self.functions) + 1
        function = FunctionBuilder(ident, checksum, name, source, line)
        self.functions.append(function)
        return function

    def notes_bytes(self) -> bytes:
        out = _RecordWriter(self.big_endian)
        out.word(GCOV_NOTE_MAGIC)
        out.word(self.version)
        out.word(self.stamp)
        if self.cwd:
            out.string(self.cwd)

        for function in self.functions:
            out.record(NotesTag.FUNCTION, self._function_record(function))
            out.record(NotesTag.BLOCKS, self._blocks_record(function))

            by_source: Dict[int, List[Tuple[int, int]]] = {}
            for src, dst, flags, _ in function.ordered_arcs():
                by_source.setdefault(src, []).append((dst, flags))
            for src, arcs in by_source.items():
                rec = _RecordWriter(self.big_endian)
                rec.word(src)
                for dst, flags in arcs:
                    rec.word(dst)
                    rec.word(flags)
                out.record(NotesTag.ARCS, rec)

            for block in sorted(function.lines):
                rec = _RecordWriter(self.big_endian)
                rec.word(block)
                current = None
                for source, numbers in function.lines[block]:
                    if source != current:
                        rec.word(0)
                        rec.string(source)
                        current = source
                    for number in numbers:
                        rec.word(number)
                rec.word(0)
                rec.string("")
                out.record(NotesTag.LINES, rec)
        return out.getvalue()

    def _function_record(self, function: FunctionBuilder) -> _RecordWriter:
        rec = _RecordWriter(self.big_endian)
        rec.word(function.ident)
        rec.word(function.checksum)
        if self.version >= GCOV_VERSION_4_0_7:
            rec.word(0)  # cfg checksum
        rec.string(function.name)
        if self.version >= GCOV_VERSION_8_1:
            rec.word(0)  # artificial
        rec.string(function.source)
        rec.word(function.line)
        if self.version >= GCOV_VERSION_8_1:
            rec.word(0)  # start column
            rec.word(function.line)  # end line
        if self.version >= GCOV_VERSION_9_1:
            rec.word(0)  # end column
        return rec

    def _blocks_record(self, function: FunctionBuilder) -> _RecordWriter:
        rec = _RecordWriter(self.big_endian)
        if self.version >= GCOV_VERSION_8_1:
            rec.word(function.block_count)
        else:
            for _ in range(function.block_count):
                rec.word(0)  # block flags
        return rec

    def data_bytes(self) -> bytes:
        out = _RecordWriter(self.big_endian)
        out.word(GCOV_DATA_MAGIC)
        out.word(self.version)
        out.word(self.stamp)

        max_count = 0
        for function in self.functions:
            rec = _RecordWriter(self.big_endian)
            rec.word(function.ident)
            rec.word(function.checksum)
            if self.version >= GCOV_VERSION_4_0_7:
                rec.word(0)  # cfg checksum
            out.record(DataTag.FUNCTION, rec)

            rec = _RecordWriter(self.big_endian)
            for _, _, flags, count in function.ordered_arcs():
                if flags & ARC_ON_TREE:
                    continue
                rec.counter(count)
                max_count = max(max_count, count)
            out.record(DataTag.COUNTER_ARCS, rec)

        if self.version >= GCOV_VERSION_9_0:
            rec = _RecordWriter(self.big_endian)
            rec.word(1)  # runs
            rec.word(max_count & 0xFFFFFFFF)  # sum_max
            out.record(DataTag.OBJECT_SUMMARY, rec)
        else:
            for tag in (DataTag.OBJECT_SUMMARY, DataTag.PROGRAM_SUMMARY):
                rec = _RecordWriter(self.big_endian)
                for _ in range(_OLD_SUMMARY_LENGTH):
                    rec.word(0)
                out.record(tag, rec)
        return out.getvalue()

    def unit(self, name: str = "") -> CompilationUnit:
        return CompilationUnit(name, self.notes_bytes(), self.data_bytes())

    def write(self, base_path: Union[str, Path]) -> Tuple[Path, Path]:
        """Writes ``<base>.gcno`` and ``<base>.gcda``; returns both paths."""
        notes_path = Path(f"{base_path}.gcno")
        data_path = Path(f"{base_path}.gcda")
        notes_path.write_bytes(self.notes_bytes())
        data_path.write_bytes(self.data_bytes())
        return notes_path, data_path


# --- Public API Functions ---


def read_notes(
    buffer: bytes, registry: Optional[SourceRegistry] = None
) -> List[Function]:
    """
    Decodes a notes buffer into functions.

    Args:
        buffer: Raw bytes of a .gcno file.
        registry: Source registry shared across the units of one parse; a fresh
            one is used when omitted.

    Returns:
        The functions in file order, with blocks, arcs and line associations.

    Raises:
        UnsupportedFormatError: If the magic matches in neither byte order.
        ParsingError: If a record references a block or file that does not exist.
    """
    if registry is None:
        registry = SourceRegistry()
    return _NotesParser(registry).parse(buffer)


def read_data(buffer: bytes, functions: Sequence[Function]) -> None:
    """
    Attaches the arc counters of a data buffer to ``functions`` in place.

    Raises:
        UnsupportedFormatError: If the magic matches in neither byte order.
        ChecksumMismatchError: If a function checksum disagrees with the notes.
        ParsingError: If counters appear without a selected function.
    """
    _DataParser(functions).parse(buffer)


def builder(
    version: int = GCOV_VERSION_9_1,
    big_endian: bool = False,
    stamp: int = 0,
    cwd: Optional[str] = None,
) -> GcovBuilder:
    """Returns a new GcovBuilder for synthesizing notes and data buffers."""
    return GcovBuilder(version=version, big_endian=big_endian, stamp=stamp, cwd=cwd)
