"""shared fixtures for synthesizing compilation units"""

import pytest

from gcovtool.gcov import ARC_ON_TREE, GCOV_VERSION_9_1, builder


def add_branch_function(
    b,
    name,
    source,
    executed_lines,
    missed_lines,
    runs=1,
    first_line=None,
):
    """
    add a four block function: entry -> body -> (cold branch ->) exit
    the body carries ``executed_lines`` and runs ``runs`` times,
    the cold branch carries ``missed_lines`` and never runs
    """
    if first_line is None:
        first_line = min(list(executed_lines) + list(missed_lines)) - 1
    f = b.add_function(name, source, first_line)
    f.add_blocks(4)
    f.add_arc(0, 1, flags=ARC_ON_TREE)
    f.add_arc(1, 2, count=0)
    f.add_arc(1, 3, count=runs)
    f.add_arc(2, 3, flags=ARC_ON_TREE)
    if executed_lines:
        f.add_lines(1, executed_lines)
    if missed_lines:
        f.add_lines(2, missed_lines)
    return f


@pytest.fixture
def make_unit():
    """factory for a single-function unit with a given line split"""

    def _make_unit(
        source="hello.c",
        instrumented=10,
        missed=(),
        start=1,
        runs=1,
        version=GCOV_VERSION_9_1,
        big_endian=False,
        name=None,
    ):
        all_lines = list(range(start, start + instrumented))
        missed_lines = [line for line in all_lines if line in set(missed)]
        executed_lines = [line for line in all_lines if line not in set(missed)]

        b = builder(version=version, big_endian=big_endian)
        add_branch_function(b, "main", source, executed_lines, missed_lines, runs=runs)
        return b.unit(name or source)

    return _make_unit


@pytest.fixture
def add_branch():
    """the branch function helper, for tests composing their own builders"""
    return add_branch_function
