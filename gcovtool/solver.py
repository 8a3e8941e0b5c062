"""flow conservation solver for a function's arc and block counts"""

import logging
from typing import List, Optional

from .gcov import Arc, Block, Function, ParsingError

LOGGER = logging.getLogger("gcovtool")

# stands in for the implicit edges entering the first block and leaving the last
SENTINEL_DEGREE = 50000


def solve_function(function: Function) -> None:
    """
    resolve the count of every block and arc of a function in place

    only arcs that are off the spanning tree carry measured counters. every
    other count follows from flow conservation: what enters a block leaves it.
    blocks move between two work queues of block indices, "unresolved" (count
    unknown) and "resolved" (count known, some adjacent arc still unknown),
    until neither can make progress. arcs of a disconnected or
    under-instrumented graph may stay unresolved with a zero count.
    """
    blocks = function.blocks
    if len(blocks) >= 2:
        if blocks[0].pending_in == 0:
            blocks[0].pending_in = SENTINEL_DEGREE
        if blocks[-1].pending_out == 0:
            blocks[-1].pending_out = SENTINEL_DEGREE

    unresolved: List[int] = []
    resolved: List[int] = []
    for index, block in enumerate(blocks):
        block.on_unresolved = True
        unresolved.append(index)

    while unresolved or resolved:
        while unresolved:
            index = unresolved.pop()
            block = blocks[index]
            block.on_unresolved = False
            if block.pending_out != 0 and block.pending_in != 0:
                continue

            total = 0
            if block.pending_out == 0:
                total = sum(arc.count for arc in block.exit_arcs)
            if block.pending_in == 0 and total == 0:
                total = sum(arc.count for arc in block.entry_arcs)
            block.count = total
            block.count_valid = True
            block.on_resolved = True
            resolved.append(index)

        while resolved:
            index = resolved.pop()
            block = blocks[index]
            block.on_resolved = False

            if block.pending_out == 1:
                arc = _resolve_remaining(function, block.count, block.exit_arcs)
                block.pending_out -= 1
                target = blocks[arc.dst]
                target.pending_in -= 1
                _requeue(arc.dst, target, target.pending_in, unresolved, resolved)

            if block.pending_in == 1:
                arc = _resolve_remaining(function, block.count, block.entry_arcs)
                block.pending_in -= 1
                source = blocks[arc.src]
                source.pending_out -= 1
                _requeue(arc.src, source, source.pending_out, unresolved, resolved)

    if LOGGER.isEnabledFor(logging.DEBUG):
        leftover = function.unresolved_arcs()
        if leftover:
            LOGGER.debug(
                "function %r: %d of %d arcs unresolved",
                function.name,
                len(leftover),
                len(function.arcs),
            )


def _resolve_remaining(function: Function, total: int, arcs: List[Arc]) -> Arc:
    """assign the single unresolved arc whatever flow the others leave over"""
    pending: Optional[Arc] = None
    for arc in arcs:
        if arc.resolved:
            total -= arc.count
        else:
            pending = arc
    if pending is None:
        raise ParsingError(
            f"inconsistent arc counts in function {function.name!r}"
        )
    pending.count = total
    pending.resolved = True
    return pending


def _requeue(
    index: int,
    block: Block,
    pending: int,
    unresolved: List[int],
    resolved: List[int],
) -> None:
    """queue a neighbour whose pending degree just dropped"""
    if block.count_valid:
        if pending == 1 and not block.on_resolved:
            block.on_resolved = True
            resolved.append(index)
    elif pending == 0 and not block.on_unresolved:
        block.on_unresolved = True
        unresolved.append(index)
