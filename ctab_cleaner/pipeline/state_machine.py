"""
State machine
=============

Maps each :class:`~ctab_cleaner.states.read_state.ReadState` to the handler
that runs it.  Every handler has the signature::

    handler(source, out, facts) -> ReadState

reading from a :class:`~ctab_cleaner.reader.line_source.LookaheadLineSource`,
appending cleaned text to ``out`` and returning the next state.
"""
from __future__ import annotations

from typing import Callable, Dict, List

from ..models import ParseFacts
from ..reader.line_source import LookaheadLineSource
from ..states.atoms import AtomListState
from ..states.bonds import BondListState
from ..states.connection_table import ConnectionTableState
from ..states.counts import CountsLineState
from ..states.data_items import BeforeDataItemsState, DataItemsState, DelimiterState
from ..states.header import HeaderState
from ..states.read_state import ReadState
from ..states.v3000 import V3000CtabState

StateHandler = Callable[[LookaheadLineSource, List[str], ParseFacts], ReadState]


def _begin(source: LookaheadLineSource, out: List[str], facts: ParseFacts) -> ReadState:
    if source.peek_line() is None:
        return ReadState.EOF
    return ReadState.HEADER


def _eof(source: LookaheadLineSource, out: List[str], facts: ParseFacts) -> ReadState:
    return ReadState.EOF


DISPATCH: Dict[ReadState, StateHandler] = {
    ReadState.BEGIN: _begin,
    ReadState.HEADER: HeaderState().run,
    ReadState.COUNTS_LINE: CountsLineState().run,
    ReadState.ATOM_LIST: AtomListState().run,
    ReadState.BOND_LIST: BondListState().run,
    ReadState.CONNECTION_TABLE: ConnectionTableState().run,
    ReadState.V3000_CTAB: V3000CtabState().run,
    ReadState.BEFORE_DATA_ITEMS: BeforeDataItemsState().run,
    ReadState.DATA_ITEMS: DataItemsState().run,
    ReadState.DELIMITER: DelimiterState().run,
    ReadState.EOF: _eof,
}


def step(
    state: ReadState,
    source: LookaheadLineSource,
    out: List[str],
    facts: ParseFacts,
) -> ReadState:
    """Run *state* once and return the state that follows it."""
    return DISPATCH[state](source, out, facts)
