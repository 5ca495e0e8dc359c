"""
ReadState
=========

Identifiers of the record state machine.  A well-formed V2000 record visits
them in declaration order; V3000 records take ``V3000_CTAB`` in place of
``ATOM_LIST`` / ``BOND_LIST`` / ``CONNECTION_TABLE``.

The behaviour of each state lives in its own module under
``ctab_cleaner/states`` and is wired up by
:mod:`ctab_cleaner.pipeline.state_machine`.
"""
from __future__ import annotations

from enum import Enum


class ReadState(Enum):
    BEGIN = "BEGIN"
    HEADER = "HEADER"
    COUNTS_LINE = "COUNTS_LINE"
    ATOM_LIST = "ATOM_LIST"
    BOND_LIST = "BOND_LIST"
    CONNECTION_TABLE = "CONNECTION_TABLE"
    V3000_CTAB = "V3000_CTAB"
    BEFORE_DATA_ITEMS = "BEFORE_DATA_ITEMS"
    DATA_ITEMS = "DATA_ITEMS"
    DELIMITER = "DELIMITER"
    EOF = "EOF"
