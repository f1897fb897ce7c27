#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import operator
from typing import Iterable, List, Sequence

TEXT_COMPACTION_MODE_LATCH = 900
BYTE_COMPACTION_MODE_LATCH = 901
NUMERIC_COMPACTION_MODE_LATCH = 902
MODE_SHIFT_TO_BYTE_COMPACTION_MODE = 913
MACRO_PDF417_TERMINATOR = 922
BEGIN_MACRO_PDF417_OPTIONAL_FIELD = 923
BYTE_COMPACTION_MODE_LATCH_6 = 924
ECI_USER_DEFINED = 925
ECI_GENERAL_PURPOSE = 926
ECI_CHARSET = 927
BEGIN_MACRO_PDF417_CONTROL_BLOCK = 928

MAX_CODEWORD = 928
MAX_SYMBOL_CODEWORDS = 928

MACRO_PDF417_OPTIONAL_FIELD_FILE_NAME = 0
MACRO_PDF417_OPTIONAL_FIELD_SEGMENT_COUNT = 1
MACRO_PDF417_OPTIONAL_FIELD_TIME_STAMP = 2
MACRO_PDF417_OPTIONAL_FIELD_SENDER = 3
MACRO_PDF417_OPTIONAL_FIELD_ADDRESSEE = 4
MACRO_PDF417_OPTIONAL_FIELD_FILE_SIZE = 5
MACRO_PDF417_OPTIONAL_FIELD_CHECKSUM = 6

CODEWORD_NAMES = {
    TEXT_COMPACTION_MODE_LATCH: "text_latch",
    BYTE_COMPACTION_MODE_LATCH: "byte_latch",
    NUMERIC_COMPACTION_MODE_LATCH: "numeric_latch",
    MODE_SHIFT_TO_BYTE_COMPACTION_MODE: "byte_shift",
    MACRO_PDF417_TERMINATOR: "macro_terminator",
    BEGIN_MACRO_PDF417_OPTIONAL_FIELD: "macro_optional_field",
    BYTE_COMPACTION_MODE_LATCH_6: "byte_latch_6",
    ECI_USER_DEFINED: "eci_user_defined",
    ECI_GENERAL_PURPOSE: "eci_general_purpose",
    ECI_CHARSET: "eci_charset",
    BEGIN_MACRO_PDF417_CONTROL_BLOCK: "macro_control_block",
}


class PDF417Error(ValueError):
    pass


class FormatError(PDF417Error):
    pass


def codeword_name(code: int) -> str:
    if code < TEXT_COMPACTION_MODE_LATCH:
        return "data"
    return CODEWORD_NAMES.get(int(code), "reserved")


def normalize_codewords(codewords: Iterable[int]) -> List[int]:
    if codewords is None or isinstance(codewords, (str, bytes, bytearray)):
        raise FormatError("codewords must be a sequence of integers")
    out: List[int] = []
    try:
        for code in codewords:
            if isinstance(code, bool):
                raise TypeError("bool is not a codeword")
            out.append(operator.index(code))
    except TypeError as e:
        raise FormatError(f"codewords must be integers: {e}") from e
    return out


def data_limit(codewords: Sequence[int]) -> int:
    """Return the index one past the last data codeword.

    codewords[0] is the symbol length descriptor and counts itself. Everything at or after
    the returned index belongs to error correction or padding and is never decoded.
    """
    if len(codewords) == 0:
        raise FormatError("empty codeword stream")
    descriptor = codewords[0]
    if descriptor < 1:
        raise FormatError(f"invalid symbol length descriptor: {descriptor}")
    if descriptor > MAX_SYMBOL_CODEWORDS:
        raise FormatError(f"symbol length descriptor {descriptor} exceeds {MAX_SYMBOL_CODEWORDS} codewords")
    if descriptor > len(codewords):
        raise FormatError(
            f"symbol length descriptor {descriptor} exceeds stream length {len(codewords)}"
        )
    return descriptor


def check_data_codewords(codewords: Sequence[int], start: int, limit: int) -> None:
    for index in range(start, limit):
        code = codewords[index]
        if code < 0 or code > MAX_CODEWORD:
            raise FormatError(f"codeword out of range at {index}: {code}")


def read(codewords: Sequence[int], index: int, limit: int) -> int:
    """Read one codeword, treating anything at or past limit as a truncated stream."""
    if index < 0 or index >= limit:
        raise FormatError(f"read past end of data codewords at {index} (limit {limit})")
    return codewords[index]
