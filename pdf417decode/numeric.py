#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List, Sequence, Tuple

from pdf417decode.bignum import decode_base900_to_base10
from pdf417decode.codewords import (
    NUMERIC_COMPACTION_MODE_LATCH,
    TEXT_COMPACTION_MODE_LATCH,
    FormatError,
)

MAX_NUMERIC_CODEWORDS = 15


def numeric_compaction(codewords: Sequence[int], code_index: int, limit: int) -> Tuple[str, int]:
    """Decode a numeric run into its decimal digits.

    Groups hold at most 15 codewords and carry their own leading 1. A repeated numeric
    latch closes the current group; any other codeword >= 900 ends the run unconsumed.
    """
    digits: List[str] = []
    group: List[int] = []
    consumed = 0
    while code_index < limit:
        code = codewords[code_index]
        if code < TEXT_COMPACTION_MODE_LATCH:
            group.append(code)
            consumed += 1
            code_index += 1
            if len(group) == MAX_NUMERIC_CODEWORDS:
                digits.append(decode_base900_to_base10(group))
                group = []
        elif code == NUMERIC_COMPACTION_MODE_LATCH:
            code_index += 1
            if group:
                digits.append(decode_base900_to_base10(group))
                group = []
        else:
            break
    if group:
        digits.append(decode_base900_to_base10(group))
    if consumed == 0:
        raise FormatError(f"numeric compaction run without codewords at {code_index}")
    return "".join(digits), code_index
