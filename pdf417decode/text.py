#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Text compaction.

Each data codeword carries two base-30 sub-values (code // 30, code % 30). A sub-value is
either a character of the current sub-mode table or a latch/shift to another sub-mode:

    Alpha   A-Z, space, LL, ML, PS
    Lower   a-z, space, AS, ML, PS
    Mixed   0-9 and symbols, PL, space, LL, AL, PS
    Punct   punctuation, AL

Shifts (AS, PS) apply to exactly one following sub-value. A trailing PS (sub-value 29)
pads a run with an odd number of characters and produces nothing.
"""

from __future__ import annotations

import enum
from typing import Optional, Sequence

from pdf417decode.codewords import (
    ECI_CHARSET,
    MODE_SHIFT_TO_BYTE_COMPACTION_MODE,
    TEXT_COMPACTION_MODE_LATCH,
    read,
)
from pdf417decode.eci import DEFAULT_CHARSET, ECIStringBuilder

PL = 25
LL = 27
AS = 27
ML = 28
AL = 28
PS = 29
PAL = 29
SPACE = 26

ALPHA_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER_CHARS = "abcdefghijklmnopqrstuvwxyz"
MIXED_CHARS = "0123456789&\r\t,:#-.$/+%*=^"
PUNCT_CHARS = ";<>@[\\]_`~!\r\t,:\n-.$/\"|*()?{}'"


class SubMode(enum.Enum):
    ALPHA = "alpha"
    LOWER = "lower"
    MIXED = "mixed"
    PUNCT = "punct"


class TextState:
    """Latched sub-mode plus the one-shot shift pending for the next sub-value."""

    def __init__(self) -> None:
        self.mode = SubMode.ALPHA
        self.shift: Optional[SubMode] = None

    def reset(self) -> None:
        self.mode = SubMode.ALPHA
        self.shift = None

    def apply(self, value: int, result: ECIStringBuilder) -> None:
        ch = self._char_for(value)
        if ch is not None:
            result.append_char(ch)

    def _char_for(self, value: int) -> Optional[str]:
        if self.shift is not None:
            shifted = self.shift
            self.shift = None
            if shifted is SubMode.ALPHA:
                if value < 26:
                    return ALPHA_CHARS[value]
                if value == SPACE:
                    return " "
                return None
            if value < PAL:
                return PUNCT_CHARS[value]
            self.mode = SubMode.ALPHA
            return None

        mode = self.mode
        if mode is SubMode.ALPHA:
            if value < 26:
                return ALPHA_CHARS[value]
            if value == SPACE:
                return " "
            if value == LL:
                self.mode = SubMode.LOWER
            elif value == ML:
                self.mode = SubMode.MIXED
            else:
                self.shift = SubMode.PUNCT
            return None

        if mode is SubMode.LOWER:
            if value < 26:
                return LOWER_CHARS[value]
            if value == SPACE:
                return " "
            if value == AS:
                self.shift = SubMode.ALPHA
            elif value == ML:
                self.mode = SubMode.MIXED
            else:
                self.shift = SubMode.PUNCT
            return None

        if mode is SubMode.MIXED:
            if value < PL:
                return MIXED_CHARS[value]
            if value == SPACE:
                return " "
            if value == PL:
                self.mode = SubMode.PUNCT
            elif value == LL:
                self.mode = SubMode.LOWER
            elif value == AL:
                self.mode = SubMode.ALPHA
            else:
                self.shift = SubMode.PUNCT
            return None

        if value < PAL:
            return PUNCT_CHARS[value]
        self.mode = SubMode.ALPHA
        return None


def text_compaction(
    codewords: Sequence[int],
    code_index: int,
    limit: int,
    result: ECIStringBuilder,
) -> int:
    """Decode a text run starting at code_index; return the index of the first unused codeword."""
    state = TextState()
    while code_index < limit:
        code = codewords[code_index]
        if code < TEXT_COMPACTION_MODE_LATCH:
            code_index += 1
            state.apply(code // 30, result)
            state.apply(code % 30, result)
        elif code == TEXT_COMPACTION_MODE_LATCH:
            code_index += 1
            state.reset()
        elif code == MODE_SHIFT_TO_BYTE_COMPACTION_MODE:
            value = read(codewords, code_index + 1, limit)
            code_index += 2
            # the shifted codeword stands in for one character, including a pending shift
            state.shift = None
            result.append_byte(value)
        elif code == ECI_CHARSET:
            value = read(codewords, code_index + 1, limit)
            code_index += 2
            result.append_eci(value)
            state.shift = None
        else:
            break
    return code_index


def decode_text(codewords: Sequence[int], charset: str = DEFAULT_CHARSET) -> str:
    result = ECIStringBuilder(charset)
    text_compaction(codewords, 0, len(codewords), result)
    return str(result)
