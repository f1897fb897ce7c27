#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List, Sequence

from pdf417decode.bignum import base900_value
from pdf417decode.codewords import (
    BYTE_COMPACTION_MODE_LATCH,
    BYTE_COMPACTION_MODE_LATCH_6,
    ECI_CHARSET,
    TEXT_COMPACTION_MODE_LATCH,
    FormatError,
    read,
)
from pdf417decode.eci import ECIStringBuilder

GROUP_CODEWORDS = 6
GROUP_BYTES = 5
GROUP_LIMIT = 256**GROUP_BYTES


def unpack_group(codewords: Sequence[int]) -> bytes:
    """Turn 6 base-900 codewords into 5 bytes, most significant first."""
    if len(codewords) != GROUP_CODEWORDS:
        raise FormatError(f"byte group needs {GROUP_CODEWORDS} codewords, got {len(codewords)}")
    value = base900_value(codewords)
    if value >= GROUP_LIMIT:
        raise FormatError(f"byte group value does not fit {GROUP_BYTES} bytes: {value}")
    out = bytearray(GROUP_BYTES)
    for i in range(GROUP_BYTES - 1, -1, -1):
        value, out[i] = divmod(value, 256)
    return bytes(out)


def byte_compaction(
    mode: int,
    codewords: Sequence[int],
    code_index: int,
    limit: int,
    result: ECIStringBuilder,
) -> int:
    """Decode a byte run opened by latch 901 or 924.

    Complete groups of 6 become 5 bytes. Under 901 the last group is always sent one
    codeword per byte, even when complete; under 924 only a short tail is.
    """
    if mode not in (BYTE_COMPACTION_MODE_LATCH, BYTE_COMPACTION_MODE_LATCH_6):
        raise FormatError(f"not a byte compaction latch: {mode}")
    while code_index < limit:
        while code_index < limit and codewords[code_index] == ECI_CHARSET:
            result.append_eci(read(codewords, code_index + 1, limit))
            code_index += 2
        if code_index >= limit or codewords[code_index] >= TEXT_COMPACTION_MODE_LATCH:
            break

        group: List[int] = []
        while (
            len(group) < GROUP_CODEWORDS
            and code_index < limit
            and codewords[code_index] < TEXT_COMPACTION_MODE_LATCH
        ):
            group.append(codewords[code_index])
            code_index += 1
        more_follows = code_index < limit and codewords[code_index] < TEXT_COMPACTION_MODE_LATCH
        if len(group) == GROUP_CODEWORDS and (mode == BYTE_COMPACTION_MODE_LATCH_6 or more_follows):
            result.append_bytes(unpack_group(group))
            continue

        code_index -= len(group)
        return _single_bytes(codewords, code_index, limit, result)
    return code_index


def _single_bytes(
    codewords: Sequence[int], code_index: int, limit: int, result: ECIStringBuilder
) -> int:
    while code_index < limit:
        code = codewords[code_index]
        if code < TEXT_COMPACTION_MODE_LATCH:
            result.append_byte(code)
            code_index += 1
        elif code == ECI_CHARSET:
            result.append_eci(read(codewords, code_index + 1, limit))
            code_index += 2
        else:
            break
    return code_index


def decode_bytes(mode: int, codewords: Sequence[int]) -> bytes:
    result = ECIStringBuilder()
    byte_compaction(mode, codewords, 0, len(codewords), result)
    return result.raw_bytes() or b""
