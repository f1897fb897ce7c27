#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Base-900 to base-10 conversion for numeric compaction and Macro PDF417 fields.

Encoders put a leading decimal "1" in front of every numeric group so that leading zeros
survive the base change. 111,100 is 111*900+100 = 100000, which carries the digits "00000".
"""

from __future__ import annotations

from typing import Sequence

from pdf417decode.codewords import TEXT_COMPACTION_MODE_LATCH, FormatError

BASE = 900


def base900_value(codewords: Sequence[int]) -> int:
    value = 0
    for code in codewords:
        if code < 0 or code >= TEXT_COMPACTION_MODE_LATCH:
            raise FormatError(f"invalid base-900 digit: {code}")
        value = value * BASE + int(code)
    return value


def decode_base900_to_base10(codewords: Sequence[int]) -> str:
    if len(codewords) == 0:
        raise FormatError("numeric group has no codewords")
    digits = str(base900_value(codewords))
    if digits[0] != "1":
        raise FormatError(f"numeric group is missing its leading 1: {digits[:8]}")
    return digits[1:]


def parse_decimal(digits: str, bits: int) -> int:
    """Parse a decoded numeric field into a signed integer of the given width."""
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise FormatError(f"invalid decimal field: {digits!r}")
    bound = 1 << (bits - 1)
    # length check first: int() refuses strings past the interpreter digit limit
    significant = digits.lstrip("0")
    if len(significant) > len(str(bound)):
        raise FormatError(f"decimal field overflows {bits}-bit integer: {len(digits)} digits")
    value = int(significant or "0")
    if value >= bound:
        raise FormatError(f"decimal field overflows {bits}-bit integer: {digits}")
    return value
