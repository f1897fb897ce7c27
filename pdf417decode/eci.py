#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import codecs
from typing import Dict, List, Optional

from pdf417decode.codewords import FormatError

DEFAULT_CHARSET = "ISO-8859-1"

ECI_CHARSETS: Dict[int, str] = {
    0: "cp437",
    1: "ISO-8859-1",
    2: "cp437",
    3: "ISO-8859-1",
    4: "ISO-8859-2",
    5: "ISO-8859-3",
    6: "ISO-8859-4",
    7: "ISO-8859-5",
    8: "ISO-8859-6",
    9: "ISO-8859-7",
    10: "ISO-8859-8",
    11: "ISO-8859-9",
    12: "ISO-8859-10",
    13: "ISO-8859-11",
    15: "ISO-8859-13",
    16: "ISO-8859-14",
    17: "ISO-8859-15",
    18: "ISO-8859-16",
    20: "Shift_JIS",
    21: "cp1250",
    22: "cp1251",
    23: "cp1252",
    24: "cp1256",
    25: "UTF-16BE",
    26: "UTF-8",
    27: "ASCII",
    28: "Big5",
    29: "GB18030",
    30: "EUC-KR",
    170: "ASCII",
}


def charset_for_eci(value: int) -> str:
    name = ECI_CHARSETS.get(int(value))
    if name is None:
        raise FormatError(f"unsupported ECI character set: {value}")
    return name


def check_charset(name: str) -> str:
    try:
        codecs.lookup(name)
    except LookupError as e:
        raise FormatError(f"unknown character set: {name}") from e
    return name


class ECIStringBuilder:
    """Output buffer that decodes collected bytes with the charset active when they arrived."""

    def __init__(self, charset: str = DEFAULT_CHARSET) -> None:
        self.charset = check_charset(charset)
        self._pending = bytearray()
        self._parts: List[str] = []
        self.raw = bytearray()
        self.has_raw = False
        self.eci_values: List[int] = []

    def append_char(self, ch: str) -> None:
        self._pending.append(ord(ch) & 0xFF)

    def append_byte(self, value: int) -> None:
        if value < 0 or value > 0xFF:
            raise FormatError(f"byte value out of range: {value}")
        self._pending.append(value)
        self.raw.append(value)
        self.has_raw = True

    def append_bytes(self, data: bytes) -> None:
        self._pending.extend(data)
        self.raw.extend(data)
        self.has_raw = True

    def append_eci(self, value: int) -> None:
        charset = charset_for_eci(value)
        self._flush()
        self.charset = charset
        self.eci_values.append(int(value))

    def _flush(self) -> None:
        if self._pending:
            self._parts.append(bytes(self._pending).decode(self.charset, errors="replace"))
            self._pending = bytearray()

    def raw_bytes(self) -> Optional[bytes]:
        if not self.has_raw:
            return None
        return bytes(self.raw)

    def __str__(self) -> str:
        self._flush()
        return "".join(self._parts)
