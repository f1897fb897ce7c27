#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""Macro PDF417 control block (structured append).

Layout after the 928 marker:

    segment index   2 codewords, numeric (base 900 with leading 1)
    file id         codewords up to the next 923/922, each written as 3 decimal digits
    optional fields 923, field id, payload (text or numeric depending on the id)
    terminator      922, only in the last segment
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from pdf417decode.bignum import decode_base900_to_base10, parse_decimal
from pdf417decode.codewords import (
    BEGIN_MACRO_PDF417_OPTIONAL_FIELD,
    MACRO_PDF417_OPTIONAL_FIELD_ADDRESSEE,
    MACRO_PDF417_OPTIONAL_FIELD_CHECKSUM,
    MACRO_PDF417_OPTIONAL_FIELD_FILE_NAME,
    MACRO_PDF417_OPTIONAL_FIELD_FILE_SIZE,
    MACRO_PDF417_OPTIONAL_FIELD_SEGMENT_COUNT,
    MACRO_PDF417_OPTIONAL_FIELD_SENDER,
    MACRO_PDF417_OPTIONAL_FIELD_TIME_STAMP,
    MACRO_PDF417_TERMINATOR,
    TEXT_COMPACTION_MODE_LATCH,
    FormatError,
    check_data_codewords,
    data_limit,
    normalize_codewords,
    read,
)
from pdf417decode.eci import DEFAULT_CHARSET, ECIStringBuilder
from pdf417decode.numeric import numeric_compaction
from pdf417decode.runtime_log import RuntimeLog, log_line
from pdf417decode.text import text_compaction

NUMBER_OF_SEQUENCE_CODEWORDS = 2

TEXT_FIELDS = {
    MACRO_PDF417_OPTIONAL_FIELD_FILE_NAME: "file_name",
    MACRO_PDF417_OPTIONAL_FIELD_SENDER: "sender",
    MACRO_PDF417_OPTIONAL_FIELD_ADDRESSEE: "addressee",
}

# field id -> (attribute, integer width)
NUMERIC_FIELDS = {
    MACRO_PDF417_OPTIONAL_FIELD_SEGMENT_COUNT: ("segment_count", 32),
    MACRO_PDF417_OPTIONAL_FIELD_TIME_STAMP: ("timestamp", 64),
    MACRO_PDF417_OPTIONAL_FIELD_FILE_SIZE: ("file_size", 64),
    MACRO_PDF417_OPTIONAL_FIELD_CHECKSUM: ("checksum", 32),
}


@dataclass(frozen=True)
class MacroMetadata:
    segment_index: int
    file_id: str
    segment_count: int = -1
    is_last_segment: bool = False
    file_name: Optional[str] = None
    sender: Optional[str] = None
    addressee: Optional[str] = None
    timestamp: Optional[int] = None
    file_size: Optional[int] = None
    checksum: Optional[int] = None
    _legacy_optional_data: Optional[Tuple[int, ...]] = field(default=None, repr=False, compare=False)

    def legacy_optional_data(self) -> Optional[List[int]]:
        """Raw codewords of the optional fields, from the first field id to the last payload codeword.

        Kept for callers that parsed the optional block themselves; use the typed fields instead.
        """
        warnings.warn(
            "legacy_optional_data() is deprecated; use the typed MacroMetadata fields",
            DeprecationWarning,
            stacklevel=2,
        )
        if self._legacy_optional_data is None:
            return None
        return list(self._legacy_optional_data)


def _segment_index(codewords: Sequence[int], code_index: int, limit: int) -> int:
    if code_index + NUMBER_OF_SEQUENCE_CODEWORDS > limit:
        raise FormatError("macro block needs 2 codewords for the segment index")
    digits = decode_base900_to_base10(codewords[code_index : code_index + NUMBER_OF_SEQUENCE_CODEWORDS])
    if not digits:
        return 0
    return parse_decimal(digits, 32)


def _file_id(codewords: Sequence[int], code_index: int, limit: int) -> Tuple[str, int]:
    parts: List[str] = []
    while code_index < limit:
        code = codewords[code_index]
        if code in (MACRO_PDF417_TERMINATOR, BEGIN_MACRO_PDF417_OPTIONAL_FIELD):
            break
        if code >= TEXT_COMPACTION_MODE_LATCH:
            raise FormatError(f"invalid file id codeword at {code_index}: {code}")
        parts.append(f"{code:03d}")
        code_index += 1
    if not parts:
        raise FormatError("macro block has no file id codewords")
    return "".join(parts), code_index


def _skip_field(codewords: Sequence[int], code_index: int, limit: int) -> int:
    while code_index < limit and codewords[code_index] not in (
        MACRO_PDF417_TERMINATOR,
        BEGIN_MACRO_PDF417_OPTIONAL_FIELD,
    ):
        code_index += 1
    return code_index


def parse_macro_block(
    codewords: Sequence[int],
    code_index: int,
    limit: int,
    charset: str = DEFAULT_CHARSET,
    log: Optional[RuntimeLog] = None,
) -> Tuple[MacroMetadata, int]:
    """Parse a control block starting right after the 928 marker.

    Returns the metadata and the index after the block. The block runs to the end of the
    data codewords; anything other than an optional field or the terminator is an error.
    """
    segment_index = _segment_index(codewords, code_index, limit)
    code_index += NUMBER_OF_SEQUENCE_CODEWORDS
    file_id, code_index = _file_id(codewords, code_index, limit)

    values = {}
    is_last_segment = False
    optional_start = -1
    optional_end = -1
    if code_index < limit and codewords[code_index] == BEGIN_MACRO_PDF417_OPTIONAL_FIELD:
        optional_start = code_index + 1

    while code_index < limit:
        code = codewords[code_index]
        if code == BEGIN_MACRO_PDF417_OPTIONAL_FIELD:
            field_id = read(codewords, code_index + 1, limit)
            code_index += 2
            if field_id in TEXT_FIELDS:
                out = ECIStringBuilder(charset)
                code_index = text_compaction(codewords, code_index, limit, out)
                values[TEXT_FIELDS[field_id]] = str(out)
            elif field_id in NUMERIC_FIELDS:
                name, bits = NUMERIC_FIELDS[field_id]
                digits, code_index = numeric_compaction(codewords, code_index, limit)
                values[name] = parse_decimal(digits, bits)
            else:
                log_line(f"MACRO: skipping unknown optional field id={field_id}", log)
                code_index = _skip_field(codewords, code_index, limit)
            optional_end = code_index
        elif code == MACRO_PDF417_TERMINATOR:
            code_index += 1
            is_last_segment = True
        else:
            raise FormatError(f"unexpected codeword in macro block at {code_index}: {code}")

    legacy: Optional[Tuple[int, ...]] = None
    if optional_start != -1 and optional_end > optional_start:
        legacy = tuple(codewords[optional_start:optional_end])

    metadata = MacroMetadata(
        segment_index=segment_index,
        file_id=file_id,
        is_last_segment=is_last_segment,
        _legacy_optional_data=legacy,
        **values,
    )
    log_line(
        f"MACRO: segment={metadata.segment_index} file_id={metadata.file_id} "
        f"count={metadata.segment_count} last={int(metadata.is_last_segment)}",
        log,
    )
    return metadata, code_index


def decode_macro_block(
    codewords: Iterable[int],
    code_index: int,
    charset: str = DEFAULT_CHARSET,
    log: Optional[RuntimeLog] = None,
) -> MacroMetadata:
    """Decode only the Macro PDF417 block of a symbol.

    code_index points just past the 928 marker. The stream keeps its length descriptor in
    codewords[0], so trailing error correction codewords are never read.
    """
    words = normalize_codewords(codewords)
    limit = data_limit(words)
    if code_index < 1:
        raise FormatError(f"macro block offset must be past the length descriptor: {code_index}")
    check_data_codewords(words, 1, limit)
    metadata, _end = parse_macro_block(words, code_index, limit, charset=charset, log=log)
    return metadata
