#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from pdf417decode.byte import byte_compaction
from pdf417decode.codewords import (
    BEGIN_MACRO_PDF417_CONTROL_BLOCK,
    BEGIN_MACRO_PDF417_OPTIONAL_FIELD,
    BYTE_COMPACTION_MODE_LATCH,
    BYTE_COMPACTION_MODE_LATCH_6,
    ECI_CHARSET,
    ECI_GENERAL_PURPOSE,
    ECI_USER_DEFINED,
    MACRO_PDF417_TERMINATOR,
    MODE_SHIFT_TO_BYTE_COMPACTION_MODE,
    NUMERIC_COMPACTION_MODE_LATCH,
    TEXT_COMPACTION_MODE_LATCH,
    FormatError,
    check_data_codewords,
    codeword_name,
    data_limit,
    normalize_codewords,
    read,
)
from pdf417decode.config import DEFAULT_CONFIG, DecoderConfig
from pdf417decode.eci import ECIStringBuilder
from pdf417decode.events import publish_decoded, publish_rejected
from pdf417decode.macro import MacroMetadata, parse_macro_block
from pdf417decode.numeric import numeric_compaction
from pdf417decode.runtime_log import RuntimeLog, get_runtime_log, log_line
from pdf417decode.text import text_compaction


class CompactionMode(enum.Enum):
    TEXT = "text"
    BYTE = "byte"
    NUMERIC = "numeric"


LATCH_MODES = {
    TEXT_COMPACTION_MODE_LATCH: CompactionMode.TEXT,
    BYTE_COMPACTION_MODE_LATCH: CompactionMode.BYTE,
    BYTE_COMPACTION_MODE_LATCH_6: CompactionMode.BYTE,
    NUMERIC_COMPACTION_MODE_LATCH: CompactionMode.NUMERIC,
}


@dataclass(frozen=True)
class DecoderResult:
    text: str
    raw_bytes: Optional[bytes]
    ec_level: str
    metadata: Optional[MacroMetadata]
    codewords_read: int
    eci_values: Tuple[int, ...] = ()


def _run_mode(
    mode: CompactionMode,
    latch: int,
    codewords: Sequence[int],
    code_index: int,
    limit: int,
    result: ECIStringBuilder,
) -> int:
    if mode is CompactionMode.TEXT:
        return text_compaction(codewords, code_index, limit, result)
    if mode is CompactionMode.BYTE:
        return byte_compaction(latch, codewords, code_index, limit, result)
    if mode is CompactionMode.NUMERIC:
        digits, code_index = numeric_compaction(codewords, code_index, limit)
        for ch in digits:
            result.append_char(ch)
        return code_index
    raise FormatError(f"unhandled compaction mode: {mode}")


def _decode_stream(
    codewords: Sequence[int], limit: int, config: DecoderConfig, log: RuntimeLog
) -> Tuple[ECIStringBuilder, Optional[MacroMetadata], int]:
    result = ECIStringBuilder(config.default_charset)
    metadata: Optional[MacroMetadata] = None
    code_index = text_compaction(codewords, 1, limit, result)
    while code_index < limit:
        code = codewords[code_index]
        code_index += 1
        mode = LATCH_MODES.get(code)
        if mode is not None:
            code_index = _run_mode(mode, code, codewords, code_index, limit, result)
        elif code == MODE_SHIFT_TO_BYTE_COMPACTION_MODE:
            result.append_byte(read(codewords, code_index, limit))
            code_index += 1
        elif code == ECI_CHARSET:
            value = read(codewords, code_index, limit)
            result.append_eci(value)
            code_index += 1
            log_line(f"ECI: charset eci={value} -> {result.charset}", log)
        elif code == ECI_GENERAL_PURPOSE:
            read(codewords, code_index + 1, limit)
            code_index += 2
        elif code == ECI_USER_DEFINED:
            read(codewords, code_index, limit)
            code_index += 1
        elif code == BEGIN_MACRO_PDF417_CONTROL_BLOCK:
            metadata, code_index = parse_macro_block(
                codewords, code_index, limit, charset=config.default_charset, log=log
            )
        elif code in (BEGIN_MACRO_PDF417_OPTIONAL_FIELD, MACRO_PDF417_TERMINATOR):
            raise FormatError(f"{codeword_name(code)} outside a macro block at {code_index - 1}")
        elif code >= TEXT_COMPACTION_MODE_LATCH:
            raise FormatError(f"reserved codeword at {code_index - 1}: {code}")
        else:
            # data codewords with no latch in front continue in text compaction
            code_index = text_compaction(codewords, code_index - 1, limit, result)
    return result, metadata, code_index


def decode(
    codewords: Iterable[int],
    ec_level: str,
    config: Optional[DecoderConfig] = None,
    log: Optional[RuntimeLog] = None,
) -> DecoderResult:
    """Decode the data codewords of one symbol.

    codewords[0] is the symbol length descriptor; error correction codewords may follow the
    data portion and are ignored. Raises FormatError on any malformed input, never returning
    a partial result.

    An explicit log is used as given. Otherwise a config naming runtime_log_file gets a log of
    its own for this call, and the module log is used when it names none.
    """
    cfg = config or DEFAULT_CONFIG
    if log is None:
        # per-call log; the module log is never repointed at the configured file
        if cfg.runtime_log_file:
            log = RuntimeLog(cfg.runtime_log_file, cfg.runtime_log_enabled)
        else:
            log = get_runtime_log()
    try:
        if not isinstance(ec_level, str):
            raise FormatError("error correction level must be a string")
        words = normalize_codewords(codewords)
        limit = data_limit(words)
        check_data_codewords(words, 1, limit)
        builder, metadata, code_index = _decode_stream(words, limit, cfg, log)
        text = str(builder)
        if not text and metadata is None:
            raise FormatError("symbol carries no data and no macro block")
    except FormatError as e:
        log_line(f"DECODE: rejected reason={e}", log)
        if cfg.publish_events:
            publish_rejected(str(e))
        raise

    decoded = DecoderResult(
        text=text,
        raw_bytes=builder.raw_bytes(),
        ec_level=ec_level,
        metadata=metadata,
        codewords_read=code_index,
        eci_values=tuple(builder.eci_values),
    )
    log_line(
        f"DECODE: ok codewords={decoded.codewords_read} chars={len(decoded.text)} "
        f"bytes={len(decoded.raw_bytes or b'')} macro={int(decoded.metadata is not None)}",
        log,
    )
    if cfg.publish_events:
        publish_decoded(decoded)
    return decoded
