#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
pdf417decode package

Turns the corrected data codewords of a PDF417 symbol into text, raw bytes and Macro
PDF417 (structured append) metadata. Locating the symbol, sampling modules and error
correction happen upstream; this package starts from the codeword list.
"""

from __future__ import annotations

from pdf417decode.codewords import FormatError, PDF417Error
from pdf417decode.config import DecoderConfig, load_config, save_config
from pdf417decode.decoder import CompactionMode, DecoderResult, decode
from pdf417decode.macro import MacroMetadata, decode_macro_block

__all__ = [
    "CompactionMode",
    "DecoderConfig",
    "DecoderResult",
    "FormatError",
    "MacroMetadata",
    "PDF417Error",
    "decode",
    "decode_macro_block",
    "load_config",
    "save_config",
]
