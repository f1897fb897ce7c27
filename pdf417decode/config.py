#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass
from typing import Dict

from pdf417decode.codewords import FormatError
from pdf417decode.eci import DEFAULT_CHARSET, check_charset


@dataclass(frozen=True)
class DecoderConfig:
    default_charset: str = DEFAULT_CHARSET
    runtime_log_file: str = ""
    runtime_log_enabled: bool = False
    publish_events: bool = True

    def to_dict(self) -> Dict[str, object]:
        return dataclasses.asdict(self)


DEFAULT_CONFIG = DecoderConfig()


def config_from_dict(raw: Dict[str, object]) -> DecoderConfig:
    if not isinstance(raw, dict):
        return DEFAULT_CONFIG
    charset = str(raw.get("default_charset") or DEFAULT_CHARSET)
    try:
        check_charset(charset)
    except FormatError:
        charset = DEFAULT_CHARSET
    return DecoderConfig(
        default_charset=charset,
        runtime_log_file=str(raw.get("runtime_log_file") or ""),
        runtime_log_enabled=bool(raw.get("runtime_log_enabled", False)),
        publish_events=bool(raw.get("publish_events", True)),
    )


def load_config(path: str) -> DecoderConfig:
    """Read a JSON config file. Missing or unreadable files fall back to the defaults."""
    if not path or not os.path.isfile(path):
        return DEFAULT_CONFIG
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError):
        return DEFAULT_CONFIG
    return config_from_dict(raw)


def save_config(cfg: DecoderConfig, path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(cfg.to_dict(), f, ensure_ascii=False)
    os.replace(tmp, path)
