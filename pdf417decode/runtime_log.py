#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import os
import re
import sys
import threading
import time
from collections import deque
from typing import Deque, List, Optional, Tuple

TS_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\b")
TS_DUP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})"
    r"(?:(?:\s+)\1\b)+\s*"
)
RECENT_LINES_MAX = 256


def ts_local() -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())


def normalize_log_text_line(text: object, fallback_ts: Optional[str] = None) -> Tuple[str, str]:
    line = str(text).lstrip()
    if not TS_PREFIX_RE.match(line):
        if fallback_ts is None:
            fallback_ts = ts_local()
        line = f"{fallback_ts} {line}"
    line = TS_DUP_RE.sub(r"\1 ", line)
    body = TS_PREFIX_RE.sub("", line, count=1).lstrip()
    return line, body


def harden_file(path: str) -> None:
    if not path:
        return
    if sys.platform.startswith("win"):
        return
    try:
        os.chmod(path, 0o600)
    except OSError:
        pass


class RuntimeLog:
    """Timestamped decoder log lines.

    Lines are tagged by their first word ("DECODE:", "MACRO:", "ECI:", "WARN:"). The most
    recent ones stay in memory; the file copy is only written when enabled.
    """

    def __init__(self, path: str = "", enabled: bool = False, max_lines: int = RECENT_LINES_MAX) -> None:
        self.path = path
        self.enabled = bool(enabled)
        self._recent: Deque[str] = deque(maxlen=max(1, int(max_lines)))
        self._lock = threading.Lock()

    def append(self, text: str) -> None:
        if not text:
            return
        line, _body = normalize_log_text_line(text)
        with self._lock:
            self._recent.append(line)
            if not (self.enabled and self.path):
                return
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            created = not os.path.exists(self.path)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
            if created:
                harden_file(self.path)

    def recent(self) -> List[str]:
        with self._lock:
            return list(self._recent)

    def clear(self) -> None:
        with self._lock:
            self._recent.clear()


_RUNTIME_LOG = RuntimeLog()


def get_runtime_log() -> RuntimeLog:
    return _RUNTIME_LOG


def set_runtime_log(log: RuntimeLog) -> RuntimeLog:
    """Swap the module log; returns the previous one so callers can restore it."""
    global _RUNTIME_LOG
    prev = _RUNTIME_LOG
    _RUNTIME_LOG = log
    return prev


def log_line(text: str, log: Optional[RuntimeLog] = None) -> None:
    (log or _RUNTIME_LOG).append(text)
