#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""PyPubSub notifications for whoever assembles decode results into scan results.

Topics are created up front from prototype listeners so subscribers and publishers agree
on the message arguments regardless of which side touches the topic first.
"""

from __future__ import annotations

from pubsub import pub

TOPIC_DECODED = "pdf417_decoded"
TOPIC_REJECTED = "pdf417_rejected"


def _decoded_proto(result) -> None:
    pass


def _rejected_proto(reason) -> None:
    pass


_TOPIC_MGR = pub.getDefaultTopicMgr()
_TOPIC_MGR.getOrCreateTopic(TOPIC_DECODED, _decoded_proto)
_TOPIC_MGR.getOrCreateTopic(TOPIC_REJECTED, _rejected_proto)


def publish_decoded(result) -> None:
    pub.sendMessage(TOPIC_DECODED, result=result)


def publish_rejected(reason: str) -> None:
    pub.sendMessage(TOPIC_REJECTED, reason=str(reason))
