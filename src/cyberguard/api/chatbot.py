# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Support chatbot endpoint."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ApiError
from ..validation import require_text
from .base import Endpoint, expect_object


@dataclass
class ChatReply:
    response: str
    timestamp: str | None = None


class ChatbotApi(Endpoint):
    def send_message(self, message: str) -> ChatReply:
        text = require_text(message, "message", "Message")
        payload = self.call("POST", "chatbot/chat", payload={"message": text}, fallback="Failed to send message to chatbot")
        payload = expect_object(payload, "Failed to send message to chatbot")
        if not isinstance(payload.get("response"), str):
            raise ApiError(200, "Chatbot returned an unexpected response")
        timestamp = payload.get("timestamp")
        return ChatReply(response=payload["response"], timestamp=str(timestamp) if timestamp else None)
