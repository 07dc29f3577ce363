"""MessageHandoff that produces a WhatsApp click-to-chat link."""

from __future__ import annotations

from urllib.parse import quote

from customizer.domain.exceptions import ConfigurationError
from customizer.domain.repository.message_handoff import MessageHandoff


class WhatsAppHandoff(MessageHandoff):

    def __init__(self, number: str) -> None:
        digits = "".join(ch for ch in number if ch.isdigit())
        if not digits:
            raise ConfigurationError("A WhatsApp number is required for order hand-off")
        self._number = digits

    def hand_off(self, message: str) -> str:
        return f"https://wa.me/{self._number}?text={quote(message)}"
