"""Abstract messaging hand-off (e.g. a chat app) for text-formatted orders."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MessageHandoff(ABC):

    @abstractmethod
    def hand_off(self, message: str) -> str:
        """Deliver or stage ``message``; return a reference the user can open."""
