"""Port for the conversational assistant collaborator."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

from finledger.domain.models import ChatRole


@dataclass(frozen=True)
class ConversationTurn:
    """A role and content pair forwarded to the assistant."""

    role: ChatRole
    content: str


class AssistantSessionPort(Protocol):
    """Port answering a conversation grounded on a financial document.

    The core does not know which model vendor answers.
    """

    async def send(
        self,
        turns: list[ConversationTurn],
        grounding_document: str,
    ) -> str:
        """Return the whole reply text."""

    def stream(
        self,
        turns: list[ConversationTurn],
        grounding_document: str,
    ) -> AsyncIterator[str]:
        """Yield reply text deltas until completion or error."""


__all__ = ["ConversationTurn", "AssistantSessionPort"]
