"""Use case running a grounded conversation with the assistant.

Each turn persists the user message, rebuilds the grounding document from the
current ledger state, forwards the most recent turns and persists the reply.
Assistant failures become an inline assistant reply instead of an exception.
"""

from collections.abc import Callable
from datetime import date

from finledger.application.ports.assistant import (
    AssistantSessionPort,
    ConversationTurn,
)
from finledger.application.ports.ledger import ChatLedgerPort
from finledger.application.use_cases.build_financial_context import (
    BuildFinancialContextUseCase,
)
from finledger.domain.constants import CHAT_HISTORY_LIMIT
from finledger.domain.errors import AssistantError, ConfigurationError
from finledger.domain.models import ChatMessage, ChatRole
from finledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


ERROR_REPLY_PREFIX = "Sorry, I couldn't respond right now."

SUGGESTED_QUESTIONS = (
    "How am I doing on my budget?",
    "What are my biggest spending categories this month?",
    "How can I reduce my expenses?",
    "What's my net worth trend?",
    "Am I saving enough each month?",
)


class AssistantChatUseCase:
    """Send user questions to the assistant and keep the history."""

    def __init__(
        self,
        assistant: AssistantSessionPort,
        chat: ChatLedgerPort,
        context: BuildFinancialContextUseCase,
        history_limit: int = CHAT_HISTORY_LIMIT,
        streaming: bool = True,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            assistant: Port answering grounded conversations.
            chat: Ledger port persisting conversation turns.
            context: Use case building the grounding document.
            history_limit: Maximum number of turns forwarded per request.
            streaming: Use the streaming variant of the assistant.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording assistant turns.
        """
        self._assistant = assistant
        self._chat = chat
        self._context = context
        self._history_limit = history_limit
        self._streaming = streaming
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def history(self) -> list[ChatMessage]:
        """Return the persisted conversation in chronological order."""
        return self._chat.fetch_all()

    async def ask(
        self,
        text: str,
        today: date | None = None,
        on_delta: Callable[[str], None] | None = None,
    ) -> ChatMessage:
        """Send a question and return the persisted assistant reply.

        Args:
            text: User question; surrounding whitespace is stripped.
            today: Reference day for the grounding document.
            on_delta: Optional callback receiving streamed text deltas.

        Returns:
            ChatMessage: The assistant reply, or an inline error reply.

        Raises:
            ValueError: If ``text`` is blank.
        """
        question = text.strip()
        if not question:
            raise ValueError("Question must not be blank")

        self._chat.insert(ChatMessage(content=question, role=ChatRole.USER))
        self._chat.commit()

        try:
            document = self._context.execute(today)
            turns = self._build_turns()
            if self._streaming:
                reply_text = await self._collect_stream(
                    turns,
                    document,
                    on_delta,
                )
            else:
                reply_text = await self._assistant.send(turns, document)
        except (AssistantError, ConfigurationError) as exc:
            self._logger.error(f"Assistant request failed: {exc}")
            reply_text = f"{ERROR_REPLY_PREFIX} {exc}"

        reply = ChatMessage(content=reply_text, role=ChatRole.ASSISTANT)
        self._chat.insert(reply)
        self._chat.commit()
        self._usage_logger.info(
            f"Assistant turn: question_chars={len(question)}, "
            f"reply_chars={len(reply_text)}"
        )
        return reply

    def clear_history(self) -> int:
        """Delete every persisted message and return how many were removed."""
        deleted = self._chat.delete_all()
        self._chat.commit()
        self._usage_logger.info(f"Cleared {deleted} chat messages")
        return deleted

    def _build_turns(self) -> list[ConversationTurn]:
        """Return the most recent turns, starting with a user turn."""
        recent = self._chat.fetch_all()[-self._history_limit:]
        turns = [
            ConversationTurn(role=ChatRole(message.role), content=message.content)
            for message in recent
        ]
        while turns and turns[0].role is not ChatRole.USER:
            turns.pop(0)
        return turns

    async def _collect_stream(
        self,
        turns: list[ConversationTurn],
        document: str,
        on_delta: Callable[[str], None] | None,
    ) -> str:
        parts: list[str] = []
        async for delta in self._assistant.stream(turns, document):
            parts.append(delta)
            if on_delta is not None:
                on_delta(delta)
        return "".join(parts)


__all__ = [
    "AssistantChatUseCase",
    "ERROR_REPLY_PREFIX",
    "SUGGESTED_QUESTIONS",
]
