"""
Conversation turn model.

Dependencies: pydantic
System role: Read-only history input for query context fusion
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ConversationTurn(BaseModel):
    """A finished question/answer exchange."""

    question: str
    answer: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    conversation_id: str | None = None
