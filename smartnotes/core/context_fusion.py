"""
Query context fusion.

Folds recent question/answer history into the text that is embedded for a
new question, biasing retrieval toward topically continuous results.

Dependencies: smartnotes.models
System role: Query text construction for retrieval
"""

from collections.abc import Sequence

from smartnotes.models.conversation import ConversationTurn
from smartnotes.models.search import SearchHit

TURN_DELIMITER = "\n\n"


def render_turn(turn: ConversationTurn) -> str:
    return f"Previous Question: {turn.question}\nPrevious Answer: {turn.answer}"


def build_query_text(question: str, recent_turns: Sequence[ConversationTurn]) -> str:
    """
    Build the text embedded for a query.

    recent_turns must already be limited and ordered oldest first; they are
    rendered in the order given.

    Args:
        question: Current question
        recent_turns: Chronological history for the asking user

    Returns:
        str: The question unchanged when there is no history, otherwise the
        rendered turns followed by "Current Question: {question}"
    """
    if not recent_turns:
        return question

    history = TURN_DELIMITER.join(render_turn(turn) for turn in recent_turns)
    return f"{history}{TURN_DELIMITER}Current Question: {question}"


def format_hits_as_context(hits: Sequence[SearchHit], max_chars: int = 8000) -> str:
    """
    Render ranked hits as a context block for answer generation.

    Args:
        hits: Hits in rank order
        max_chars: Per-hit content cap

    Returns:
        str: Blocks of title, similarity percentage and content, blank-line separated
    """
    blocks = [
        f"Document: {hit.title}\n"
        f"Similarity Score: {round(hit.similarity * 100)}%\n"
        f"Content: {hit.content[:max_chars]}"
        for hit in hits
    ]
    return "\n\n".join(blocks)
