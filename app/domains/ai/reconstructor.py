"""Rebuilds a role-tagged chat transcript from stored exchanges."""

from collections.abc import Sequence
from typing import Protocol

from app.schemas.ai import ChatTurn, TurnRole


class StoredExchange(Protocol):
    message: str
    response: str


def reconstruct_turns(exchanges_newest_first: Sequence[StoredExchange]) -> list[ChatTurn]:
    """Turn a newest-first window of exchanges into an oldest-first transcript.

    Each exchange contributes a user turn immediately followed by the
    assistant turn that answered it, so the result always has even length.
    """
    turns: list[ChatTurn] = []
    for exchange in reversed(exchanges_newest_first):
        turns.append(ChatTurn(role=TurnRole.USER, content=exchange.message))
        turns.append(ChatTurn(role=TurnRole.ASSISTANT, content=exchange.response))
    return turns
