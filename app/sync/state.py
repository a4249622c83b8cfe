"""Client-side views of server state.

Local state is never merged with server state: each authoritative fetch
replaces what the client holds. The AI chat view additionally keeps a
short-lived optimistic overlay on top of the last confirmed history.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Optional, TypeVar

from app.schemas.ai import ChatTurn, TurnRole
from models.base import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReplicatedList(Generic[T]):
    """Holds the last snapshot of a server-side list."""

    def __init__(self) -> None:
        self._items: tuple[T, ...] = ()
        self.version = 0
        self.refreshed_at: Optional[datetime] = None

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def replace(self, items: Sequence[T]) -> None:
        """Swap in a new snapshot wholesale."""
        self._items = tuple(items)
        self.version += 1
        self.refreshed_at = utcnow()

    async def refresh(self, fetch: Callable[[], Awaitable[Sequence[T]]]) -> None:
        """Fetch a fresh snapshot and replace the current one.

        The previous snapshot is kept if ``fetch`` raises.
        """
        self.replace(await fetch())

    def __len__(self) -> int:
        return len(self._items)


@dataclass
class PendingExchange:
    """One optimistic prompt and, once the server answers, its reply.

    ``settled_at`` is the view's clock value when the exchange stopped being
    in flight, either because a reply arrived or because the send failed.
    """

    prompt: ChatTurn
    reply: Optional[ChatTurn] = None
    settled_at: Optional[int] = None

    @property
    def in_flight(self) -> bool:
        return self.settled_at is None

    @property
    def turns(self) -> list[ChatTurn]:
        return [self.prompt] if self.reply is None else [self.prompt, self.reply]


class AIChatView:
    """
    The AI conversation as shown to the user.

    ``confirmed`` is the last history returned by the server; ``overlay``
    holds turns the client displayed before the server confirmed them,
    grouped per exchange so a reply always sits right after its prompt.
    A reconcile discards settled exchanges but keeps those still in flight,
    along with any that settled after the reconciled fetch was started.
    """

    def __init__(self) -> None:
        self._confirmed: tuple[ChatTurn, ...] = ()
        self._pending: list[PendingExchange] = []
        self._clock = 0

    @property
    def confirmed(self) -> list[ChatTurn]:
        return list(self._confirmed)

    @property
    def overlay(self) -> list[ChatTurn]:
        return [turn for exchange in self._pending for turn in exchange.turns]

    @property
    def turns(self) -> list[ChatTurn]:
        return [*self._confirmed, *self.overlay]

    @property
    def has_pending(self) -> bool:
        return any(exchange.in_flight for exchange in self._pending)

    def mark(self) -> int:
        """Return a marker to pass to :meth:`reconcile` for a fetch about to start."""
        return self._clock

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def submit(self, prompt: str) -> PendingExchange:
        """Show the user's prompt immediately and return its exchange handle."""
        exchange = PendingExchange(prompt=ChatTurn(role=TurnRole.USER, content=prompt))
        self._pending.append(exchange)
        return exchange

    def acknowledge(self, exchange: PendingExchange, reply: str) -> ChatTurn:
        """Show the assistant reply directly after the prompt it answers."""
        exchange.reply = ChatTurn(role=TurnRole.ASSISTANT, content=reply)
        exchange.settled_at = self._tick()
        return exchange.reply

    def fail(self, exchange: PendingExchange) -> None:
        """Stop waiting for a reply; the prompt stays visible until the next reconcile."""
        exchange.settled_at = self._tick()

    def reconcile(self, turns: Sequence[ChatTurn], as_of: Optional[int] = None) -> None:
        """Adopt the server's history.

        Exchanges still in flight are kept. With ``as_of`` (a value from
        :meth:`mark` taken before the fetch), exchanges that settled after
        that point are kept too, since the fetched history may predate them.
        """
        kept = [
            exchange
            for exchange in self._pending
            if exchange.in_flight or (as_of is not None and exchange.settled_at > as_of)
        ]
        dropped = len(self._pending) - len(kept)
        if dropped:
            logger.debug("Discarding %s optimistic exchanges on reconcile", dropped)
        self._confirmed = tuple(turns)
        self._pending = kept
