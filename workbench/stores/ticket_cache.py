"""
Ticket Cache

Ordered, server-ordered collection of tickets plus pagination cursor and the
"currently open" ticket. This is the only place the in-memory ticket
collection is mutated.

Invariant: when the current ticket's id is also in the list, both hold the
same value after every mutation.
"""
from typing import List, Optional

from workbench.config import get_settings
from workbench.models.ticket import Pagination, Ticket
from workbench.utils.logger import get_logger

logger = get_logger(__name__)


class TicketCache:
    """
    Single-writer ticket cache

    Args:
        page_size: Initial pagination limit (defaults to settings.default_page_size)
    """

    def __init__(self, page_size: Optional[int] = None):
        if page_size is None:
            page_size = get_settings().default_page_size
        self._tickets: List[Ticket] = []
        self._pagination = Pagination(limit=page_size)
        self._current: Optional[Ticket] = None

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    def list(self) -> List[Ticket]:
        """Snapshot of the cached tickets in server order"""
        return list(self._tickets)

    def current(self) -> Optional[Ticket]:
        return self._current

    @property
    def pagination(self) -> Pagination:
        return self._pagination

    def get(self, ticket_id: str) -> Optional[Ticket]:
        index = self._index_of(ticket_id)
        return self._tickets[index] if index >= 0 else None

    def __len__(self) -> int:
        return len(self._tickets)

    def __contains__(self, ticket_id: object) -> bool:
        return isinstance(ticket_id, str) and self._index_of(ticket_id) >= 0

    def _index_of(self, ticket_id: str) -> int:
        for index, ticket in enumerate(self._tickets):
            if ticket.ticket_id == ticket_id:
                return index
        return -1

    def _is_current(self, ticket_id: str) -> bool:
        return self._current is not None and self._current.ticket_id == ticket_id

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def upsert(self, ticket: Ticket) -> None:
        """
        Replace in place when the id is cached, otherwise insert at the front

        The current ticket is replaced too when it has the same id.
        """
        index = self._index_of(ticket.ticket_id)
        if index >= 0:
            self._tickets[index] = ticket
        else:
            self._tickets.insert(0, ticket)
        if self._is_current(ticket.ticket_id):
            self._current = ticket

    def replace_all(self, tickets: List[Ticket], pagination: Pagination) -> None:
        """Discard the list and pagination in favour of a freshly fetched page"""
        self._tickets = list(tickets)
        self._pagination = pagination
        if self._current is not None:
            fresh = self.get(self._current.ticket_id)
            if fresh is not None:
                self._current = fresh
        logger.debug(f"Cache replaced: {len(self._tickets)} tickets (total={pagination.total})")

    def evict(self, ticket_id: str) -> None:
        """Remove a ticket locally; unknown ids are a no-op"""
        index = self._index_of(ticket_id)
        if index >= 0:
            del self._tickets[index]
        if self._is_current(ticket_id):
            self._current = None

    def set_current(self, ticket: Optional[Ticket]) -> None:
        """
        Open a ticket in the detail slot (None closes it)

        A list entry with the same id is replaced in place; the ticket is not
        inserted into the list here (use upsert for that).
        """
        self._current = ticket
        if ticket is not None:
            index = self._index_of(ticket.ticket_id)
            if index >= 0:
                self._tickets[index] = ticket

    def clear(self) -> None:
        """Back to the initial empty state, keeping the page size"""
        self._tickets = []
        self._pagination = Pagination(limit=self._pagination.limit)
        self._current = None
