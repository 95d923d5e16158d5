"""
Ticket query executor

Runs the retrieval paths against the gateway and applies the results to the
cache:
- paged list, keyword search, advanced filter and archived list each have
  their own loading flag and error slot, and all wholesale-replace the cache
- single-ticket fetch has its own detail status and upserts
- SLA summary/alerts keep separate read-only snapshots with their own
  loading flags and one shared error slot

Overlapping fetches are not sequenced: the response applied last wins.
"""
from typing import Optional

from workbench.models.ticket import (
    ArchivedTicketParams,
    Ticket,
    TicketFilterPayload,
    TicketListFilters,
    TicketListPage,
    TicketSlaAlerts,
    TicketSlaSummary,
)
from workbench.services.ticket_gateway import TicketGateway
from workbench.stores.query_state import ErrorSlot, QueryStatus
from workbench.stores.ticket_cache import TicketCache
from workbench.utils.logger import get_logger

logger = get_logger(__name__)


class TicketQueryExecutor:
    """Retrieval paths for the ticket store"""

    def __init__(self, gateway: TicketGateway, cache: TicketCache):
        self.gateway = gateway
        self.cache = cache
        self.list_status = QueryStatus()
        self.search_status = QueryStatus()
        self.filter_status = QueryStatus()
        self.archived_status = QueryStatus()
        self.detail_status = QueryStatus()
        sla_errors = ErrorSlot()
        self.sla_summary_status = QueryStatus(sla_errors)
        self.sla_alerts_status = QueryStatus(sla_errors)
        self.sla_summary: Optional[TicketSlaSummary] = None
        self.sla_alerts: Optional[TicketSlaAlerts] = None

    def _apply_page(self, page: TicketListPage, source: str) -> TicketListPage:
        self.cache.replace_all(page.tickets, page.pagination)
        logger.info(
            f"Loaded {len(page.tickets)} tickets from {source} "
            f"(total={page.total}, offset={page.offset}, has_more={page.has_more})"
        )
        return page

    async def fetch_tickets(self, filters: Optional[TicketListFilters] = None) -> TicketListPage:
        """
        Paged list

        Args:
            filters: status / priority / assigned_agent_id / limit / offset

        Returns:
            The fetched page (already applied to the cache)
        """
        with self.list_status.track("Failed to load tickets"):
            page = await self.gateway.list_tickets(filters)
            return self._apply_page(page, "list")

    async def search_tickets(self, query: str) -> TicketListPage:
        """
        Keyword search

        A blank query is not a search: it runs the unfiltered paged list.
        Search results are one unpaginated page, so total == limit == number
        of results, offset is 0 and has_more is False.
        """
        keyword = (query or "").strip()
        if not keyword:
            return await self.fetch_tickets()

        with self.search_status.track("Failed to search tickets"):
            results = await self.gateway.search_tickets(keyword)
            page = TicketListPage(
                tickets=results,
                total=len(results),
                limit=len(results),
                offset=0,
                has_more=False
            )
            return self._apply_page(page, f"search '{keyword}'")

    async def filter_tickets(self, payload: Optional[TicketFilterPayload] = None) -> TicketListPage:
        """Advanced multi-field filter"""
        with self.filter_status.track("Advanced filter failed"):
            page = await self.gateway.filter_tickets(payload or TicketFilterPayload())
            return self._apply_page(page, "filter")

    async def fetch_archived_tickets(
        self,
        params: Optional[ArchivedTicketParams] = None
    ) -> TicketListPage:
        """Archived list, constrained by customer email and date range"""
        with self.archived_status.track("Failed to load archived tickets"):
            page = await self.gateway.list_archived_tickets(params)
            return self._apply_page(page, "archive")

    async def fetch_ticket_by_id(self, ticket_id: str, silent: bool = False) -> Ticket:
        """
        Load one ticket, open it in the detail slot and upsert it into the list

        Args:
            ticket_id: Ticket to load
            silent: Leave the detail loading flag alone (reconciliation re-fetch)
        """
        with self.detail_status.track("Failed to load ticket details", silent=silent):
            ticket = await self.gateway.get_ticket(ticket_id)
            self.cache.set_current(ticket)
            self.cache.upsert(ticket)
            return ticket

    async def fetch_sla_summary(self) -> TicketSlaSummary:
        with self.sla_summary_status.track("Failed to load SLA summary"):
            self.sla_summary = await self.gateway.get_sla_summary()
            return self.sla_summary

    async def fetch_sla_alerts(self) -> TicketSlaAlerts:
        with self.sla_alerts_status.track("Failed to load SLA alerts"):
            self.sla_alerts = await self.gateway.get_sla_alerts()
            return self.sla_alerts