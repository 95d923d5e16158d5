"""
Ticket store

Facade the console talks to. Owns one TicketCache and routes every
operation through the gateway before merging the server's answer:
- retrieval paths (TicketQueryExecutor)
- bulk operations (BatchCoordinator)
- single-ticket mutations, upserted on success
- comments: optimistic local change, then an authoritative silent re-fetch
- export and assignment recommendation (no cache effect)
"""
from typing import List, Optional, Union

from workbench.models.ticket import (
    ArchivedTicketParams,
    ArchiveTicketPayload,
    AssignTicketPayload,
    BatchAssignRequest,
    BatchCloseRequest,
    BatchPriorityRequest,
    BatchResult,
    CreateManualTicketPayload,
    ExportFormat,
    ExportResult,
    Pagination,
    ReopenTicketPayload,
    SmartAssignPayload,
    SmartAssignRecommendation,
    Ticket,
    TicketComment,
    TicketCommentPayload,
    TicketExportRequest,
    TicketFilterPayload,
    TicketListFilters,
    TicketListPage,
    TicketSlaAlerts,
    TicketSlaSummary,
    UpdateTicketPayload,
)
from workbench.services.ticket_gateway import TicketGateway
from workbench.stores.ticket_batch import BatchCoordinator
from workbench.stores.ticket_cache import TicketCache
from workbench.stores.ticket_queries import TicketQueryExecutor
from workbench.utils.logger import get_logger

logger = get_logger(__name__)


class TicketStore:
    """
    Client-side ticket state

    Args:
        gateway: Ticket API gateway (carries the token provider)
        cache: Cache to write into (a fresh one by default)
    """

    def __init__(self, gateway: TicketGateway, cache: Optional[TicketCache] = None):
        self.gateway = gateway
        self.cache = cache if cache is not None else TicketCache()
        self.queries = TicketQueryExecutor(gateway, self.cache)
        self.batch = BatchCoordinator(gateway, self.cache)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def tickets(self) -> List[Ticket]:
        return self.cache.list()

    @property
    def current_ticket(self) -> Optional[Ticket]:
        return self.cache.current()

    @property
    def pagination(self) -> Pagination:
        return self.cache.pagination

    @property
    def total(self) -> int:
        return self.cache.pagination.total

    @property
    def limit(self) -> int:
        return self.cache.pagination.limit

    @property
    def offset(self) -> int:
        return self.cache.pagination.offset

    @property
    def has_more(self) -> bool:
        return self.cache.pagination.has_more

    @property
    def list_loading(self) -> bool:
        return self.queries.list_status.loading

    @property
    def list_error(self) -> Optional[str]:
        return self.queries.list_status.error

    @property
    def search_loading(self) -> bool:
        return self.queries.search_status.loading

    @property
    def search_error(self) -> Optional[str]:
        return self.queries.search_status.error

    @property
    def filter_loading(self) -> bool:
        return self.queries.filter_status.loading

    @property
    def filter_error(self) -> Optional[str]:
        return self.queries.filter_status.error

    @property
    def archived_loading(self) -> bool:
        return self.queries.archived_status.loading

    @property
    def archived_error(self) -> Optional[str]:
        return self.queries.archived_status.error

    @property
    def tickets_loading(self) -> bool:
        """True while any list-shaped fetch is in flight"""
        q = self.queries
        return any(
            status.loading
            for status in (q.list_status, q.search_status, q.filter_status, q.archived_status)
        )

    @property
    def detail_loading(self) -> bool:
        return self.queries.detail_status.loading

    @property
    def detail_error(self) -> Optional[str]:
        return self.queries.detail_status.error

    @property
    def sla_summary(self) -> Optional[TicketSlaSummary]:
        return self.queries.sla_summary

    @property
    def sla_alerts(self) -> Optional[TicketSlaAlerts]:
        return self.queries.sla_alerts

    @property
    def sla_summary_loading(self) -> bool:
        return self.queries.sla_summary_status.loading

    @property
    def sla_alerts_loading(self) -> bool:
        return self.queries.sla_alerts_status.loading

    @property
    def sla_error(self) -> Optional[str]:
        return self.queries.sla_summary_status.error

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    async def fetch_tickets(self, filters: Optional[TicketListFilters] = None) -> TicketListPage:
        return await self.queries.fetch_tickets(filters)

    async def search_tickets(self, query: str) -> TicketListPage:
        return await self.queries.search_tickets(query)

    async def filter_tickets(self, payload: Optional[TicketFilterPayload] = None) -> TicketListPage:
        return await self.queries.filter_tickets(payload)

    async def fetch_archived_tickets(
        self,
        params: Optional[ArchivedTicketParams] = None
    ) -> TicketListPage:
        return await self.queries.fetch_archived_tickets(params)

    async def fetch_ticket_by_id(self, ticket_id: str, silent: bool = False) -> Ticket:
        return await self.queries.fetch_ticket_by_id(ticket_id, silent=silent)

    async def fetch_sla_summary(self) -> TicketSlaSummary:
        return await self.queries.fetch_sla_summary()

    async def fetch_sla_alerts(self) -> TicketSlaAlerts:
        return await self.queries.fetch_sla_alerts()

    # ------------------------------------------------------------------
    # Single-ticket mutations
    # ------------------------------------------------------------------

    async def create_manual_ticket(self, payload: CreateManualTicketPayload) -> Ticket:
        created = await self.gateway.create_manual_ticket(payload)
        self.cache.upsert(created)
        logger.info(f"Created ticket {created.ticket_id}")
        return created

    async def update_ticket(self, ticket_id: str, payload: UpdateTicketPayload) -> Ticket:
        updated = await self.gateway.update_ticket(ticket_id, payload)
        self.cache.upsert(updated)
        return updated

    async def assign_ticket(self, ticket_id: str, payload: AssignTicketPayload) -> Ticket:
        updated = await self.gateway.assign_ticket(ticket_id, payload)
        self.cache.upsert(updated)
        return updated

    async def reopen_ticket(self, ticket_id: str, payload: ReopenTicketPayload) -> Ticket:
        reopened = await self.gateway.reopen_ticket(ticket_id, payload)
        self.cache.upsert(reopened)
        logger.info(f"Reopened ticket {ticket_id} (reopened_count={reopened.reopened_count})")
        return reopened

    async def archive_ticket(
        self,
        ticket_id: str,
        payload: Optional[ArchiveTicketPayload] = None
    ) -> Ticket:
        archived = await self.gateway.archive_ticket(ticket_id, payload)
        self.cache.upsert(archived)
        return archived

    def remove_ticket_from_list(self, ticket_id: str) -> None:
        """Evict a ticket locally (no server call)"""
        self.cache.evict(ticket_id)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def add_ticket_comment(self, ticket_id: str, payload: TicketCommentPayload) -> TicketComment:
        """
        Add a comment in two phases

        1. Append the server-created comment to the open ticket right away
        2. Re-fetch the ticket silently; the server's copy replaces the local one
           (it may carry side effects such as first_response_at)

        Returns:
            The created comment
        """
        comment = await self.gateway.add_comment(ticket_id, payload)

        current = self.cache.current()
        if current is not None and current.ticket_id == ticket_id:
            self.cache.set_current(
                current.model_copy(update={"comments": [*current.comments, comment]})
            )

        await self.queries.fetch_ticket_by_id(ticket_id, silent=True)
        return comment

    async def delete_ticket_comment(self, ticket_id: str, comment_id: str) -> None:
        """Delete a comment and drop it from the open ticket (no re-fetch)"""
        await self.gateway.delete_comment(ticket_id, comment_id)

        current = self.cache.current()
        if current is not None and current.ticket_id == ticket_id:
            remaining = [c for c in current.comments if c.comment_id != comment_id]
            self.cache.set_current(current.model_copy(update={"comments": remaining}))

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    async def batch_assign_tickets(self, request: BatchAssignRequest) -> BatchResult:
        return await self.batch.assign(request)

    async def batch_close_tickets(self, request: BatchCloseRequest) -> BatchResult:
        return await self.batch.close(request)

    async def batch_update_priority(self, request: BatchPriorityRequest) -> BatchResult:
        return await self.batch.set_priority(request)

    # ------------------------------------------------------------------
    # Export / recommendation
    # ------------------------------------------------------------------

    async def export_tickets(
        self,
        export_format: Union[ExportFormat, str] = ExportFormat.CSV,
        filters: Optional[TicketFilterPayload] = None
    ) -> ExportResult:
        """Download a rendering (csv/xlsx/pdf) of the tickets matching `filters`"""
        request = TicketExportRequest(format=export_format, filters=filters)
        return await self.gateway.export_tickets(request)

    async def recommend_assignment(self, payload: SmartAssignPayload) -> SmartAssignRecommendation:
        return await self.gateway.recommend_assignment(payload)
