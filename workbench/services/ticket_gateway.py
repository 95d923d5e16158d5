"""
Ticket API Gateway

One method per ticket endpoint. Every method either returns the decoded
payload of a successful envelope or raises (see services.errors):
- Listing, keyword search, advanced filter, archived list
- Single-ticket reads and mutations, comments
- Batch assign / close / priority (per-item failures come back as data)
- SLA summary and alerts
- Binary export with Content-Disposition filename resolution
"""
import re
import time
from typing import Any, Dict, List, Optional, Union
from urllib.parse import unquote

from workbench.models.ticket import (
    Ticket,
    TicketListPage,
    TicketListFilters,
    ArchivedTicketParams,
    TicketFilterPayload,
    CreateManualTicketPayload,
    UpdateTicketPayload,
    AssignTicketPayload,
    TicketComment,
    TicketCommentPayload,
    ReopenTicketPayload,
    ArchiveTicketPayload,
    BatchAssignRequest,
    BatchCloseRequest,
    BatchPriorityRequest,
    BatchResult,
    TicketSlaSummary,
    TicketSlaAlerts,
    TicketExportRequest,
    ExportFormat,
    ExportResult,
    SmartAssignPayload,
    SmartAssignRecommendation,
)
from workbench.services.api_client import ApiClient, path_segment, parse_body, error_message
from workbench.services.errors import RemoteError
from workbench.utils.logger import get_logger

logger = get_logger(__name__)

_EXTENDED_FILENAME = re.compile(r"filename\*=UTF-8''([^;]+)", re.IGNORECASE)
_PLAIN_FILENAME = re.compile(r'filename="?([^";]+)"?', re.IGNORECASE)
_EXPORT_EXTENSIONS = {fmt.value for fmt in ExportFormat}


def export_extension(export_format: Union[str, ExportFormat, None]) -> str:
    """File extension for an export format; unknown formats fall back to csv"""
    if isinstance(export_format, ExportFormat):
        export_format = export_format.value
    key = str(export_format or "").strip().lower()
    return key if key in _EXPORT_EXTENSIONS else ExportFormat.CSV.value


def resolve_export_filename(
    disposition: Optional[str],
    export_format: Union[str, ExportFormat, None],
    now_ms: Optional[int] = None
) -> str:
    """
    Pick the filename for an export download

    Order:
    1. RFC 5987 `filename*=UTF-8''<value>` (percent-decoded)
    2. `filename="<value>"` or `filename=<value>`
    3. tickets_<unix millis>.<ext>

    Args:
        disposition: Content-Disposition header value (may be None)
        export_format: Requested format, used for the synthesized name
        now_ms: Timestamp override in milliseconds

    Returns:
        Filename
    """
    if disposition:
        for pattern in (_EXTENDED_FILENAME, _PLAIN_FILENAME):
            match = pattern.search(disposition)
            if match:
                name = unquote(match.group(1).strip())
                if name:
                    return name

    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"tickets_{now_ms}.{export_extension(export_format)}"


class TicketGateway(ApiClient):
    """Ticket endpoints of the workbench API"""

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    async def list_tickets(self, filters: Optional[TicketListFilters] = None) -> TicketListPage:
        """
        Fetch one page of tickets

        Args:
            filters: Optional status/priority/agent/limit/offset; unset fields are not sent

        Returns:
            Page with tickets in server order and pagination metadata
        """
        params = filters.to_params() if filters else {}
        data = await self._call("GET", "/api/tickets", params=params)
        return self._decode(TicketListPage, data)

    async def search_tickets(self, query: str) -> List[Ticket]:
        """Keyword search; returns the full result set in one list"""
        data = await self._call("GET", "/api/tickets/search", params={"query": query})
        items = data.get("tickets") if isinstance(data, dict) else data
        return self._decode_list(Ticket, items)

    async def filter_tickets(self, payload: Optional[TicketFilterPayload] = None) -> TicketListPage:
        """Advanced multi-field filter"""
        body = payload.to_body() if payload else {}
        data = await self._call("POST", "/api/tickets/filter", json=body)
        return self._decode(TicketListPage, data)

    async def list_archived_tickets(
        self,
        params: Optional[ArchivedTicketParams] = None
    ) -> TicketListPage:
        """Fetch one page of archived tickets"""
        query = params.to_params() if params else {}
        data = await self._call("GET", "/api/tickets/archived", params=query)
        return self._decode(TicketListPage, data)

    async def get_ticket(self, ticket_id: str) -> Ticket:
        data = await self._call("GET", f"/api/tickets/{path_segment(ticket_id)}")
        return self._decode(Ticket, data)

    async def get_sla_summary(self) -> TicketSlaSummary:
        data = await self._call("GET", "/api/tickets/sla-summary")
        return self._decode(TicketSlaSummary, data)

    async def get_sla_alerts(self) -> TicketSlaAlerts:
        data = await self._call("GET", "/api/tickets/sla-alerts")
        return self._decode(TicketSlaAlerts, data)

    # ------------------------------------------------------------------
    # Single-ticket mutations
    # ------------------------------------------------------------------

    async def create_manual_ticket(self, payload: CreateManualTicketPayload) -> Ticket:
        logger.info(f"Creating manual ticket '{payload.title}'")
        data = await self._call(
            "POST",
            "/api/tickets/manual",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        return self._decode(Ticket, data)

    async def update_ticket(self, ticket_id: str, payload: UpdateTicketPayload) -> Ticket:
        """
        Partially update a ticket

        Only fields explicitly set on the payload are sent, so an explicit
        `assigned_agent_id=None` unassigns the ticket.
        """
        data = await self._call(
            "PATCH",
            f"/api/tickets/{path_segment(ticket_id)}",
            json=payload.model_dump(mode="json", exclude_unset=True)
        )
        return self._decode(Ticket, data)

    async def assign_ticket(self, ticket_id: str, payload: AssignTicketPayload) -> Ticket:
        data = await self._call(
            "POST",
            f"/api/tickets/{path_segment(ticket_id)}/assign",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        return self._decode(Ticket, data)

    async def add_comment(self, ticket_id: str, payload: TicketCommentPayload) -> TicketComment:
        data = await self._call(
            "POST",
            f"/api/tickets/{path_segment(ticket_id)}/comments",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        return self._decode(TicketComment, data)

    async def delete_comment(self, ticket_id: str, comment_id: str) -> None:
        await self._call(
            "DELETE",
            f"/api/tickets/{path_segment(ticket_id)}/comments/{path_segment(comment_id)}"
        )

    async def reopen_ticket(self, ticket_id: str, payload: ReopenTicketPayload) -> Ticket:
        data = await self._call(
            "POST",
            f"/api/tickets/{path_segment(ticket_id)}/reopen",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        return self._decode(Ticket, data)

    async def archive_ticket(
        self,
        ticket_id: str,
        payload: Optional[ArchiveTicketPayload] = None
    ) -> Ticket:
        body = payload.model_dump(mode="json", exclude_none=True) if payload else {}
        data = await self._call(
            "POST",
            f"/api/tickets/{path_segment(ticket_id)}/archive",
            json=body
        )
        return self._decode(Ticket, data)

    async def recommend_assignment(self, payload: SmartAssignPayload) -> SmartAssignRecommendation:
        """
        Ask the server which agent should take a ticket

        Raises:
            RemoteError: "No agent available" when the server has no candidate
        """
        data = await self._call(
            "POST",
            "/api/tickets/assign/recommend",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        if not data:
            raise RemoteError("No agent available")
        return self._decode(SmartAssignRecommendation, data)

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    async def _batch(self, operation: str, body: Dict[str, Any]) -> BatchResult:
        logger.info(f"Batch {operation} for {len(body.get('ticket_ids', []))} tickets")
        data = await self._call("POST", f"/api/tickets/batch/{operation}", json=body)
        return self._decode(BatchResult, data)

    async def batch_assign(self, payload: BatchAssignRequest) -> BatchResult:
        return await self._batch("assign", payload.model_dump(mode="json", exclude_none=True))

    async def batch_close(self, payload: BatchCloseRequest) -> BatchResult:
        return await self._batch("close", payload.model_dump(mode="json", exclude_none=True))

    async def batch_priority(self, payload: BatchPriorityRequest) -> BatchResult:
        return await self._batch("priority", payload.model_dump(mode="json", exclude_none=True))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export_tickets(self, request: TicketExportRequest) -> ExportResult:
        """
        Download a rendering of a filtered ticket set

        Success is decided by the HTTP status alone: the body is the file,
        not a JSON envelope.

        Args:
            request: Format plus optional filter

        Returns:
            ExportResult with raw bytes and the resolved filename
        """
        response = await self._send("POST", "/api/tickets/export", json=request.to_body())
        if not response.is_success:
            message = error_message(parse_body(response), response.status_code)
            logger.warning(f"Export rejected ({response.status_code}): {message}")
            raise RemoteError(message, status_code=response.status_code)

        filename = resolve_export_filename(
            response.headers.get("content-disposition"),
            request.format
        )
        logger.info(f"Exported {len(response.content)} bytes as {filename}")
        return ExportResult(
            content=response.content,
            filename=filename,
            media_type=response.headers.get("content-type")
        )
