"""
Pydantic models for tickets

Mirrors the ticket service's wire format:
- Ticket entity with its status history, assignments and comments
- Request payloads for single-ticket and batch mutations
- List pages, batch results, SLA views and export results
"""
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, List, Union

from dateutil import parser as date_parser
from pydantic import BaseModel, Field, ConfigDict, field_validator


# ============================================================================
# Enums
# ============================================================================

class TicketStatus(str, Enum):
    """Ticket lifecycle statuses (decided by the server)"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    WAITING_CUSTOMER = "waiting_customer"
    WAITING_VENDOR = "waiting_vendor"
    RESOLVED = "resolved"
    CLOSED = "closed"
    ARCHIVED = "archived"


class TicketPriority(str, Enum):
    """Valid ticket priorities"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TicketType(str, Enum):
    """Ticket classification"""
    PRE_SALE = "pre_sale"
    AFTER_SALE = "after_sale"
    COMPLAINT = "complaint"


class CommentType(str, Enum):
    """Comment visibility"""
    INTERNAL = "internal"
    PUBLIC = "public"


class TicketSortField(str, Enum):
    """Sort fields accepted by the advanced filter"""
    UPDATED_AT = "updated_at"
    CREATED_AT = "created_at"
    PRIORITY = "priority"
    STATUS = "status"
    RESOLVED_AT = "resolved_at"
    FIRST_RESPONSE_AT = "first_response_at"
    REOPENED_AT = "reopened_at"


class ExportFormat(str, Enum):
    """Export renderings"""
    CSV = "csv"
    XLSX = "xlsx"
    PDF = "pdf"


# ============================================================================
# Ticket entity
# ============================================================================

class TicketCustomerInfo(BaseModel):
    """Customer snapshot attached to a ticket"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None


class TicketStatusHistory(BaseModel):
    """One entry of the append-only status ledger"""
    model_config = ConfigDict(frozen=True)

    history_id: str
    from_status: Optional[TicketStatus] = None
    to_status: TicketStatus
    changed_by: str
    change_reason: Optional[str] = None
    comment: Optional[str] = None
    changed_at: float


class TicketAssignmentRecord(BaseModel):
    """Agent assignment record"""
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None
    assigned_by: Optional[str] = None
    note: Optional[str] = None
    assigned_at: float


class TicketComment(BaseModel):
    """Ticket comment (internal note or public reply)"""
    comment_id: str
    content: str
    author_id: str
    author_name: Optional[str] = None
    comment_type: CommentType = CommentType.INTERNAL
    created_at: float


class Ticket(BaseModel):
    """
    Ticket as returned by the server.

    The client never derives any of these fields locally: `status` is whatever
    the server sent, which matches the `to_status` of the latest history entry.

    Attributes:
        ticket_id: Unique ticket identifier
        ticket_type: Classification (pre_sale / after_sale / complaint)
        status: Lifecycle status
        priority: Priority level
        session_name: Linked chat session (optional)
        customer: Customer snapshot (optional)
        metadata: Arbitrary server-side metadata
        history: Status transitions, oldest first
        assignments: Assignment records, oldest first
        comments: Comments, oldest first
        reopened_count: Number of times the ticket was reopened
    """
    ticket_id: str
    title: str
    description: str = ""
    session_name: Optional[str] = None
    ticket_type: TicketType
    status: TicketStatus
    priority: TicketPriority
    created_by: str = ""
    created_by_name: Optional[str] = None
    assigned_agent_id: Optional[str] = None
    assigned_agent_name: Optional[str] = None
    customer: Optional[TicketCustomerInfo] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    history: List[TicketStatusHistory] = Field(default_factory=list)
    closed_at: Optional[float] = None
    archived_at: Optional[float] = None
    reopened_count: int = 0
    reopened_at: Optional[float] = None
    reopened_by: Optional[str] = None
    first_response_at: Optional[float] = None
    resolved_at: Optional[float] = None
    assignments: List[TicketAssignmentRecord] = Field(default_factory=list)
    comments: List[TicketComment] = Field(default_factory=list)
    created_at: float
    updated_at: float

    @property
    def latest_status_change(self) -> Optional[TicketStatusHistory]:
        """Most recent history entry, if any"""
        return self.history[-1] if self.history else None


# ============================================================================
# Lists and pagination
# ============================================================================

class Pagination(BaseModel):
    """Pagination cursor of the cached ticket list"""
    model_config = ConfigDict(frozen=True)

    total: int = 0
    limit: int = 20
    offset: int = 0
    has_more: bool = False


class TicketListPage(BaseModel):
    """List-shaped payload returned by list, filter and archived endpoints"""
    tickets: List[Ticket] = Field(default_factory=list)
    total: int = 0
    limit: int = 20
    offset: int = 0
    has_more: bool = False

    @property
    def pagination(self) -> Pagination:
        return Pagination(
            total=self.total,
            limit=self.limit,
            offset=self.offset,
            has_more=self.has_more
        )


class TicketListFilters(BaseModel):
    """Query constraints for the paged list; None fields are not sent"""
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_agent_id: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = Field(None, ge=0)

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def _to_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value).date()


class ArchivedTicketParams(BaseModel):
    """Query constraints for the archived list"""
    customer_email: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = Field(None, ge=0)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        """Accept date, datetime or ISO-8601 strings"""
        try:
            return _to_date(v)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid date: {v!r}") from e

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def _to_epoch(value: Union[int, float, str, datetime, None]) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        value = date_parser.isoparse(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


class TicketFilterPayload(BaseModel):
    """
    Advanced multi-field filter.

    Time bounds accept epoch seconds, datetimes or ISO-8601 strings and are
    always sent as epoch seconds (naive datetimes are taken as UTC).
    """
    statuses: Optional[List[TicketStatus]] = None
    priorities: Optional[List[TicketPriority]] = None
    ticket_types: Optional[List[TicketType]] = None
    assigned: Optional[str] = None
    assigned_agent_ids: Optional[List[str]] = None
    keyword: Optional[str] = None
    tags: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    created_start: Optional[float] = None
    created_end: Optional[float] = None
    updated_start: Optional[float] = None
    updated_end: Optional[float] = None
    limit: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = Field(None, ge=0)
    sort_by: Optional[TicketSortField] = None
    sort_desc: Optional[bool] = None

    @field_validator("created_start", "created_end", "updated_start", "updated_end", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        try:
            return _to_epoch(v)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid timestamp: {v!r}") from e

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


# ============================================================================
# Single-ticket mutation payloads
# ============================================================================

class CreateManualTicketPayload(BaseModel):
    """Payload for creating a ticket by hand"""
    title: str = Field(..., min_length=1)
    description: str
    ticket_type: TicketType
    priority: TicketPriority
    customer: TicketCustomerInfo = Field(default_factory=TicketCustomerInfo)
    assigned_agent_id: Optional[str] = None
    assigned_agent_name: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class UpdateTicketPayload(BaseModel):
    """Partial ticket update; only fields explicitly set are sent"""
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    assigned_agent_id: Optional[str] = None
    assigned_agent_name: Optional[str] = None
    note: Optional[str] = None
    metadata_updates: Optional[Dict[str, Any]] = None
    change_reason: Optional[str] = None


class AssignTicketPayload(BaseModel):
    """Assign one ticket to an agent"""
    agent_id: str = Field(..., min_length=1)
    agent_name: Optional[str] = None
    note: Optional[str] = None


class TicketCommentPayload(BaseModel):
    """New comment"""
    content: str = Field(..., min_length=1)
    comment_type: Optional[CommentType] = None
    notify_agent_id: Optional[str] = None


class ReopenTicketPayload(BaseModel):
    """Reopen a resolved or closed ticket"""
    reason: str = Field(..., min_length=1)
    comment: Optional[str] = None


class ArchiveTicketPayload(BaseModel):
    """Archive a ticket"""
    reason: Optional[str] = None


# ============================================================================
# Batch operations
# ============================================================================

class BatchAssignRequest(BaseModel):
    """Assign several tickets to one agent"""
    ticket_ids: List[str] = Field(..., min_length=1)
    target_agent_id: str = Field(..., min_length=1)
    target_agent_name: Optional[str] = None
    note: Optional[str] = None


class BatchCloseRequest(BaseModel):
    """Close several tickets"""
    ticket_ids: List[str] = Field(..., min_length=1)
    close_reason: Optional[str] = None
    comment: Optional[str] = None


class BatchPriorityRequest(BaseModel):
    """Change the priority of several tickets"""
    ticket_ids: List[str] = Field(..., min_length=1)
    priority: TicketPriority
    reason: Optional[str] = None


class BatchFailure(BaseModel):
    """One ticket the server refused to mutate"""
    ticket_id: str
    error: str = ""


class BatchResult(BaseModel):
    """
    Outcome of a batch call.

    Per-item failures are data, not errors: `failed` lists the rejected ids and
    `tickets` holds the post-mutation state of every ticket that succeeded.
    """
    succeeded: int = 0
    failed: List[BatchFailure] = Field(default_factory=list)
    tickets: List[Ticket] = Field(default_factory=list)

    @property
    def failed_ids(self) -> List[str]:
        return [item.ticket_id for item in self.failed]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


# ============================================================================
# SLA views
# ============================================================================

class TicketSlaSummary(BaseModel):
    """Aggregated SLA figures computed by the server"""
    model_config = ConfigDict(frozen=True)

    total_tickets: int = 0
    open_tickets: int = 0
    pending_tickets: int = 0
    first_response_count: int = 0
    avg_first_response_seconds: Optional[float] = None
    resolution_count: int = 0
    avg_resolution_seconds: Optional[float] = None


class TicketSlaAlert(BaseModel):
    """A ticket breaching (or about to breach) an SLA target"""
    model_config = ConfigDict(frozen=True)

    ticket_id: str
    elapsed_seconds: float
    priority: TicketPriority


class TicketSlaAlerts(BaseModel):
    """SLA alerts grouped by target"""
    model_config = ConfigDict(frozen=True)

    first_response_alerts: List[TicketSlaAlert] = Field(default_factory=list)
    resolution_alerts: List[TicketSlaAlert] = Field(default_factory=list)


# ============================================================================
# Export and assignment recommendation
# ============================================================================

class TicketExportRequest(BaseModel):
    """Export a filtered ticket set; unknown formats are passed through"""
    format: str = ExportFormat.CSV.value
    filters: Optional[TicketFilterPayload] = None

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v):
        if isinstance(v, ExportFormat):
            return v.value
        return str(v or ExportFormat.CSV.value).strip().lower()

    def to_body(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "filters": self.filters.to_body() if self.filters else {}
        }


class ExportResult(BaseModel):
    """Binary export rendering and the filename to save it under"""
    content: bytes
    filename: str
    media_type: Optional[str] = None


class SmartAssignPayload(BaseModel):
    """Input for the agent recommendation endpoint"""
    ticket_type: TicketType
    priority: TicketPriority
    customer_email: Optional[str] = None
    customer_country: Optional[str] = None
    category: Optional[str] = None
    keywords: Optional[List[str]] = None
    tags: Optional[List[str]] = None


class SmartAssignRecommendation(BaseModel):
    """Recommended agent for a ticket"""
    agent_id: str
    agent_name: str
    matched_tags: List[str] = Field(default_factory=list)
    manual_sessions: int = 0
    pending_sessions: int = 0
    load_score: float = 0.0
    reason: str = ""
