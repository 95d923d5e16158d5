"""
Pydantic models for the Agent Workbench client
"""

from workbench.models.ticket import (
    # Enums
    TicketStatus,
    TicketPriority,
    TicketType,
    CommentType,
    TicketSortField,
    ExportFormat,

    # Entities
    Ticket,
    TicketCustomerInfo,
    TicketStatusHistory,
    TicketAssignmentRecord,
    TicketComment,

    # Lists
    Pagination,
    TicketListPage,
    TicketListFilters,
    ArchivedTicketParams,
    TicketFilterPayload,

    # Mutations
    CreateManualTicketPayload,
    UpdateTicketPayload,
    AssignTicketPayload,
    TicketCommentPayload,
    ReopenTicketPayload,
    ArchiveTicketPayload,

    # Batch
    BatchAssignRequest,
    BatchCloseRequest,
    BatchPriorityRequest,
    BatchFailure,
    BatchResult,

    # SLA / export / recommendation
    TicketSlaSummary,
    TicketSlaAlert,
    TicketSlaAlerts,
    TicketExportRequest,
    ExportResult,
    SmartAssignPayload,
    SmartAssignRecommendation,
)
from workbench.models.template import (
    TicketTemplate,
    TicketTemplatePayload,
    RenderTemplateRequest,
    RenderTemplateResponse,
)
from workbench.models.assist import AssistStatus, AssistRequest, AssistInbox
from workbench.models.transfer import (
    TransferAction,
    TransferDecision,
    TransferRequest,
    TransferHistoryRecord,
)

__all__ = [
    # Enums
    "TicketStatus",
    "TicketPriority",
    "TicketType",
    "CommentType",
    "TicketSortField",
    "ExportFormat",
    "AssistStatus",
    "TransferAction",
    "TransferDecision",

    # Entities
    "Ticket",
    "TicketCustomerInfo",
    "TicketStatusHistory",
    "TicketAssignmentRecord",
    "TicketComment",
    "TicketTemplate",
    "AssistRequest",
    "AssistInbox",
    "TransferRequest",
    "TransferHistoryRecord",

    # Lists
    "Pagination",
    "TicketListPage",
    "TicketListFilters",
    "ArchivedTicketParams",
    "TicketFilterPayload",

    # Payloads
    "CreateManualTicketPayload",
    "UpdateTicketPayload",
    "AssignTicketPayload",
    "TicketCommentPayload",
    "ReopenTicketPayload",
    "ArchiveTicketPayload",
    "BatchAssignRequest",
    "BatchCloseRequest",
    "BatchPriorityRequest",
    "TicketTemplatePayload",
    "RenderTemplateRequest",
    "SmartAssignPayload",

    # Results
    "BatchFailure",
    "BatchResult",
    "TicketSlaSummary",
    "TicketSlaAlert",
    "TicketSlaAlerts",
    "TicketExportRequest",
    "ExportResult",
    "RenderTemplateResponse",
    "SmartAssignRecommendation",
]
