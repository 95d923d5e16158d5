"""
Client-side state stores
"""
from .query_state import ErrorSlot, QueryStatus
from .ticket_cache import TicketCache
from .ticket_queries import TicketQueryExecutor
from .ticket_batch import BatchCoordinator
from .ticket_store import TicketStore
from .template_store import TemplateStore
from .assist_store import AssistRequestStore
from .transfer_store import TransferStore

__all__ = [
    "ErrorSlot",
    "QueryStatus",
    "TicketCache",
    "TicketQueryExecutor",
    "BatchCoordinator",
    "TicketStore",
    "TemplateStore",
    "AssistRequestStore",
    "TransferStore",
]
