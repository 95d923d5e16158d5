"""
Remote API gateways
"""
from .errors import WorkbenchError, Unauthenticated, RemoteError, TransportError
from .api_client import ApiClient
from .ticket_gateway import TicketGateway, resolve_export_filename
from .template_gateway import TemplateGateway
from .assist_gateway import AssistGateway
from .transfer_gateway import TransferGateway

__all__ = [
    "WorkbenchError",
    "Unauthenticated",
    "RemoteError",
    "TransportError",
    "ApiClient",
    "TicketGateway",
    "resolve_export_filename",
    "TemplateGateway",
    "AssistGateway",
    "TransferGateway",
]
