"""
Shared test data builders and request inspection helpers
"""
import httpx
from typing import Any, Dict, Optional

from workbench.models.ticket import Ticket

API_BASE = "http://api.test"


def ticket_data(ticket_id: str = "T1", **overrides) -> Dict[str, Any]:
    """Server-shaped ticket dict"""
    data = {
        "ticket_id": ticket_id,
        "title": f"Ticket {ticket_id}",
        "description": "Order arrived damaged",
        "session_name": None,
        "ticket_type": "after_sale",
        "status": "pending",
        "priority": "medium",
        "created_by": "agent-1",
        "metadata": {},
        "history": [
            {
                "history_id": f"{ticket_id}-h1",
                "from_status": None,
                "to_status": "pending",
                "changed_by": "agent-1",
                "changed_at": 1700000000,
            }
        ],
        "reopened_count": 0,
        "assignments": [],
        "comments": [],
        "created_at": 1700000000,
        "updated_at": 1700000000,
    }
    data.update(overrides)
    return data


def make_ticket(ticket_id: str = "T1", **overrides) -> Ticket:
    return Ticket.model_validate(ticket_data(ticket_id, **overrides))


def comment_data(comment_id: str = "C1", **overrides) -> Dict[str, Any]:
    data = {
        "comment_id": comment_id,
        "content": "Called the customer",
        "author_id": "agent-1",
        "comment_type": "internal",
        "created_at": 1700000100,
    }
    data.update(overrides)
    return data


def envelope(data: Any = None, status_code: int = 200, success: bool = True) -> httpx.Response:
    """JSON envelope response"""
    return httpx.Response(status_code, json={"success": success, "data": data})


def error_response(status_code: int, body: Optional[Any] = None, text: Optional[str] = None) -> httpx.Response:
    if text is not None:
        return httpx.Response(status_code, text=text)
    if body is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=body)


def page_data(tickets, total=None, limit=20, offset=0, has_more=False) -> Dict[str, Any]:
    return {
        "tickets": tickets,
        "total": len(tickets) if total is None else total,
        "limit": limit,
        "offset": offset,
        "has_more": has_more,
    }


def sent_request(mock_http, index: int = -1):
    """(method, url, kwargs) of a recorded request"""
    call = mock_http.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs
