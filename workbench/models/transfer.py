"""
Session transfer models
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class TransferAction(str, Enum):
    """Response to a pending transfer"""
    ACCEPT = "accept"
    DECLINE = "decline"


class TransferDecision(str, Enum):
    """Final outcome of a transfer"""
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class TransferRequest(BaseModel):
    """A pending request to hand a session over to another agent"""
    id: str
    session_name: str
    from_agent_id: str
    from_agent_name: Optional[str] = None
    to_agent_id: str
    to_agent_name: Optional[str] = None
    reason: str
    note: Optional[str] = None
    status: str = "pending"
    created_at: float


class TransferHistoryRecord(BaseModel):
    """A completed (accepted, declined or expired) transfer"""
    id: str
    session_name: str
    from_agent: str
    from_agent_name: Optional[str] = None
    to_agent: str
    to_agent_name: Optional[str] = None
    reason: str
    note: Optional[str] = None
    transferred_at: float
    accepted: bool
    decision: TransferDecision
    responded_at: Optional[float] = None
    response_note: Optional[str] = None
