"""
Assist request models (agent-to-agent help questions)
"""
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field


class AssistStatus(str, Enum):
    """Assist request status"""
    PENDING = "pending"
    ANSWERED = "answered"


class AssistRequest(BaseModel):
    """A question one agent asked another about a session"""
    id: str
    session_name: str
    requester: str
    assistant: str
    question: str
    answer: Optional[str] = None
    status: AssistStatus
    created_at: float
    answered_at: Optional[float] = None


class AssistInbox(BaseModel):
    """Requests addressed to the agent and requests the agent sent"""
    received: List[AssistRequest] = Field(default_factory=list)
    sent: List[AssistRequest] = Field(default_factory=list)
