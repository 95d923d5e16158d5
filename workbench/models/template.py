"""
Ticket template models
"""
from typing import Optional, Dict, Any, List

from pydantic import BaseModel, Field


class TicketTemplate(BaseModel):
    """Reusable reply/ticket template with {{variable}} placeholders"""
    id: str
    name: str
    category: Optional[str] = None
    content: str
    variables: List[str] = Field(default_factory=list)
    created_by: Optional[str] = None
    created_at: Optional[float] = None
    updated_at: Optional[float] = None


class TicketTemplatePayload(BaseModel):
    """Create/update payload"""
    name: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: Optional[str] = None
    variables: Optional[List[str]] = None


class RenderTemplateRequest(BaseModel):
    """Variable values to substitute"""
    variables: Dict[str, Any] = Field(default_factory=dict)


class RenderTemplateResponse(BaseModel):
    """Rendered template text"""
    content: str
    missing_variables: List[str] = Field(default_factory=list)
