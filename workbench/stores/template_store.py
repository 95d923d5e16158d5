"""
Ticket template store
"""
from typing import List, Optional

from workbench.models.template import (
    RenderTemplateRequest,
    RenderTemplateResponse,
    TicketTemplate,
    TicketTemplatePayload,
)
from workbench.services.template_gateway import TemplateGateway
from workbench.stores.query_state import QueryStatus


class TemplateStore:
    """Cached template list, newest first for templates created in this session"""

    def __init__(self, gateway: TemplateGateway):
        self.gateway = gateway
        self.status = QueryStatus()
        self._templates: List[TicketTemplate] = []

    @property
    def templates(self) -> List[TicketTemplate]:
        return list(self._templates)

    @property
    def loading(self) -> bool:
        return self.status.loading

    @property
    def error(self) -> Optional[str]:
        return self.status.error

    async def load_templates(self) -> List[TicketTemplate]:
        with self.status.track("Failed to load templates"):
            self._templates = await self.gateway.list_templates()
            return self.templates

    async def create_template(self, payload: TicketTemplatePayload) -> TicketTemplate:
        template = await self.gateway.create_template(payload)
        self._templates = [template, *self._templates]
        return template

    async def update_template(self, template_id: str, payload: TicketTemplatePayload) -> TicketTemplate:
        updated = await self.gateway.update_template(template_id, payload)
        self._templates = [updated if t.id == template_id else t for t in self._templates]
        return updated

    async def delete_template(self, template_id: str) -> None:
        await self.gateway.delete_template(template_id)
        self._templates = [t for t in self._templates if t.id != template_id]

    async def render_template(
        self,
        template_id: str,
        payload: RenderTemplateRequest
    ) -> RenderTemplateResponse:
        return await self.gateway.render_template(template_id, payload)
