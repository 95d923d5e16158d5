"""
Ticket template API gateway
"""
from typing import List

from workbench.models.template import (
    TicketTemplate,
    TicketTemplatePayload,
    RenderTemplateRequest,
    RenderTemplateResponse,
)
from workbench.services.api_client import ApiClient, path_segment


class TemplateGateway(ApiClient):
    """CRUD and rendering for ticket templates"""

    async def list_templates(self) -> List[TicketTemplate]:
        data = await self._call("GET", "/api/templates")
        return self._decode_list(TicketTemplate, data)

    async def create_template(self, payload: TicketTemplatePayload) -> TicketTemplate:
        data = await self._call(
            "POST",
            "/api/templates",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        return self._decode(TicketTemplate, data)

    async def update_template(self, template_id: str, payload: TicketTemplatePayload) -> TicketTemplate:
        data = await self._call(
            "PUT",
            f"/api/templates/{path_segment(template_id)}",
            json=payload.model_dump(mode="json", exclude_none=True)
        )
        return self._decode(TicketTemplate, data)

    async def delete_template(self, template_id: str) -> None:
        await self._call("DELETE", f"/api/templates/{path_segment(template_id)}")

    async def render_template(
        self,
        template_id: str,
        payload: RenderTemplateRequest
    ) -> RenderTemplateResponse:
        """Substitute variables server-side and return the rendered text"""
        data = await self._call(
            "POST",
            f"/api/templates/{path_segment(template_id)}/render",
            json=payload.model_dump(mode="json")
        )
        return self._decode(RenderTemplateResponse, data)
