"""
Assist request API gateway
"""
from typing import Any, Dict, Optional, Union

from workbench.models.assist import AssistInbox, AssistRequest, AssistStatus
from workbench.services.api_client import ApiClient, path_segment

ALL_STATUSES = "all"


class AssistGateway(ApiClient):
    """Inbox of agent-to-agent help requests"""

    async def list_requests(
        self,
        status: Union[AssistStatus, str, None] = AssistStatus.PENDING
    ) -> AssistInbox:
        """
        Fetch received and sent assist requests

        Args:
            status: pending / answered, or "all" (or None) for no status filter
        """
        if isinstance(status, AssistStatus):
            status = status.value
        params: Optional[Dict[str, Any]] = None
        if status and status != ALL_STATUSES:
            params = {"status": status}
        data = await self._call("GET", "/api/assist-requests", params=params)
        return self._decode(AssistInbox, data or {})

    async def answer_request(self, request_id: str, answer: str) -> Optional[AssistRequest]:
        """Answer a request; returns the updated request when the server sends one back"""
        data = await self._call(
            "POST",
            f"/api/assist-requests/{path_segment(request_id)}/answer",
            json={"answer": answer}
        )
        return self._decode(AssistRequest, data) if data else None
