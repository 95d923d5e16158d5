"""
Assist request inbox store
"""
from typing import List, Optional, Union

from workbench.models.assist import AssistInbox, AssistRequest, AssistStatus
from workbench.services.assist_gateway import AssistGateway
from workbench.stores.query_state import QueryStatus


class AssistRequestStore:
    """Received and sent assist requests of the logged-in agent"""

    def __init__(self, gateway: AssistGateway):
        self.gateway = gateway
        self.status = QueryStatus()
        self._received: List[AssistRequest] = []
        self._sent: List[AssistRequest] = []

    @property
    def received(self) -> List[AssistRequest]:
        return list(self._received)

    @property
    def sent(self) -> List[AssistRequest]:
        return list(self._sent)

    @property
    def loading(self) -> bool:
        return self.status.loading

    @property
    def pending_count(self) -> int:
        """Received requests still waiting for an answer"""
        return sum(1 for item in self._received if item.status == AssistStatus.PENDING)

    async def fetch_requests(
        self,
        status: Union[AssistStatus, str, None] = AssistStatus.PENDING
    ) -> AssistInbox:
        """Replace both lists with the server's inbox ("all" disables the status filter)"""
        with self.status.track("Failed to load assist requests"):
            inbox = await self.gateway.list_requests(status)
            self._received = list(inbox.received)
            self._sent = list(inbox.sent)
            return inbox

    async def answer_request(self, request_id: str, answer: str) -> Optional[AssistRequest]:
        return await self.gateway.answer_request(request_id, answer)

    def clear(self) -> None:
        self._received = []
        self._sent = []
