"""
Session transfer store
"""
from typing import Any, List, Union

from workbench.models.transfer import TransferAction, TransferHistoryRecord, TransferRequest
from workbench.services.errors import Unauthenticated, WorkbenchError
from workbench.services.transfer_gateway import TransferGateway
from workbench.stores.query_state import QueryStatus
from workbench.utils.logger import get_logger

logger = get_logger(__name__)


class TransferStore:
    """Pending transfer requests addressed to the agent, and per-session history"""

    def __init__(self, gateway: TransferGateway):
        self.gateway = gateway
        self.pending_status = QueryStatus()
        self.history_status = QueryStatus()
        self._pending: List[TransferRequest] = []
        self._history: List[TransferHistoryRecord] = []

    @property
    def pending_requests(self) -> List[TransferRequest]:
        return list(self._pending)

    @property
    def loading_pending(self) -> bool:
        return self.pending_status.loading

    @property
    def history(self) -> List[TransferHistoryRecord]:
        return list(self._history)

    @property
    def loading_history(self) -> bool:
        return self.history_status.loading

    async def fetch_pending_requests(self) -> List[TransferRequest]:
        """
        Reload pending requests

        Raises:
            Unauthenticated: after clearing the pending list
        """
        with self.pending_status.track("Failed to load transfer requests"):
            try:
                self._pending = await self.gateway.list_pending()
            except WorkbenchError as e:
                logger.error(f"Failed to fetch transfer requests: {e}")
                if isinstance(e, Unauthenticated):
                    self._pending = []
                raise
            return self.pending_requests

    async def respond_transfer_request(
        self,
        request_id: str,
        action: Union[TransferAction, str],
        response_note: str = ""
    ) -> Any:
        """Accept or decline, then refresh the pending list"""
        try:
            result = await self.gateway.respond(request_id, action, response_note)
        except WorkbenchError as e:
            logger.error(f"Failed to respond to transfer request {request_id}: {e}")
            raise

        await self.fetch_pending_requests()
        return result

    async def fetch_transfer_history(self, session_name: str) -> List[TransferHistoryRecord]:
        """Load transfer history of a session; history is emptied on any failure"""
        if not session_name:
            self._history = []
            return []

        with self.history_status.track("Failed to load transfer history"):
            try:
                self._history = await self.gateway.list_history(session_name)
            except WorkbenchError as e:
                logger.error(f"Failed to fetch transfer history for {session_name}: {e}")
                self._history = []
                raise
            return self.history

    def clear_history(self) -> None:
        self._history = []
