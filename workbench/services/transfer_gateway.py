"""
Session transfer API gateway
"""
from typing import Any, List, Union

from workbench.models.transfer import TransferAction, TransferHistoryRecord, TransferRequest
from workbench.services.api_client import ApiClient, path_segment


class TransferGateway(ApiClient):
    """Pending transfer requests and per-session transfer history"""

    async def list_pending(self) -> List[TransferRequest]:
        data = await self._call("GET", "/api/transfer-requests/pending")
        return self._decode_list(TransferRequest, data)

    async def respond(
        self,
        request_id: str,
        action: Union[TransferAction, str],
        response_note: str = ""
    ) -> Any:
        """
        Accept or decline a transfer

        Returns:
            Envelope data as sent by the server
        """
        action = TransferAction(action)
        return await self._call(
            "POST",
            f"/api/transfer-requests/{path_segment(request_id)}/respond",
            json={"action": action.value, "response_note": response_note or ""}
        )

    async def list_history(self, session_name: str) -> List[TransferHistoryRecord]:
        data = await self._call(
            "GET",
            f"/api/sessions/{path_segment(session_name)}/transfer-history"
        )
        return self._decode_list(TransferHistoryRecord, data)
