"""
Batch operation coordinator

A batch call fails only on auth/transport/envelope errors. Otherwise the
server reports per item: every ticket in `result.tickets` is upserted, ids in
`result.failed` are left untouched, and the result is handed back to the
caller to surface counts and reasons.
"""
from workbench.models.ticket import (
    BatchAssignRequest,
    BatchCloseRequest,
    BatchPriorityRequest,
    BatchResult,
)
from workbench.services.ticket_gateway import TicketGateway
from workbench.stores.ticket_cache import TicketCache
from workbench.utils.logger import get_logger

logger = get_logger(__name__)


class BatchCoordinator:
    """Bulk assign / close / priority with per-item merge into the cache"""

    def __init__(self, gateway: TicketGateway, cache: TicketCache):
        self.gateway = gateway
        self.cache = cache

    def _merge(self, operation: str, result: BatchResult) -> BatchResult:
        for ticket in result.tickets:
            self.cache.upsert(ticket)

        if result.has_failures:
            logger.warning(
                f"Batch {operation}: {result.succeeded} succeeded, "
                f"{len(result.failed)} failed ({', '.join(result.failed_ids)})"
            )
        else:
            logger.info(f"Batch {operation}: {result.succeeded} succeeded")
        return result

    async def assign(self, request: BatchAssignRequest) -> BatchResult:
        result = await self.gateway.batch_assign(request)
        return self._merge("assign", result)

    async def close(self, request: BatchCloseRequest) -> BatchResult:
        result = await self.gateway.batch_close(request)
        return self._merge("close", result)

    async def set_priority(self, request: BatchPriorityRequest) -> BatchResult:
        result = await self.gateway.batch_priority(request)
        return self._merge("priority", result)
