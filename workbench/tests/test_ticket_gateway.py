"""
Unit tests for TicketGateway

Tests:
- Endpoint paths, query params and bodies
- Search / archived / filter payload shapes
- Batch results with partial failures
- Export filename resolution and export errors
- Assignment recommendation
"""
import re
from datetime import datetime, timezone

import httpx
import pytest

from workbench.models.ticket import (
    ArchivedTicketParams,
    BatchAssignRequest,
    BatchPriorityRequest,
    SmartAssignPayload,
    TicketExportRequest,
    TicketFilterPayload,
    TicketListFilters,
    UpdateTicketPayload,
)
from workbench.services.errors import RemoteError
from workbench.services.ticket_gateway import export_extension, resolve_export_filename

from workbench.tests.helpers import API_BASE, envelope, error_response, page_data, sent_request, ticket_data


class TestListEndpoints:
    """List, search, filter and archived endpoints"""

    @pytest.mark.asyncio
    async def test_list_omits_unset_filters(self, gateway, mock_http):
        mock_http.request.return_value = envelope(page_data([ticket_data("T1")]))

        page = await gateway.list_tickets(TicketListFilters(status="pending", limit=50))

        method, url, kwargs = sent_request(mock_http)
        assert (method, url) == ("GET", f"{API_BASE}/api/tickets")
        assert kwargs["params"] == {"status": "pending", "limit": 50}
        assert [t.ticket_id for t in page.tickets] == ["T1"]

    @pytest.mark.asyncio
    async def test_list_without_filters_sends_no_params(self, gateway, mock_http):
        mock_http.request.return_value = envelope(page_data([]))

        await gateway.list_tickets()

        _, _, kwargs = sent_request(mock_http)
        assert "params" not in kwargs

    @pytest.mark.asyncio
    async def test_search_accepts_wrapped_and_bare_lists(self, gateway, mock_http):
        mock_http.request.side_effect = [
            envelope({"tickets": [ticket_data("T1"), ticket_data("T2")]}),
            envelope([ticket_data("T3")]),
            envelope(None),
        ]

        wrapped = await gateway.search_tickets("refund")
        bare = await gateway.search_tickets("refund")
        empty = await gateway.search_tickets("refund")

        assert [t.ticket_id for t in wrapped] == ["T1", "T2"]
        assert [t.ticket_id for t in bare] == ["T3"]
        assert empty == []
        _, url, kwargs = sent_request(mock_http, 0)
        assert url == f"{API_BASE}/api/tickets/search"
        assert kwargs["params"] == {"query": "refund"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", ["oops", 42, {"tickets": "oops"}])
    async def test_search_scalar_payload_is_remote_error(self, gateway, mock_http, data):
        mock_http.request.return_value = envelope(data)

        with pytest.raises(RemoteError, match="Malformed response payload"):
            await gateway.search_tickets("refund")

    @pytest.mark.asyncio
    async def test_filter_body(self, gateway, mock_http):
        mock_http.request.return_value = envelope(page_data([], total=0))
        payload = TicketFilterPayload(
            statuses=["pending", "in_progress"],
            priorities=["urgent"],
            keyword="refund",
            created_start=datetime(2024, 1, 1, tzinfo=timezone.utc),
            sort_by="updated_at",
            sort_desc=True,
        )

        await gateway.filter_tickets(payload)

        method, url, kwargs = sent_request(mock_http)
        assert (method, url) == ("POST", f"{API_BASE}/api/tickets/filter")
        assert kwargs["json"] == {
            "statuses": ["pending", "in_progress"],
            "priorities": ["urgent"],
            "keyword": "refund",
            "created_start": 1704067200.0,
            "sort_by": "updated_at",
            "sort_desc": True,
        }

    @pytest.mark.asyncio
    async def test_archived_params(self, gateway, mock_http):
        mock_http.request.return_value = envelope(page_data([]))

        await gateway.list_archived_tickets(ArchivedTicketParams(
            customer_email="a@example.com",
            start_date="2024-03-01T10:00:00Z",
            end_date="2024-03-31",
        ))

        _, url, kwargs = sent_request(mock_http)
        assert url == f"{API_BASE}/api/tickets/archived"
        assert kwargs["params"] == {
            "customer_email": "a@example.com",
            "start_date": "2024-03-01",
            "end_date": "2024-03-31",
        }


class TestMutationEndpoints:
    """Single-ticket mutation requests"""

    @pytest.mark.asyncio
    async def test_update_sends_only_set_fields(self, gateway, mock_http):
        """Explicit None is sent (unassign); untouched fields are not"""
        mock_http.request.return_value = envelope(ticket_data("T1"))

        await gateway.update_ticket("T1", UpdateTicketPayload(status="resolved", assigned_agent_id=None))

        method, url, kwargs = sent_request(mock_http)
        assert (method, url) == ("PATCH", f"{API_BASE}/api/tickets/T1")
        assert kwargs["json"] == {"status": "resolved", "assigned_agent_id": None}

    @pytest.mark.asyncio
    async def test_archive_without_payload_sends_empty_object(self, gateway, mock_http):
        mock_http.request.return_value = envelope(ticket_data("T1", status="archived"))

        ticket = await gateway.archive_ticket("T1")

        _, url, kwargs = sent_request(mock_http)
        assert url == f"{API_BASE}/api/tickets/T1/archive"
        assert kwargs["json"] == {}
        assert ticket.status.value == "archived"

    @pytest.mark.asyncio
    async def test_ids_are_escaped(self, gateway, mock_http):
        mock_http.request.return_value = envelope(None)

        await gateway.delete_comment("T/1", "C 1")

        method, url, _ = sent_request(mock_http)
        assert method == "DELETE"
        assert url == f"{API_BASE}/api/tickets/T%2F1/comments/C%201"


class TestBatchEndpoints:
    """Batch calls return per-item results"""

    @pytest.mark.asyncio
    async def test_batch_assign_partial_failure(self, gateway, mock_http):
        mock_http.request.return_value = envelope({
            "succeeded": 2,
            "failed": [{"ticket_id": "T9", "error": "locked"}],
            "tickets": [ticket_data("T1"), ticket_data("T2")],
        })

        result = await gateway.batch_assign(BatchAssignRequest(
            ticket_ids=["T1", "T2", "T9"],
            target_agent_id="agent-2",
        ))

        method, url, kwargs = sent_request(mock_http)
        assert (method, url) == ("POST", f"{API_BASE}/api/tickets/batch/assign")
        assert kwargs["json"] == {"ticket_ids": ["T1", "T2", "T9"], "target_agent_id": "agent-2"}
        assert result.succeeded == 2
        assert result.failed_ids == ["T9"]
        assert result.failed[0].error == "locked"
        assert len(result.tickets) == 2

    @pytest.mark.asyncio
    async def test_batch_priority_path(self, gateway, mock_http):
        mock_http.request.return_value = envelope({"succeeded": 0, "failed": [], "tickets": []})

        await gateway.batch_priority(BatchPriorityRequest(ticket_ids=["T1"], priority="urgent"))

        _, url, kwargs = sent_request(mock_http)
        assert url == f"{API_BASE}/api/tickets/batch/priority"
        assert kwargs["json"]["priority"] == "urgent"


class TestExportFilename:
    """Content-Disposition resolution"""

    def test_extended_filename_is_decoded(self):
        header = "attachment; filename*=UTF-8''invoice%20Q1.csv"
        assert resolve_export_filename(header, "csv") == "invoice Q1.csv"

    def test_quoted_filename(self):
        header = 'attachment; filename="tickets march.xlsx"'
        assert resolve_export_filename(header, "xlsx") == "tickets march.xlsx"

    def test_bare_filename(self):
        assert resolve_export_filename("attachment; filename=report.pdf", "pdf") == "report.pdf"

    def test_extended_preferred_over_plain(self):
        header = "attachment; filename=\"fallback.csv\"; filename*=UTF-8''%E5%B7%A5%E5%8D%95.csv"
        assert resolve_export_filename(header, "csv") == "工单.csv"

    def test_missing_header_synthesizes_name(self):
        assert re.fullmatch(r"tickets_\d+\.pdf", resolve_export_filename(None, "pdf"))

    def test_header_without_filename(self):
        assert resolve_export_filename("attachment", "xlsx", now_ms=1700000000123) == "tickets_1700000000123.xlsx"

    @pytest.mark.parametrize("fmt,ext", [
        ("csv", "csv"),
        ("XLSX", "xlsx"),
        ("pdf", "pdf"),
        ("docx", "csv"),
        (None, "csv"),
    ])
    def test_extension(self, fmt, ext):
        assert export_extension(fmt) == ext


class TestExport:
    """Export is status-only: no JSON envelope on success"""

    @pytest.mark.asyncio
    async def test_export_success(self, gateway, mock_http):
        mock_http.request.return_value = httpx.Response(
            200,
            content=b"ticket_id,title\nT1,Broken\n",
            headers={
                "content-type": "text/csv",
                "content-disposition": "attachment; filename*=UTF-8''invoice%20Q1.csv",
            },
        )

        result = await gateway.export_tickets(TicketExportRequest(format="csv"))

        method, url, kwargs = sent_request(mock_http)
        assert (method, url) == ("POST", f"{API_BASE}/api/tickets/export")
        assert kwargs["json"] == {"format": "csv", "filters": {}}
        assert result.content == b"ticket_id,title\nT1,Broken\n"
        assert result.filename == "invoice Q1.csv"
        assert result.media_type == "text/csv"

    @pytest.mark.asyncio
    async def test_export_without_disposition(self, gateway, mock_http):
        mock_http.request.return_value = httpx.Response(200, content=b"%PDF-1.4")

        result = await gateway.export_tickets(TicketExportRequest(format="pdf"))

        assert re.fullmatch(r"tickets_\d+\.pdf", result.filename)

    @pytest.mark.asyncio
    async def test_export_sends_filters(self, gateway, mock_http):
        mock_http.request.return_value = httpx.Response(200, content=b"x")

        await gateway.export_tickets(TicketExportRequest(
            format="xlsx",
            filters=TicketFilterPayload(statuses=["closed"]),
        ))

        _, _, kwargs = sent_request(mock_http)
        assert kwargs["json"] == {"format": "xlsx", "filters": {"statuses": ["closed"]}}

    @pytest.mark.asyncio
    async def test_export_failure_uses_detail(self, gateway, mock_http):
        mock_http.request.return_value = error_response(400, {"detail": "Too many rows"})

        with pytest.raises(RemoteError, match="Too many rows"):
            await gateway.export_tickets(TicketExportRequest(format="csv"))

    @pytest.mark.asyncio
    async def test_export_failure_without_body(self, gateway, mock_http):
        mock_http.request.return_value = error_response(503)

        with pytest.raises(RemoteError, match="HTTP 503"):
            await gateway.export_tickets(TicketExportRequest(format="csv"))


class TestRecommendAssignment:
    """Smart assignment recommendation"""

    @pytest.mark.asyncio
    async def test_recommendation(self, gateway, mock_http):
        mock_http.request.return_value = envelope({
            "agent_id": "agent-3",
            "agent_name": "Mia",
            "matched_tags": ["refund"],
            "manual_sessions": 1,
            "pending_sessions": 0,
            "load_score": 0.25,
            "reason": "Lowest load with matching tags",
        })

        rec = await gateway.recommend_assignment(SmartAssignPayload(
            ticket_type="after_sale", priority="high", tags=["refund"]
        ))

        _, url, kwargs = sent_request(mock_http)
        assert url == f"{API_BASE}/api/tickets/assign/recommend"
        assert kwargs["json"] == {"ticket_type": "after_sale", "priority": "high", "tags": ["refund"]}
        assert rec.agent_id == "agent-3"

    @pytest.mark.asyncio
    async def test_no_candidate(self, gateway, mock_http):
        mock_http.request.return_value = envelope(None)

        with pytest.raises(RemoteError, match="No agent available"):
            await gateway.recommend_assignment(SmartAssignPayload(
                ticket_type="complaint", priority="urgent"
            ))
