import json
from decimal import Decimal

import httpx
import pytest

from tutor_admin.api.client import ApiClient
from tutor_admin.core.enums import MutationAction
from tutor_admin.core.exceptions import AuthError, NetworkError, ServerError
from tutor_admin.workflows.schemas import AddPaymentForm

from fake_backend import ADMIN_CODE, FakeSheet


def _client_with(handler) -> ApiClient:
    return ApiClient("http://test/exec", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_verify_accepts_valid_code(api: ApiClient) -> None:
    stats = await api.verify(ADMIN_CODE)
    assert stats.success is True
    assert stats.counts == {"students": 1, "lessons": 0}


@pytest.mark.asyncio
async def test_verify_rejects_wrong_code(api: ApiClient) -> None:
    with pytest.raises(AuthError):
        await api.verify("nope")


@pytest.mark.asyncio
async def test_load_all_parses_dataset(api: ApiClient, sheet: FakeSheet) -> None:
    sheet.payments = [{"StudentCode": "S1", "Amount": "1,000", "PDFPages": "", "Notes": None, "PaidAt": ""}]
    sheet.referrers = [{"CodeName": "CHIDI", "FullName": "Chidi", "Phone": 8031234567, "TotalPaidOut": ""}]

    snap = await api.load_all(ADMIN_CODE)

    assert [s.code for s in snap.students] == ["S1"]
    assert snap.students[0].phone == "08012345678"
    # Non-numeric cells count as zero.
    assert snap.payments[0].amount == Decimal("0")
    assert snap.payments[0].pdf_pages is None
    assert snap.referrers[0].phone == "8031234567"
    assert snap.referrers[0].total_paid_out == Decimal("0")
    assert snap.config.app_url == "lessons.example.com"


@pytest.mark.asyncio
async def test_load_all_tolerates_rows_without_codes(api: ApiClient, sheet: FakeSheet) -> None:
    sheet.students.append({"Name": "No Code", "School": "ATBU"})
    sheet.lessons = [{"Subject": "Maths"}]
    sheet.payments = [{"Amount": 300}]
    sheet.referrers = [{"FullName": "Nameless"}]

    snap = await api.load_all(ADMIN_CODE)

    assert [s.code for s in snap.students] == ["S1", ""]
    assert snap.lessons[0].student_code == ""
    assert snap.payments[0].amount == Decimal("300")
    assert snap.referrers[0].code_name == ""


@pytest.mark.asyncio
async def test_load_all_rejected_code_is_auth_error(api: ApiClient) -> None:
    with pytest.raises(AuthError):
        await api.load_all("nope")


@pytest.mark.asyncio
async def test_mutate_posts_json_with_action_and_code(api: ApiClient, sheet: FakeSheet) -> None:
    form = AddPaymentForm(student_code="S1", amount=Decimal("500"), pdf_pages=None, notes="cash")

    outcome = await api.mutate(MutationAction.ADD_PAYMENT, form, ADMIN_CODE)

    assert outcome.success is True
    assert sheet.posts == [
        {
            "studentCode": "S1",
            "amount": 500,
            "pdfPages": "",
            "notes": "cash",
            "action": "addPayment",
            "adminCode": ADMIN_CODE,
        }
    ]


@pytest.mark.asyncio
async def test_mutate_server_refusal_is_server_error(api: ApiClient) -> None:
    with pytest.raises(ServerError) as exc:
        await api.mutate(MutationAction.ADD_LESSON, {"studentCode": "S404", "subject": "Maths"}, ADMIN_CODE)
    assert exc.value.message == "Student not found"


@pytest.mark.asyncio
async def test_mutate_refusal_without_message() -> None:
    api = _client_with(lambda request: httpx.Response(200, json={"success": False}))
    with pytest.raises(ServerError) as exc:
        await api.mutate(MutationAction.ADD_REFERRER, {}, ADMIN_CODE)
    assert exc.value.message == "Something went wrong."


@pytest.mark.asyncio
async def test_post_body_is_sent_as_text_plain() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "code": 42})

    outcome = await _client_with(handler).mutate(MutationAction.ADD_STUDENT, {"name": "Ada"}, ADMIN_CODE)
    assert seen["content_type"].startswith("text/plain")
    assert seen["body"]["action"] == "addStudent"
    assert outcome.code == "42"


@pytest.mark.asyncio
async def test_transport_failure_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    api = _client_with(handler)
    with pytest.raises(NetworkError):
        await api.verify(ADMIN_CODE)
    with pytest.raises(NetworkError):
        await api.mutate(MutationAction.ADD_STUDENT, {"name": "Ada"}, ADMIN_CODE)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>login</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"success": True, "students": "oops"}),
    ],
)
async def test_malformed_responses_are_network_errors(response) -> None:
    api = _client_with(lambda request: response)
    with pytest.raises(NetworkError):
        await api.load_all(ADMIN_CODE)
