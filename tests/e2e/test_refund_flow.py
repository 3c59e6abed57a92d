"""E2E tests for refunding from the payments list."""

import pytest

from src.commands.payments_list import PaymentsListCommand
from src.payments_api.errors import RefundNotAllowed
from src.ports import NotificationKind
from src.refunds.workflow import RefundOutcome


pytestmark = pytest.mark.e2e


@pytest.fixture
def seeded_api(mock_api, payment_factory):
    mock_api.set_payments([
        payment_factory.payload(id="tr_paid", value="19.99", status="paid", description="Headphones"),
        payment_factory.payload(id="tr_open", value="7.00", status="open"),
    ])
    return mock_api


@pytest.fixture
def command(seeded_api, token_source, presenter, settings):
    cmd = PaymentsListCommand(token_source, presenter, settings=settings)
    cmd.run()
    seeded_api.clear_requests()
    return cmd


class TestRefundFlow:
    """Confirm, refund, re-fetch."""

    def test_confirmed_refund_posts_once_and_refetches_once(self, command, seeded_api, presenter):
        result = command.refund("tr_paid")

        assert result.outcome is RefundOutcome.SUCCEEDED
        assert len(seeded_api.get_requests("POST")) == 1
        assert len(seeded_api.get_requests("GET", "/v2/payments")) == 1
        assert presenter.prompts[0].message == 'Are you sure you want to refund € 19,99 for "Headphones"?'
        assert (NotificationKind.SUCCESS, "Refund Successful", "Refunded € 19,99") in presenter.notifications

    def test_refetched_list_reflects_the_refund(self, command):
        command.refund("tr_paid")
        view = command.view()

        row = next(i for i in view.items if i.id == "tr_paid")
        assert row.tag.label == "Refunded"
        assert command.select_filter("refunded").items[0].id == "tr_paid"

    def test_stale_list_shown_while_refetching(self, command, presenter):
        presenter.lists.clear()
        command.refund("tr_paid")

        refreshing = [v for v in presenter.lists if v.is_loading]
        assert refreshing
        assert [i.id for i in refreshing[0].items] == ["tr_paid", "tr_open"]

    def test_cancel_sends_nothing(self, command, seeded_api, presenter):
        presenter.confirm_answer = False

        result = command.refund("tr_paid")

        assert result.outcome is RefundOutcome.CANCELLED
        assert seeded_api.get_requests() == []
        assert seeded_api.get_payment("tr_paid")["status"] == "paid"

    def test_api_error_detail_is_shown_and_nothing_refetched(self, command, seeded_api, presenter):
        seeded_api.set_refund_response(422, {"status": 422, "title": "Unprocessable Entity", "detail": "insufficient balance"})

        result = command.refund("tr_paid")

        assert result.outcome is RefundOutcome.FAILED
        assert presenter.notifications[-1] == (NotificationKind.FAILURE, "Refund Failed", "insufficient balance")
        assert seeded_api.get_requests("GET") == []
        assert command.find_payment("tr_paid").status == "paid"

    def test_refund_of_open_payment_is_refused(self, command, seeded_api):
        with pytest.raises(RefundNotAllowed):
            command.refund("tr_open")
        assert seeded_api.get_requests() == []

    def test_unknown_payment_id(self, command):
        with pytest.raises(LookupError):
            command.refund("tr_nope")
