"""
Tests for app/services/status/status_queries.py
"""

from factories import make_status
from app.services.status.status_queries import (
    get_default_quote_status,
    find_default_order_status,
    get_statuses_for_quotes_list,
    get_statuses_for_orders_list,
    can_quote_be_paid,
    should_trigger_email,
    get_email_template,
    requires_admin_action,
    find_cod_processing_status,
    find_bank_transfer_pending_status,
    find_status_for_payment_method,
)


class TestDefaults:
    """Default quote / order statuses."""

    def test_flagged_default_quote_status(self, default_quote_statuses):
        assert get_default_quote_status(default_quote_statuses) == "pending"

    def test_falls_back_to_first_active(self):
        statuses = [
            make_status("draft", "quote", 1, is_active=False),
            make_status("new", "quote", 2),
            make_status("sent", "quote", 3),
        ]
        assert get_default_quote_status(statuses) == "new"

    def test_inactive_flagged_default_is_ignored(self):
        statuses = [
            make_status("old", "quote", 1, is_active=False, is_default_quote_status=True),
            make_status("new", "quote", 2),
        ]
        assert get_default_quote_status(statuses) == "new"

    def test_no_active_status(self):
        assert get_default_quote_status([]) is None
        assert find_default_order_status([make_status("x", is_active=False)]) is None

    def test_default_order_status(self, default_order_statuses):
        assert find_default_order_status(default_order_statuses) == "payment_pending"


class TestListVisibility:
    """Statuses shown in the quotes / orders lists."""

    def test_quotes_list(self, all_default_statuses):
        assert get_statuses_for_quotes_list(all_default_statuses) == [
            "pending",
            "sent",
            "approved",
            "rejected",
            "expired",
            "cancelled",
        ]

    def test_orders_list(self, default_order_statuses):
        assert get_statuses_for_orders_list(default_order_statuses) == [
            "payment_pending",
            "processing",
            "paid",
            "ordered",
            "shipped",
            "completed",
            "cancelled",
        ]


class TestStatusFlags:
    """Per-status lookups by name."""

    def test_can_quote_be_paid(self, all_default_statuses):
        assert can_quote_be_paid("approved", all_default_statuses) is True
        assert can_quote_be_paid("pending", all_default_statuses) is False
        assert can_quote_be_paid("ghost", all_default_statuses) is False

    def test_email_triggers(self, all_default_statuses):
        assert should_trigger_email("sent", all_default_statuses) is True
        assert get_email_template("sent", all_default_statuses) == "quote_sent"
        assert should_trigger_email("pending", all_default_statuses) is False
        assert get_email_template("ghost", all_default_statuses) is None

    def test_email_without_template_does_not_trigger(self):
        statuses = [make_status("sent", "quote", triggers_email=True)]
        assert should_trigger_email("sent", statuses) is False

    def test_requires_admin_action(self, all_default_statuses):
        assert requires_admin_action("pending", all_default_statuses) is True
        assert requires_admin_action("sent", all_default_statuses) is False


class TestPaymentMethodRouting:
    """Order status chosen for a checkout's payment method."""

    def test_cod(self, default_order_statuses):
        assert find_cod_processing_status(default_order_statuses) == "processing"
        assert find_status_for_payment_method("COD", default_order_statuses) == "processing"

    def test_cod_flag_wins_over_name(self):
        statuses = [
            make_status("processing", order=1),
            make_status("cod_confirmed", order=2, is_cod_status=True),
        ]
        assert find_cod_processing_status(statuses) == "cod_confirmed"

    def test_bank_transfer(self, default_order_statuses):
        assert find_bank_transfer_pending_status(default_order_statuses) == "payment_pending"
        assert find_status_for_payment_method("bank_transfer", default_order_statuses) == "payment_pending"

    def test_bank_transfer_by_template(self):
        statuses = [
            make_status("new", order=1),
            make_status("awaiting_transfer", order=2, email_template="bank_transfer_pending"),
        ]
        assert find_bank_transfer_pending_status(statuses) == "awaiting_transfer"

    def test_online_payment(self, default_order_statuses):
        assert find_status_for_payment_method("card", default_order_statuses) == "paid"

    def test_falls_back_to_default_order_status(self):
        statuses = [make_status("received", order=1), make_status("done", order=2)]
        assert find_status_for_payment_method("cod", statuses) == "received"
        assert find_status_for_payment_method("card", statuses) == "received"
