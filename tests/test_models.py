from core.models import User, Payment, FundRequest, Notification, WalletTransaction


def test_user_from_api_builds_name_and_casts_ids():
    user = User.from_api({
        "id": 12,
        "username": "ravi",
        "first_name": "Ravi",
        "last_name": "Kumar",
        "role": "responsible_member",
        "assigned_monthly_amount": "7500.00",
        "responsible_member": 3,
        "unexpected": "ignored",
    })

    assert user.id == "12"
    assert user.name == "Ravi Kumar"
    assert user.assigned_monthly_amount == 7500.0
    assert user.responsible_member_id == "3"
    assert user.is_responsible_member
    assert user.role_label == "responsible member"
    assert user.initial == "R"


def test_user_name_falls_back_to_username():
    assert User.from_api({"id": 1, "username": "solo"}).name == "solo"


def test_user_terms_flag_from_api():
    assert User.from_api({"id": 1, "username": "a", "has_acknowledged_terms": True}).has_acknowledged_terms is True
    assert User.from_api({"id": 1, "username": "a"}).has_acknowledged_terms is False


def test_payment_from_api():
    payment = Payment.from_api({"id": 4, "user": 9, "amount": "5000.00", "transaction_type": "COLLECT", "notes": None})
    assert payment.user == "9"
    assert payment.amount == 5000.0
    assert payment.notes == ""
    assert payment.is_collection


def test_fund_request_normalizes_statuses():
    request = FundRequest.from_api({
        "id": 1, "user": 2, "amount": "50000", "status": "approved",
        "payment_status": "partial", "paid_amount": None,
    })
    assert request.status == "APPROVED"
    assert request.payment_status == "PARTIAL"
    assert request.paid_amount is None


def test_notification_defaults():
    n = Notification.from_api({"id": 3, "title": "Hi", "priority": "high"})
    assert n.priority == "HIGH"
    assert n.notification_type == "INFO"
    assert n.is_read is False


def test_wallet_transaction_date_fallback():
    tx = WalletTransaction.from_api({
        "id": 8, "amount": "1000", "payment_method": "bank_transfer",
        "status": "pending", "created_at": "2024-05-01T10:00:00Z",
    })
    assert tx.status == "PENDING"
    assert tx.date == "2024-05-01T10:00:00Z"
    assert tx.payment_method_label == "bank transfer"
