import pytest

import services.wallet_service as wallet_module
from core.models import WalletTransaction
from services.wallet_service import WalletService


@pytest.fixture()
def api(fake_api, monkeypatch):
    monkeypatch.setattr(wallet_module, "api_client", fake_api)
    return fake_api


@pytest.mark.parametrize("amount, transaction_id, message", [
    (0, "UTR123", "Please enter a valid amount."),
    (None, "UTR123", "Please enter a valid amount."),
    (500, "   ", "Transaction ID is required."),
])
def test_deposit_validation(api, amount, transaction_id, message):
    assert WalletService.create_deposit(amount, "upi", transaction_id) == (False, message, None)
    assert api.calls == []


def test_deposit_posts_transaction(api):
    api.respond("POST", "/wallet-transactions/", {"id": 3, "amount": "500", "status": "PENDING"})

    success, message, tx = WalletService.create_deposit(500, "upi", " UTR123 ")
    assert success
    assert message == "Submitted for verification."
    assert tx.id == "3"
    assert api.last_call()[2]["json"] == {
        "amount": 500.0,
        "payment_method": "upi",
        "transaction_id": "UTR123",
        "notes": "",
        "transaction_type": "DEPOSIT",
    }


def test_withdrawal_uses_default_method(api):
    WalletService.create_withdrawal(100, "", "REF1", notes="refund")
    body = api.last_call()[2]["json"]
    assert body["payment_method"] == "bank_transfer"
    assert body["transaction_type"] == "WITHDRAWAL"
    assert body["notes"] == "refund"


def test_approve_and_reject(api, api_error):
    assert WalletService.approve("4")[1] == "Deposit verified and added to collections."
    assert api.last_call()[1] == "/wallet-transactions/4/approve/"

    api.respond("POST", "/wallet-transactions/4/reject/", api_error())
    assert WalletService.reject("4") == (False, "Failed to reject transaction", None)


def test_pending_filters_and_sorts():
    transactions = [
        WalletTransaction(id="1", amount=1, status="PENDING", date="2024-01-01"),
        WalletTransaction(id="2", amount=1, status="APPROVED", date="2024-03-01"),
        WalletTransaction(id="3", amount=1, status="PENDING", date="2024-02-01"),
    ]
    assert [t.id for t in WalletService.pending(transactions)] == ["3", "1"]


def test_payment_method_label():
    assert WalletService.payment_method_label("upi") == "UPI Payment"
    assert WalletService.payment_method_label("net_banking") == "net banking"
