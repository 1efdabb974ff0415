import pytest

import services.user_service as user_module
from core.image_ops import CroppedFile
from core.models import Payment, User
from services.user_service import UserService


@pytest.fixture()
def api(fake_api, monkeypatch):
    monkeypatch.setattr(user_module, "api_client", fake_api)
    return fake_api


def sample_form(**overrides):
    form = {
        "name": "Shakir Jamal Khan",
        "username": "shakir",
        "email": "",
        "phone": "9999999999",
        "role": "member",
        "marital_status": "Unmarried",
        "assigned_monthly_amount": 5000.0,
        "responsible_member": "3",
        "password": "secret",
    }
    form.update(overrides)
    return form


def test_build_user_form_splits_name_and_skips_blank_fields():
    photo = CroppedFile(name="profile_cropped.jpg", content=b"jpeg", width=10, height=10)
    data, files = UserService.build_user_form(sample_form(), photo, include_password=True)

    assert data["first_name"] == "Shakir"
    assert data["last_name"] == "Jamal Khan"
    assert "email" not in data
    assert data["assigned_monthly_amount"] == "5000.0"
    assert data["responsible_member"] == "3"
    assert data["password"] == "secret"
    assert files == {"profile_photo": ("profile_cropped.jpg", b"jpeg", "image/jpeg")}


def test_build_user_form_without_password_or_photo():
    data, files = UserService.build_user_form(sample_form())
    assert "password" not in data
    assert files is None


def test_create_user_requires_password(api):
    assert UserService.create_user(sample_form(password="")) == (False, "Password is required", None)
    assert api.calls == []


def test_create_user_sends_multipart(api):
    api.respond("POST", "/users/", {"id": 20, "username": "shakir"})

    success, _, user = UserService.create_user(sample_form())
    assert success
    assert user.id == "20"
    _, _, kwargs = api.last_call()
    assert kwargs["data"]["username"] == "shakir"
    assert kwargs["files"] == {}


def test_create_user_duplicate_username(api, api_error):
    api.respond("POST", "/users/", api_error(payload={"username": ["A user with that username already exists."]}))
    assert UserService.create_user(sample_form())[1] == "Username already exists"


def test_create_user_other_error(api, api_error):
    api.respond("POST", "/users/", api_error(payload={"phone": ["Invalid"]}))
    assert UserService.create_user(sample_form())[1] == "Failed to create user"


def test_update_profile_only_sends_profile_fields(api):
    api.respond("PATCH", "/users/7/", {"id": 7, "username": "asha"})
    user = User(id="7", username="asha", role="admin")

    success, message, _ = UserService.update_profile(user, sample_form(role="admin"))
    assert success
    assert message == "Profile updated successfully"
    _, path, kwargs = api.last_call()
    assert path == "/users/7/"
    assert "role" not in kwargs["data"]
    assert "password" not in kwargs["data"]


def test_update_profile_sends_cleared_email_and_phone(api):
    api.respond("PATCH", "/users/7/", {"id": 7, "username": "asha"})
    user = User(id="7", username="asha", email="a@b.c", phone="999")

    success, _, _ = UserService.update_profile(user, sample_form(email="", phone=""))
    assert success
    _, _, kwargs = api.last_call()
    assert kwargs["data"]["email"] == ""
    assert kwargs["data"]["phone"] == ""


def test_update_user_keeps_skipping_blank_contact_fields(api):
    api.respond("PATCH", "/users/7/", {"id": 7, "username": "asha"})

    UserService.update_user("7", sample_form(email="", phone=""))
    _, _, kwargs = api.last_call()
    assert "email" not in kwargs["data"]
    assert "phone" not in kwargs["data"]


def test_acknowledgement_lists_split_by_role():
    users = [
        User(id="1", username="admin", role="admin", has_acknowledged_terms=True),
        User(id="2", username="ravi", name="Ravi", role="responsible_member", has_acknowledged_terms=True),
        User(id="3", username="asha", name="Asha", role="member"),
        User(id="4", username="noor", name="Noor", role="member"),
    ]
    session = {"4": {"acknowledged": True, "date": "2024-05-01T10:00:00", "user_name": "Noor"}}

    lists = UserService.acknowledgement_lists(users, session)

    assert [row["name"] for row in lists["responsible"]] == ["Ravi"]
    assert lists["responsible"][0]["acknowledged"] is True
    assert [(row["id"], row["acknowledged"]) for row in lists["members"]] == [("3", False), ("4", True)]
    assert lists["members"][1]["date"] == "2024-05-01T10:00:00"


def test_acknowledgement_lists_without_session_records():
    lists = UserService.acknowledgement_lists([User.from_api({"id": 3, "username": "asha", "role": "member"})])
    assert lists == {
        "responsible": [],
        "members": [{"id": "3", "name": "asha", "acknowledged": False, "date": None}],
    }


def test_list_endpoints(api):
    api.respond("GET", "/users/all_public/", [{"id": 1, "username": "a"}])
    api.respond("GET", "/users/my_members/", [{"id": 2, "username": "b"}, {"id": 3, "username": "c"}])

    assert len(UserService.get_all_public()[2]) == 1
    assert len(UserService.get_my_members()[2]) == 2


def test_acknowledge_terms_posts_user_agent(api):
    assert UserService.acknowledge_terms("Mozilla/5.0")[0] is True
    assert api.last_call()[:2] == ("POST", "/terms/")
    assert api.last_call()[2]["json"] == {"user_agent": "Mozilla/5.0"}


def test_responsible_members():
    users = [User(id="1", username="a", role="member"), User(id="2", username="b", role="responsible_member")]
    assert [u.id for u in UserService.responsible_members(users)] == ["2"]


def test_profile_statistics():
    user = User(id="1", username="a", assigned_monthly_amount=0)
    payments = [
        Payment(id="1", user="1", amount=2000, date="2024-01-05", transaction_type="COLLECT"),
        Payment(id="2", user="1", amount=500, date="2024-03-05", transaction_type="COLLECT"),
        Payment(id="3", user="2", amount=900, date="2024-04-05", transaction_type="COLLECT"),
    ]
    stats = UserService.profile_statistics(user, payments, system_target=5000)

    assert stats["total_paid"] == 2500
    assert stats["target"] == 5000
    assert stats["to_collect"] == 2500
    assert stats["progress"] == 50.0
    assert stats["last_payment"].id == "2"
