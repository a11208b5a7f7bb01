import pytest

from accounts.models import User


def test_full_name_joins_first_and_last():
    user = User(first_name="Greta", last_name="Guest")
    nameless = User(first_name="", last_name="Guest")

    assert user.full_name == "Greta Guest"
    assert nameless.full_name == "Guest"


@pytest.mark.django_db
def test_user_changelist_shows_full_name(admin_client):
    User.objects.create_user(
        username="guest@example.com",
        email="guest@example.com",
        password="password123",
        first_name="Greta",
        last_name="Guest",
    )

    response = admin_client.get("/admin/accounts/user/")

    assert response.status_code == 200
    assert b"Greta Guest" in response.content
