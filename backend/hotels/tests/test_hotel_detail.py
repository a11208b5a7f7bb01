from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from accounts.models import User
from bookings.models import Booking
from hotels.models import Facility, Hotel


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        username="owner@example.com",
        email="owner@example.com",
        password="password123",
        first_name="Olivia",
        last_name="Owner",
    )


@pytest.fixture
def hotel(owner):
    hotel = Hotel.objects.create(
        owner=owner,
        name="Lagoon Villas",
        city="Denpasar",
        country="Indonesia",
        description="Villas on the lagoon.",
        type=Hotel.BEACH_RESORT,
        adult_count=3,
        child_count=2,
        price_per_night=Decimal("210.00"),
        star_rating=5,
        image_urls=["https://img.test/lagoon.jpg"],
    )
    hotel.facilities.set([Facility.objects.get(name="Outdoor Pool"), Facility.objects.get(name="Spa")])
    return hotel


@pytest.mark.django_db
def test_detail_returns_hotel(hotel, owner):
    response = APIClient().get(reverse("hotel-detail", args=[hotel.pk]))

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == hotel.pk
    assert payload["userId"] == str(owner.pk)
    assert payload["type"] == "Beach Resort"
    assert payload["facilities"] == ["Outdoor Pool", "Spa"]
    assert payload["imageUrls"] == ["https://img.test/lagoon.jpg"]
    assert payload["lastUpdated"]


@pytest.mark.django_db
def test_detail_hides_bookings(hotel, owner):
    Booking.objects.create(
        hotel=hotel,
        user=owner,
        first_name="Olivia",
        last_name="Owner",
        email="owner@example.com",
        adult_count=1,
        check_in="2026-12-01",
        check_out="2026-12-03",
        total_cost=Decimal("420.00"),
        payment_intent_id="pi_private",
    )

    response = APIClient().get(reverse("hotel-detail", args=[hotel.pk]))

    assert "bookings" not in response.json()


@pytest.mark.django_db
@pytest.mark.parametrize("raw_id", ["abc", "-1", "0", "1.5", "99999999999999999999"])
def test_detail_rejects_malformed_id(raw_id):
    response = APIClient().get(f"/api/hotels/{raw_id}")

    assert response.status_code == 400
    assert response.json() == {
        "errors": [{"param": "hotelId", "msg": "A valid hotel ID is required."}]
    }


@pytest.mark.django_db
def test_detail_missing_hotel_is_404():
    response = APIClient().get(reverse("hotel-detail", args=[987654]))

    assert response.status_code == 404


@pytest.mark.django_db
def test_list_returns_most_recently_updated_first(owner, hotel):
    newer = Hotel.objects.create(
        owner=owner,
        name="City Sleeper",
        city="London",
        country="United Kingdom",
        description="Small rooms, central.",
        type=Hotel.BUDGET,
        adult_count=2,
        price_per_night=Decimal("95.00"),
        star_rating=3,
    )

    response = APIClient().get(reverse("hotel-list"))

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [newer.pk, hotel.pk]
