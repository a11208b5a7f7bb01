from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from accounts.models import User
from bookings.models import Booking
from hotels.models import Hotel


@pytest.fixture
def booking(db):
    owner = User.objects.create_user(
        username="owner@example.com",
        email="owner@example.com",
        password="examplepass",
        first_name="Owner",
        last_name="Person",
    )
    hotel = Hotel.objects.create(
        owner=owner,
        name="Harbour Lights",
        city="Sydney",
        country="Australia",
        description="Rooms by the water.",
        type=Hotel.BOUTIQUE,
        adult_count=2,
        price_per_night=Decimal("150.00"),
        star_rating=4,
    )
    return Booking(
        hotel=hotel,
        user=owner,
        first_name="Owner",
        last_name="Person",
        email="owner@example.com",
        adult_count=2,
        check_in=date(2026, 11, 2),
        check_out=date(2026, 11, 5),
        total_cost=Decimal("450.00"),
        payment_intent_id="pi_admin",
    )


def test_clean_accepts_ordered_stay(booking):
    booking.full_clean()

    assert booking.number_of_nights == 3


def test_clean_rejects_check_out_before_check_in(booking):
    booking.check_out = booking.check_in

    with pytest.raises(ValidationError) as excinfo:
        booking.full_clean()

    assert "check_out" in excinfo.value.message_dict
