import io
from decimal import Decimal

import cloudinary.exceptions
import cloudinary.uploader
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient

from accounts.models import User
from bookings.models import Booking
from hotels.models import Hotel


def _image_file(name: str = "room.png") -> SimpleUploadedFile:
    buffer = io.BytesIO()
    image = Image.new("RGB", (32, 32), color="teal")
    image.save(buffer, format="PNG")
    buffer.seek(0)
    return SimpleUploadedFile(name, buffer.read(), content_type="image/png")


def _form(**overrides):
    data = {
        "name": "Harbour Lights",
        "city": "Sydney",
        "country": "Australia",
        "description": "Rooms by the water.",
        "type": "Boutique",
        "adultCount": 2,
        "childCount": 1,
        "facilities": ["Free WiFi", "Spa"],
        "pricePerNight": "180.00",
        "starRating": 4,
    }
    data.update(overrides)
    return data


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
def guest(db):
    return User.objects.create_user(
        username="guest@example.com",
        email="guest@example.com",
        password="password123",
        first_name="Greta",
        last_name="Guest",
    )


@pytest.fixture
def auth_client(owner):
    client = APIClient()
    client.force_authenticate(owner)
    return client


@pytest.fixture
def uploads(monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append((file.name, options))
        return {"secure_url": f"https://res.cloudinary.test/hotels/{file.name}"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


def _hotel(owner, name="Existing Hotel", **overrides):
    values = {
        "city": "Lisbon",
        "country": "Portugal",
        "description": "Existing description",
        "type": Hotel.BUDGET,
        "adult_count": 2,
        "child_count": 0,
        "price_per_night": Decimal("90.00"),
        "star_rating": 3,
    }
    values.update(overrides)
    return Hotel.objects.create(owner=owner, name=name, **values)


@pytest.mark.django_db
def test_owner_creates_hotel_with_images(owner, auth_client, uploads):
    response = auth_client.post(
        "/api/my-hotels",
        _form(imageFiles=[_image_file("one.png"), _image_file("two.png")]),
        format="multipart",
    )

    assert response.status_code == 201, response.content
    payload = response.json()
    assert payload["userId"] == str(owner.pk)
    assert payload["imageUrls"] == [
        "https://res.cloudinary.test/hotels/one.png",
        "https://res.cloudinary.test/hotels/two.png",
    ]
    assert payload["bookings"] == []
    hotel = Hotel.objects.get(pk=payload["id"])
    assert hotel.owner == owner
    assert hotel.price_per_night == Decimal("180.00")
    assert sorted(hotel.facilities.values_list("name", flat=True)) == ["Free WiFi", "Spa"]
    assert [name for name, _ in uploads] == ["one.png", "two.png"]
    assert uploads[0][1]["folder"] == "hotels"
    assert uploads[0][1]["api_key"] == "test-key"


@pytest.mark.django_db
def test_create_rejects_non_image_upload(auth_client, uploads):
    text_file = SimpleUploadedFile("notes.txt", b"not an image", content_type="text/plain")

    response = auth_client.post(
        "/api/my-hotels",
        _form(imageFiles=[text_file]),
        format="multipart",
    )

    assert response.status_code == 400
    assert "imageFiles" in response.json()
    assert uploads == []
    assert not Hotel.objects.exists()


@pytest.mark.django_db
def test_create_rejects_too_many_images(auth_client, uploads):
    files = [_image_file(f"room{index}.png") for index in range(7)]

    response = auth_client.post("/api/my-hotels", _form(imageFiles=files), format="multipart")

    assert response.status_code == 400
    assert "imageFiles" in response.json()
    assert uploads == []


@pytest.mark.django_db
def test_create_validates_hotel_fields(auth_client, uploads):
    response = auth_client.post(
        "/api/my-hotels",
        _form(starRating=6, type="Castle", facilities=["Helipad"]),
        format="multipart",
    )

    assert response.status_code == 400
    errors = response.json()
    assert {"starRating", "type", "facilities"} <= set(errors)


@pytest.mark.django_db
def test_upload_failure_is_server_error(monkeypatch, auth_client):
    def broken_upload(file, **options):
        raise cloudinary.exceptions.Error("Upload quota exceeded")

    monkeypatch.setattr(cloudinary.uploader, "upload", broken_upload)

    response = auth_client.post(
        "/api/my-hotels",
        _form(imageFiles=[_image_file()]),
        format="multipart",
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Error uploading images."}
    assert not Hotel.objects.exists()


@pytest.mark.django_db
def test_list_shows_only_own_hotels_with_bookings(owner, guest, auth_client):
    mine = _hotel(owner, "Mine")
    _hotel(guest, "Not Mine")
    Booking.objects.create(
        hotel=mine,
        user=guest,
        first_name="Greta",
        last_name="Guest",
        email="guest@example.com",
        adult_count=2,
        check_in="2026-12-01",
        check_out="2026-12-04",
        total_cost=Decimal("270.00"),
        payment_intent_id="pi_guest",
    )

    response = auth_client.get("/api/my-hotels")

    assert response.status_code == 200
    payload = response.json()
    assert [hotel["name"] for hotel in payload] == ["Mine"]
    assert [booking["email"] for booking in payload[0]["bookings"]] == ["guest@example.com"]


@pytest.mark.django_db
def test_cannot_view_someone_elses_hotel(guest, auth_client):
    theirs = _hotel(guest, "Not Mine")

    response = auth_client.get(f"/api/my-hotels/{theirs.pk}")

    assert response.status_code == 404


@pytest.mark.django_db
def test_update_keeps_urls_and_appends_uploads(owner, auth_client, uploads):
    hotel = _hotel(owner, image_urls=["https://img.test/keep.jpg", "https://img.test/drop.jpg"])

    response = auth_client.put(
        f"/api/my-hotels/{hotel.pk}",
        _form(
            name="Renamed",
            imageUrls=["https://img.test/keep.jpg"],
            imageFiles=[_image_file("new.png")],
        ),
        format="multipart",
    )

    assert response.status_code == 200, response.content
    hotel.refresh_from_db()
    assert hotel.name == "Renamed"
    assert hotel.image_urls == [
        "https://img.test/keep.jpg",
        "https://res.cloudinary.test/hotels/new.png",
    ]


@pytest.mark.django_db
def test_partial_update_without_urls_keeps_existing_images(owner, auth_client, uploads):
    hotel = _hotel(owner, image_urls=["https://img.test/keep.jpg"])

    response = auth_client.patch(
        f"/api/my-hotels/{hotel.pk}",
        {"pricePerNight": "99.50"},
        format="json",
    )

    assert response.status_code == 200
    hotel.refresh_from_db()
    assert hotel.price_per_night == Decimal("99.50")
    assert hotel.image_urls == ["https://img.test/keep.jpg"]
    assert uploads == []


@pytest.mark.django_db
def test_cannot_update_someone_elses_hotel(guest, auth_client):
    theirs = _hotel(guest, "Not Mine")

    response = auth_client.patch(f"/api/my-hotels/{theirs.pk}", {"name": "Hijacked"}, format="json")

    assert response.status_code == 404
    theirs.refresh_from_db()
    assert theirs.name == "Not Mine"


@pytest.mark.django_db
def test_requires_authentication():
    response = APIClient().get("/api/my-hotels")

    assert response.status_code == 401
