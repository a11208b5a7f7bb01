from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from accounts.models import User
from bookings.models import Booking
from hotels.models import Facility, Hotel

SEED_PASSWORD = "Hotels123!"
SUPERUSER_EMAIL = "admin@hotels.test"
SUPERUSER_PASSWORD = "AdminHotels123!"

SAMPLE_HOTELS = [
    {
        "name": "Harbour Lights",
        "city": "Sydney",
        "country": "Australia",
        "type": Hotel.BOUTIQUE,
        "adult_count": 2,
        "child_count": 1,
        "price_per_night": Decimal("180.00"),
        "star_rating": 4,
        "facilities": ["Free WiFi", "Spa", "Fitness Center"],
    },
    {
        "name": "Alpine Lodge",
        "city": "Zermatt",
        "country": "Switzerland",
        "type": Hotel.SKI_RESORT,
        "adult_count": 4,
        "child_count": 2,
        "price_per_night": Decimal("320.00"),
        "star_rating": 5,
        "facilities": ["Free WiFi", "Parking", "Spa", "Family Rooms"],
    },
    {
        "name": "Roadside Rest",
        "city": "Flagstaff",
        "country": "United States",
        "type": Hotel.MOTEL,
        "adult_count": 2,
        "child_count": 2,
        "price_per_night": Decimal("65.00"),
        "star_rating": 2,
        "facilities": ["Parking", "Non-Smoking Rooms"],
    },
    {
        "name": "Lagoon Villas",
        "city": "Denpasar",
        "country": "Indonesia",
        "type": Hotel.BEACH_RESORT,
        "adult_count": 3,
        "child_count": 2,
        "price_per_night": Decimal("210.00"),
        "star_rating": 5,
        "facilities": ["Free WiFi", "Outdoor Pool", "Airport Shuttle", "Spa"],
    },
    {
        "name": "City Sleeper",
        "city": "London",
        "country": "United Kingdom",
        "type": Hotel.BUDGET,
        "adult_count": 2,
        "child_count": 0,
        "price_per_night": Decimal("95.00"),
        "star_rating": 3,
        "facilities": ["Free WiFi", "Non-Smoking Rooms"],
    },
    {
        "name": "Sydney Central Suites",
        "city": "Sydney",
        "country": "Australia",
        "type": Hotel.BUSINESS,
        "adult_count": 2,
        "child_count": 0,
        "price_per_night": Decimal("240.00"),
        "star_rating": 4,
        "facilities": ["Free WiFi", "Fitness Center", "Airport Shuttle"],
    },
]


class Command(BaseCommand):
    help = "Populate the local development database with sample hotels and bookings."

    def handle(self, *args, **options):
        if not settings.DEBUG:
            raise CommandError("Refusing to seed data while DEBUG is False.")

        with transaction.atomic():
            self.stdout.write(self.style.MIGRATE_HEADING("Creating users"))
            owner = self._ensure_user(
                email="owner@hotels.test",
                first_name="Olivia",
                last_name="Owner",
            )
            guest = self._ensure_user(
                email="guest@hotels.test",
                first_name="Greta",
                last_name="Guest",
            )

            self.stdout.write(self.style.MIGRATE_HEADING("Ensuring admin superuser"))
            self._ensure_superuser()

            self.stdout.write(self.style.MIGRATE_HEADING("Creating hotels"))
            hotels = [self._ensure_hotel(owner, data) for data in SAMPLE_HOTELS]

            self.stdout.write(self.style.MIGRATE_HEADING("Creating sample booking"))
            Booking.objects.filter(user=guest, payment_intent_id="pi_seed_demo").delete()
            check_in = timezone.localdate() + timedelta(days=14)
            stay = hotels[0]
            Booking.objects.create(
                hotel=stay,
                user=guest,
                first_name=guest.first_name,
                last_name=guest.last_name,
                email=guest.email,
                adult_count=2,
                child_count=0,
                check_in=check_in,
                check_out=check_in + timedelta(days=3),
                total_cost=stay.price_per_night * 3,
                payment_intent_id="pi_seed_demo",
            )

        self.stdout.write(self.style.SUCCESS("Development seed data created."))
        self.stdout.write(self.style.NOTICE(f"Sample login accounts use password: {SEED_PASSWORD}"))
        self.stdout.write(self.style.NOTICE(f"Admin superuser {SUPERUSER_EMAIL} password: {SUPERUSER_PASSWORD}"))

    def _ensure_user(self, email: str, first_name: str, last_name: str) -> User:
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                "username": email,
                "first_name": first_name,
                "last_name": last_name,
            },
        )
        if created or not user.has_usable_password():
            user.set_password(SEED_PASSWORD)
            user.save(update_fields=["password"])
        return user

    def _ensure_hotel(self, owner: User, data: dict) -> Hotel:
        values = dict(data)
        facility_names = values.pop("facilities")
        name = values.pop("name")
        hotel, created = Hotel.objects.update_or_create(
            owner=owner,
            name=name,
            defaults={
                **values,
                "description": f"Sample listing for {name} in {values['city']}.",
            },
        )
        facilities = [Facility.objects.get_or_create(name=facility)[0] for facility in facility_names]
        hotel.facilities.set(facilities)
        if created:
            self.stdout.write(self.style.NOTICE(f"Added {hotel}"))
        return hotel

    def _ensure_superuser(self) -> User:
        user, created = User.objects.get_or_create(
            email=SUPERUSER_EMAIL,
            defaults={
                "username": SUPERUSER_EMAIL,
                "first_name": "Admin",
                "last_name": "User",
                "is_staff": True,
                "is_superuser": True,
            },
        )
        flag_updates = {}
        if not user.is_staff:
            flag_updates["is_staff"] = True
        if not user.is_superuser:
            flag_updates["is_superuser"] = True
        if flag_updates:
            for attr, value in flag_updates.items():
                setattr(user, attr, value)
            user.save(update_fields=list(flag_updates.keys()))
        if created or not user.has_usable_password():
            user.set_password(SUPERUSER_PASSWORD)
            user.save(update_fields=["password"])
        return user
