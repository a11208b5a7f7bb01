from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Facility(models.Model):
    """Amenity tag a hotel can advertise (e.g. "Free WiFi")."""

    name = models.CharField(max_length=60, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "facilities"

    def __str__(self):
        return self.name


class Hotel(models.Model):
    BUDGET = "Budget"
    BOUTIQUE = "Boutique"
    LUXURY = "Luxury"
    SKI_RESORT = "Ski Resort"
    BUSINESS = "Business"
    FAMILY = "Family"
    ROMANTIC = "Romantic"
    HIKING_RESORT = "Hiking Resort"
    CABIN = "Cabin"
    BEACH_RESORT = "Beach Resort"
    GOLF_RESORT = "Golf Resort"
    MOTEL = "Motel"
    ALL_INCLUSIVE = "All Inclusive"
    PET_FRIENDLY = "Pet Friendly"
    SELF_CATERING = "Self Catering"
    TYPES = [
        (BUDGET, "Budget"),
        (BOUTIQUE, "Boutique"),
        (LUXURY, "Luxury"),
        (SKI_RESORT, "Ski Resort"),
        (BUSINESS, "Business"),
        (FAMILY, "Family"),
        (ROMANTIC, "Romantic"),
        (HIKING_RESORT, "Hiking Resort"),
        (CABIN, "Cabin"),
        (BEACH_RESORT, "Beach Resort"),
        (GOLF_RESORT, "Golf Resort"),
        (MOTEL, "Motel"),
        (ALL_INCLUSIVE, "All Inclusive"),
        (PET_FRIENDLY, "Pet Friendly"),
        (SELF_CATERING, "Self Catering"),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="hotels",
    )
    name = models.CharField(max_length=200)
    city = models.CharField(max_length=120)
    country = models.CharField(max_length=120)
    description = models.TextField()
    type = models.CharField(max_length=30, choices=TYPES)
    adult_count = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    child_count = models.PositiveIntegerField(default=0)
    facilities = models.ManyToManyField(Facility, related_name="hotels", blank=True)
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    star_rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    image_urls = models.JSONField(default=list, blank=True)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-last_updated", "id"]

    def __str__(self):
        return f"{self.name} ({self.city}, {self.country})"
