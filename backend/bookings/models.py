from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class Booking(models.Model):
    """A paid stay at a hotel; only ever appended after Stripe confirms payment."""

    hotel = models.ForeignKey("hotels.Hotel", on_delete=models.CASCADE, related_name="bookings")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    email = models.EmailField()
    adult_count = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    child_count = models.PositiveIntegerField(default=0)
    check_in = models.DateField()
    check_out = models.DateField()
    total_cost = models.DecimalField(max_digits=12, decimal_places=2)
    # not unique: confirming the same intent twice stores two bookings
    payment_intent_id = models.CharField(max_length=255, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.hotel.name} booking for {self.email} ({self.check_in} → {self.check_out})"

    @property
    def number_of_nights(self) -> int:
        return (self.check_out - self.check_in).days

    def clean(self):
        """Guard admin edits; the API validates the same rule in BookingSerializer."""
        super().clean()
        if self.check_in and self.check_out and self.check_out <= self.check_in:
            raise ValidationError({"check_out": "Check-out must be after check-in."})
