from rest_framework import serializers

from bookings.models import Booking
from hotels.serializers import HotelSerializer

STAY_DATE_FORMATS = ["iso-8601", "%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ"]


class PaymentIntentRequestSerializer(serializers.Serializer):
    numberOfNights = serializers.IntegerField(source="number_of_nights", min_value=1)


class BookingConfirmationSerializer(serializers.Serializer):
    paymentIntentId = serializers.CharField(source="payment_intent_id", max_length=255)


class BookingSerializer(serializers.ModelSerializer):
    userId = serializers.CharField(source="user_id", read_only=True)
    firstName = serializers.CharField(source="first_name", max_length=150)
    lastName = serializers.CharField(source="last_name", max_length=150)
    adultCount = serializers.IntegerField(source="adult_count", min_value=1)
    childCount = serializers.IntegerField(source="child_count", min_value=0, default=0)
    checkIn = serializers.DateField(source="check_in", input_formats=STAY_DATE_FORMATS)
    checkOut = serializers.DateField(source="check_out", input_formats=STAY_DATE_FORMATS)
    totalCost = serializers.DecimalField(
        source="total_cost",
        max_digits=12,
        decimal_places=2,
        coerce_to_string=False,
        read_only=True,
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "userId",
            "firstName",
            "lastName",
            "email",
            "adultCount",
            "childCount",
            "checkIn",
            "checkOut",
            "totalCost",
            "createdAt",
        ]
        read_only_fields = ["id", "userId", "totalCost", "createdAt"]

    def validate(self, attrs):
        check_in = attrs.get("check_in")
        check_out = attrs.get("check_out")
        if check_in and check_out and check_out <= check_in:
            raise serializers.ValidationError({"checkOut": "Check-out must be after check-in."})
        return attrs


class HotelWithBookingsSerializer(HotelSerializer):
    """
    Hotel payload carrying the bookings the caller is allowed to see.

    Views prefetch those bookings into ``visible_bookings``.
    """

    bookings = BookingSerializer(many=True, read_only=True, source="visible_bookings")

    class Meta(HotelSerializer.Meta):
        fields = HotelSerializer.Meta.fields + ["bookings"]
        read_only_fields = HotelSerializer.Meta.read_only_fields + ["bookings"]
