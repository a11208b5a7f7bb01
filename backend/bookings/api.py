import logging

import stripe
from django.db.models import Prefetch
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking
from bookings.serializers import (
    BookingConfirmationSerializer,
    BookingSerializer,
    HotelWithBookingsSerializer,
    PaymentIntentRequestSerializer,
)
from bookings.services.payments import (
    PaymentGatewayNotConfigured,
    PaymentVerificationError,
    from_minor_units,
    get_payment_gateway,
    to_minor_units,
    verify_payment_intent,
)
from hotels.models import Hotel
from hotels.serializers import parse_hotel_id

logger = logging.getLogger(__name__)


class PaymentIntentView(APIView):
    """Price the stay and open a Stripe payment intent the browser can confirm."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, hotel_id):
        hotel_pk = parse_hotel_id(hotel_id)
        serializer = PaymentIntentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        number_of_nights = serializer.validated_data["number_of_nights"]

        hotel = Hotel.objects.filter(pk=hotel_pk).first()
        if hotel is None:
            return Response({"detail": "Hotel not found."}, status=status.HTTP_400_BAD_REQUEST)

        total_cost = hotel.price_per_night * number_of_nights
        amount_cents = to_minor_units(total_cost)

        try:
            gateway = get_payment_gateway()
            payment_intent = gateway.create_payment_intent(
                amount_cents=amount_cents,
                hotel_id=str(hotel.pk),
                user_id=str(request.user.pk),
            )
        except PaymentGatewayNotConfigured as exc:
            logger.error("Cannot create payment intent: %s", exc)
            return Response(
                {"detail": "Error creating payment intent."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except stripe.StripeError as exc:
            logger.exception("Stripe rejected payment intent for hotel %s: %s", hotel.pk, exc)
            return Response(
                {"detail": "Error creating payment intent."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        client_secret = getattr(payment_intent, "client_secret", None)
        if not client_secret:
            logger.error("Payment intent %s came back without a client secret", payment_intent.id)
            return Response(
                {"detail": "Error creating payment intent."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info(
            "Created payment intent %s for hotel %s (user=%s, amount=%s)",
            payment_intent.id,
            hotel.pk,
            request.user.pk,
            amount_cents,
        )
        return Response(
            {
                "paymentIntentId": payment_intent.id,
                "clientSecret": str(client_secret),
                "totalCost": total_cost,
            }
        )


class BookingCreateView(APIView):
    """
    Store a booking once Stripe confirms the payment behind it.

    The intent is always re-fetched from Stripe; nothing the client says about
    status or cost is trusted.
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, hotel_id):
        hotel_pk = parse_hotel_id(hotel_id)
        reference = BookingConfirmationSerializer(data=request.data)
        reference.is_valid(raise_exception=True)
        payment_intent_id = reference.validated_data["payment_intent_id"]

        try:
            gateway = get_payment_gateway()
            payment_intent = gateway.retrieve_payment_intent(payment_intent_id)
        except PaymentGatewayNotConfigured as exc:
            logger.error("Cannot verify payment intent: %s", exc)
            return Response({"detail": "Something went wrong."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        except stripe.StripeError as exc:
            logger.exception("Failed to retrieve payment intent %s: %s", payment_intent_id, exc)
            return Response({"detail": "Something went wrong."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        try:
            verify_payment_intent(
                payment_intent,
                hotel_id=str(hotel_pk),
                user_id=str(request.user.pk),
            )
        except PaymentVerificationError as exc:
            logger.warning(
                "Rejected booking for hotel %s by user %s: %s",
                hotel_pk,
                request.user.pk,
                exc,
            )
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        serializer = BookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        hotel = Hotel.objects.filter(pk=hotel_pk).first()
        if hotel is None:
            return Response({"detail": "Hotel not found."}, status=status.HTTP_400_BAD_REQUEST)

        # a single INSERT; concurrent bookings for the same hotel never conflict
        booking = serializer.save(
            hotel=hotel,
            user=request.user,
            total_cost=from_minor_units(payment_intent.amount),
            payment_intent_id=payment_intent.id,
        )

        logger.info(
            "Stored booking %s for hotel %s (user=%s, payment_intent=%s)",
            booking.pk,
            hotel.pk,
            request.user.pk,
            payment_intent.id,
        )
        return Response(status=status.HTTP_200_OK)


class MyBookingsView(generics.ListAPIView):
    """Hotels the caller has stayed at, each with only the caller's bookings."""

    serializer_class = HotelWithBookingsSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None
    filter_backends = []

    def get_queryset(self):
        user = self.request.user
        return (
            Hotel.objects.filter(bookings__user=user)
            .distinct()
            .order_by("name", "id")
            .prefetch_related(
                "facilities",
                Prefetch(
                    "bookings",
                    queryset=Booking.objects.filter(user=user).order_by("check_in", "id"),
                    to_attr="visible_bookings",
                ),
            )
        )
