import logging

from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.generics import ListAPIView
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.models import Booking
from bookings.serializers import HotelWithBookingsSerializer
from .models import Hotel
from .search import search_hotels
from .serializers import HotelSearchParamsSerializer, HotelSerializer, parse_hotel_id
from .services.images import (
    ImageHostNotConfigured,
    ImageUploadFailed,
    get_image_uploader,
    validate_image_files,
)

logger = logging.getLogger(__name__)


class HotelSearchView(APIView):
    """Filter, sort and paginate hotels for the public search page."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, *args, **kwargs):
        params = HotelSearchParamsSerializer.from_query_params(request.query_params)
        params.is_valid(raise_exception=True)
        hotels, pagination = search_hotels(params.to_criteria())
        return Response(
            {
                "data": HotelSerializer(hotels, many=True).data,
                "pagination": pagination.as_dict(),
            }
        )


class HotelListView(ListAPIView):
    serializer_class = HotelSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None
    filter_backends = []

    def get_queryset(self):
        return Hotel.objects.order_by("-last_updated", "id").prefetch_related("facilities")


class HotelDetailView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, hotel_id):
        hotel = get_object_or_404(
            Hotel.objects.prefetch_related("facilities"),
            pk=parse_hotel_id(hotel_id),
        )
        return Response(HotelSerializer(hotel).data)


class MyHotelViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Hotels owned by the current user, including the bookings made there."""

    serializer_class = HotelWithBookingsSerializer
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filterset_fields = ["city", "country", "type"]
    search_fields = ["name", "city", "country"]
    ordering_fields = ["last_updated", "name", "price_per_night"]

    def get_queryset(self):
        return (
            Hotel.objects.filter(owner=self.request.user)
            .order_by("-last_updated", "id")
            .prefetch_related(
                "facilities",
                Prefetch(
                    "bookings",
                    queryset=Booking.objects.order_by("check_in", "id"),
                    to_attr="visible_bookings",
                ),
            )
        )

    def _upload_images(self):
        files = self.request.FILES.getlist("imageFiles")
        if not files:
            return []
        validate_image_files(files)
        try:
            uploader = get_image_uploader()
        except ImageHostNotConfigured as exc:
            logger.error("Image upload unavailable: %s", exc)
            raise ImageUploadFailed() from exc
        return uploader.upload_all(files)

    def _respond_with(self, hotel, status_code):
        hotel = self.get_queryset().get(pk=hotel.pk)
        serializer = self.get_serializer(hotel)
        return Response(serializer.data, status=status_code)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image_urls = self._upload_images()
        hotel = serializer.save(owner=request.user, image_urls=image_urls)
        logger.info("User %s created hotel %s with %d images", request.user.pk, hotel.pk, len(image_urls))
        return self._respond_with(hotel, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        kept_urls = serializer.validated_data.get("image_urls", instance.image_urls)
        new_urls = self._upload_images()
        hotel = serializer.save(image_urls=list(kept_urls) + new_urls)
        logger.info("User %s updated hotel %s", request.user.pk, hotel.pk)
        return self._respond_with(hotel, status.HTTP_200_OK)
