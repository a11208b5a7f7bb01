from rest_framework import serializers

from .models import Facility, Hotel
from .search import SORT_ORDERINGS, SearchCriteria


def parse_hotel_id(raw_id) -> int:
    """Turn the opaque hotel id from a URL into a primary key, or fail with 400."""
    value = str(raw_id or "").strip()
    if not (value.isascii() and value.isdigit()) or len(value) > 18 or int(value) < 1:
        raise serializers.ValidationError(
            {"errors": [{"param": "hotelId", "msg": "A valid hotel ID is required."}]}
        )
    return int(value)


class HotelSerializer(serializers.ModelSerializer):
    """Public hotel payload, also used to validate owner edits."""

    userId = serializers.CharField(source="owner_id", read_only=True)
    type = serializers.ChoiceField(choices=Hotel.TYPES)
    adultCount = serializers.IntegerField(source="adult_count", min_value=1)
    childCount = serializers.IntegerField(source="child_count", min_value=0)
    facilities = serializers.SlugRelatedField(
        many=True,
        slug_field="name",
        queryset=Facility.objects.all(),
    )
    pricePerNight = serializers.DecimalField(
        source="price_per_night",
        max_digits=10,
        decimal_places=2,
        min_value=0,
        coerce_to_string=False,
    )
    starRating = serializers.IntegerField(source="star_rating", min_value=1, max_value=5)
    imageUrls = serializers.ListField(
        source="image_urls",
        child=serializers.URLField(),
        required=False,
    )
    lastUpdated = serializers.DateTimeField(source="last_updated", read_only=True)

    class Meta:
        model = Hotel
        fields = [
            "id",
            "userId",
            "name",
            "city",
            "country",
            "description",
            "type",
            "adultCount",
            "childCount",
            "facilities",
            "pricePerNight",
            "starRating",
            "imageUrls",
            "lastUpdated",
        ]
        read_only_fields = ["id", "userId", "lastUpdated"]


class HotelSearchParamsSerializer(serializers.Serializer):
    """Parse the search query string into a typed ``SearchCriteria``."""

    destination = serializers.CharField(required=False, max_length=200)
    adultCount = serializers.IntegerField(source="adult_count", required=False, min_value=0)
    childCount = serializers.IntegerField(source="child_count", required=False, min_value=0)
    facilities = serializers.ListField(
        child=serializers.CharField(max_length=60),
        required=False,
    )
    types = serializers.ListField(
        child=serializers.CharField(max_length=30),
        required=False,
    )
    stars = serializers.ListField(
        child=serializers.IntegerField(min_value=1, max_value=5),
        required=False,
    )
    maxPrice = serializers.DecimalField(
        source="max_price",
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
    )
    sortOption = serializers.ChoiceField(
        source="sort_option",
        choices=sorted(SORT_ORDERINGS),
        required=False,
    )
    page = serializers.IntegerField(min_value=1, default=1)

    @classmethod
    def from_query_params(cls, query_params):
        """Blank values (``?maxPrice=``) count as absent rather than malformed."""
        params = query_params.copy()
        for key in list(params.keys()):
            values = [value for value in params.getlist(key) if value.strip()]
            if values:
                params.setlist(key, values)
            else:
                del params[key]
        return cls(data=params)

    def to_criteria(self) -> SearchCriteria:
        data = self.validated_data
        return SearchCriteria(
            destination=data.get("destination", "").strip() or None,
            adult_count=data.get("adult_count"),
            child_count=data.get("child_count"),
            facilities=tuple(data.get("facilities", ())),
            types=tuple(data.get("types", ())),
            stars=tuple(data.get("stars", ())),
            max_price=data.get("max_price"),
            sort_option=data.get("sort_option"),
            page=data["page"],
        )
