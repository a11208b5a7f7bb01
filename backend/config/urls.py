from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.api import LoginView, MeView, RegisterView, ValidateTokenView
from bookings.api import BookingCreateView, MyBookingsView, PaymentIntentView
from hotels.api import HotelDetailView, HotelListView, HotelSearchView, MyHotelViewSet

router = DefaultRouter(trailing_slash=False)
router.register(r"my-hotels", MyHotelViewSet, basename="my-hotel")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/users/register", RegisterView.as_view(), name="users-register"),
    path("api/users/me", MeView.as_view(), name="users-me"),
    path("api/auth/login", LoginView.as_view(), name="auth-login"),
    path("api/auth/refresh", TokenRefreshView.as_view(), name="auth-refresh"),
    path("api/auth/validate-token", ValidateTokenView.as_view(), name="auth-validate-token"),
    path("api/hotels/search", HotelSearchView.as_view(), name="hotel-search"),
    path("api/hotels", HotelListView.as_view(), name="hotel-list"),
    path(
        "api/hotels/<str:hotel_id>/bookings/payment-intent",
        PaymentIntentView.as_view(),
        name="hotel-payment-intent",
    ),
    path(
        "api/hotels/<str:hotel_id>/bookings",
        BookingCreateView.as_view(),
        name="hotel-bookings",
    ),
    path("api/hotels/<str:hotel_id>", HotelDetailView.as_view(), name="hotel-detail"),
    path("api/my-bookings", MyBookingsView.as_view(), name="my-bookings"),
    path("api/", include(router.urls)),
]
