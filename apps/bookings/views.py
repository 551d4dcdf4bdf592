"""API views for the booking domain."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.application.message_bus import message_bus

from .application.command_handlers import ChangeBookingStatusCommand, CreateBookingCommand
from .domain.entities import BookingStatus
from .filters import BookingFilterSet
from .models import Booking
from .repositories import DjangoBookingRepository
from .serializers import (
    AvailabilityQuerySerializer,
    BookingCreateSerializer,
    BookingRejectSerializer,
    BookingSerializer,
)
from .services import booking_summary, quote_booking


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Booking requests and the owner/tenant actions on them.

    The list shows landlords the bookings on their houses and tenants their
    own requests. Single bookings are visible to both parties.
    Whether a given user may perform an action is decided by the booking
    lifecycle, not by this view.
    """

    queryset = Booking.objects.select_related("house", "tenant").all()
    lookup_value_regex = "[0-9a-f-]{36}"
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "reject":
            return BookingRejectSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        if self.action == "list":
            repo = DjangoBookingRepository()
            rows = repo.owner_rows(user.id) if user.is_landlord() else repo.tenant_rows(user.id)
            return rows.select_related("house", "tenant")
        return super().get_queryset().filter(Q(tenant=user) | Q(house__owner=user))

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = message_bus.handle_command(
            CreateBookingCommand(
                house_id=data["house"].id,
                tenant_id=request.user.id,
                start_date=data["start_date"],
                end_date=data["end_date"],
                notes=data.get("notes", ""),
            )
        )

        read_serializer = BookingSerializer(
            Booking.objects.select_related("house", "tenant").get(pk=booking.id),
            context=self.get_serializer_context(),
        )
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def _change_status(self, request, target: BookingStatus, rejection_reason: str | None = None):
        booking: Booking = self.get_object()  # type: ignore
        message_bus.handle_command(
            ChangeBookingStatusCommand(
                booking_id=booking.id,
                target_status=target,
                acting_user_id=request.user.id,
                rejection_reason=rejection_reason,
            )
        )
        booking.refresh_from_db()
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):  # type: ignore
        return self._change_status(request, BookingStatus.APPROVED)

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):  # type: ignore
        serializer = BookingRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._change_status(
            request,
            BookingStatus.REJECTED,
            serializer.validated_data["rejection_reason"],
        )

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        return self._change_status(request, BookingStatus.CANCELLED)

    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):  # type: ignore
        return self._change_status(request, BookingStatus.ACTIVE)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):  # type: ignore
        return self._change_status(request, BookingStatus.COMPLETED)

    @action(detail=False, methods=["get"])
    def availability(self, request):  # type: ignore
        serializer = AvailabilityQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        quote = quote_booking(data["house"], data["start_date"], data["end_date"])
        return Response(
            {
                "house_id": quote.house_id,
                "start_date": quote.dates.start_date,
                "end_date": quote.dates.end_date,
                "days": len(quote.dates),
                "total_amount": str(quote.total_amount),
                "available": quote.available,
                "conflicting_booking_ids": [str(booking_id) for booking_id in quote.conflicting_booking_ids],
            }
        )

    @action(detail=False, methods=["get"])
    def summary(self, request):  # type: ignore
        return Response(booking_summary(request.user.id))
