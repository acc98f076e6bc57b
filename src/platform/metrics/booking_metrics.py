from typing import Iterable

from prometheus_client import Counter, Histogram

from src.platform.config.core_setting import settings


OTHER_SOURCE = 'other'


class BookingMetrics:
    """
    Booking core metrics collector

    Tracks reservation creation, admin listing normalization and outbound notifications.
    """

    def __init__(self, *, known_sources: Iterable[str] = ()) -> None:
        # Client-supplied text never becomes a label value directly
        self.known_sources = frozenset(s for s in known_sources if s)

        # ========== Reservation Business Metrics ==========
        self.reservations_created = Counter(
            'booking_reservations_created_total',
            'Total reservations persisted',
            ['source'],  # source: known channel or 'other'
        )

        self.slot_resolutions = Counter(
            'booking_slot_resolutions_total',
            'Slot list resolutions by origin',
            ['origin'],  # origin: persisted/generated
        )

        # ========== Query Engine Metrics ==========
        self.listed_records = Counter(
            'booking_listing_records_total',
            'Stored records scanned by the reservation listing',
            ['result'],  # result: normalized/dropped
        )

        self.listing_duration = Histogram(
            'booking_listing_duration_seconds',
            'Reservation listing duration',
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

        # ========== Notifier Metrics ==========
        self.notifications = Counter(
            'booking_notifications_total',
            'Outbound notifications',
            ['channel', 'result'],  # result: success/failure
        )

        # ========== Kvrocks Operation Metrics ==========
        self.kvrocks_operation_duration = Histogram(
            'booking_kvrocks_operation_duration_seconds',
            'Kvrocks operation duration',
            ['operation'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

    # ========== Helper Methods ==========

    def record_reservation_created(self, *, source: str) -> None:
        label = source if source in self.known_sources else OTHER_SOURCE
        self.reservations_created.labels(source=label).inc()

    def record_slot_resolution(self, *, origin: str) -> None:
        self.slot_resolutions.labels(origin=origin).inc()

    def record_listing(self, *, normalized: int, dropped: int, duration: float) -> None:
        self.listed_records.labels(result='normalized').inc(normalized)
        self.listed_records.labels(result='dropped').inc(dropped)
        self.listing_duration.observe(duration)

    def record_notification(self, *, channel: str, success: bool) -> None:
        self.notifications.labels(channel=channel, result='success' if success else 'failure').inc()

    def record_kvrocks_operation(self, *, operation: str, duration: float) -> None:
        self.kvrocks_operation_duration.labels(operation=operation).observe(duration)


# Global metrics instance
metrics = BookingMetrics(
    known_sources=[*settings.METRIC_RESERVATION_SOURCES, settings.DEFAULT_RESERVATION_SOURCE]
)
