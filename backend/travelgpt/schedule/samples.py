"""Fixed demo plan used by the stub agent and the sample export."""

from datetime import date, datetime, time, timedelta, timezone

from backend.travelgpt.models.activity import Activity, ActivityType


def _at(day: date, hour: int) -> datetime:
    return datetime.combine(day, time(hour), tzinfo=timezone.utc)


def sample_schedule(today: date) -> list[Activity]:
    """Two-day Paris to Rome plan starting on today."""
    tomorrow = today + timedelta(days=1)
    return [
        Activity(
            initial_datetime=_at(today, 15),
            final_datetime=_at(tomorrow, 11),
            city="Paris",
            activity_name="Hotel Stay",
            activity_type=ActivityType.stay,
            price=200,
            provider_company="Hotel Parisian",
            purchased=True,
        ),
        Activity(
            initial_datetime=_at(today, 9),
            final_datetime=_at(today, 10),
            city="Paris",
            activity_name="Eiffel Tower Visit",
            activity_type=ActivityType.attraction,
            price=25,
            purchased=True,
        ),
        Activity(
            initial_datetime=_at(today, 12),
            final_datetime=_at(today, 13),
            city="Paris",
            activity_name="Lunch at Le Comptoir",
            activity_type=ActivityType.meal,
            price=50,
            purchased=False,
        ),
        Activity(
            initial_datetime=_at(tomorrow, 8),
            final_datetime=_at(tomorrow, 11),
            city="Paris",
            activity_name="Flight to Rome",
            activity_type=ActivityType.flight,
            price=120,
            provider_company="Air France",
            purchased=True,
            extra_fields={"flightNumber": "AF123", "baggageIncluded": True},
        ),
        Activity(
            initial_datetime=_at(tomorrow, 14),
            final_datetime=_at(tomorrow, 18),
            city="Rome",
            activity_name="Colosseum Tour",
            activity_type=ActivityType.attraction,
            price=30,
            purchased=False,
            extra_details="Includes skip-the-line access",
        ),
    ]
