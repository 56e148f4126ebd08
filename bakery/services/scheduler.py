"""
Bakery Pre-Order Service — Pickup scheduling rules

Pure functions of (date, fulfillment, now); nothing here touches the
session or the network.

  in-stock       Mon–Fri, from tomorrow, 12:00 PM – 6:00 PM every 30 min
  made-to-order  Thu–Sat, from tomorrow,  9:00 AM – 6:00 PM every 30 min

The weekly order deadline is advisory: it is reported to the customer but
does not disable any date.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from bakery.models.menu import Fulfillment
from bakery.services.cart import CartPartition

MIN_LEAD_DAYS = 1
REMINDER_LEAD = timedelta(hours=24)
SLOT_MINUTES = 30

PICKUP_WEEKDAYS: dict[Fulfillment, frozenset[int]] = {
    Fulfillment.IN_STOCK: frozenset({0, 1, 2, 3, 4}),
    Fulfillment.MADE_TO_ORDER: frozenset({3, 4, 5}),
}


def format_slot(t: time) -> str:
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d} {suffix}"


def parse_slot(label: str) -> time:
    """'9:30 AM' -> time(9, 30). Raises ValueError for anything else."""
    return datetime.strptime(label.strip(), "%I:%M %p").time()


def _half_hour_slots(first: time, last: time) -> tuple[str, ...]:
    slots = []
    minutes = first.hour * 60 + first.minute
    end = last.hour * 60 + last.minute
    while minutes <= end:
        slots.append(format_slot(time(minutes // 60, minutes % 60)))
        minutes += SLOT_MINUTES
    return tuple(slots)


TIME_SLOTS: dict[Fulfillment, tuple[str, ...]] = {
    Fulfillment.IN_STOCK: _half_hour_slots(time(12, 0), time(18, 0)),
    Fulfillment.MADE_TO_ORDER: _half_hour_slots(time(9, 0), time(18, 0)),
}


def local_now(tz_name: str) -> datetime:
    return datetime.now(ZoneInfo(tz_name))


def earliest_pickup_date(now: datetime) -> date:
    return now.date() + timedelta(days=MIN_LEAD_DAYS)


def is_selectable_date(day: date, fulfillment: Fulfillment, now: datetime) -> bool:
    if day < earliest_pickup_date(now):
        return False
    return day.weekday() in PICKUP_WEEKDAYS[fulfillment]


def time_slots(fulfillment: Fulfillment) -> tuple[str, ...]:
    return TIME_SLOTS[fulfillment]


def is_valid_slot(label: str, fulfillment: Fulfillment) -> bool:
    return label in TIME_SLOTS[fulfillment]


def selectable_dates(fulfillment: Fulfillment, now: datetime, horizon_days: int) -> list[date]:
    """Selectable dates from tomorrow up to today + horizon_days inclusive."""
    today = now.date()
    return [
        today + timedelta(days=offset)
        for offset in range(MIN_LEAD_DAYS, horizon_days + 1)
        if is_selectable_date(today + timedelta(days=offset), fulfillment, now)
    ]


@dataclass
class PickupWindow:
    fulfillment: Fulfillment
    dates: list[date]
    times: tuple[str, ...]


def pickup_windows(partition: CartPartition, now: datetime, horizon_days: int) -> dict[Fulfillment, PickupWindow]:
    """One window per non-empty partition; an empty partition has no pickup fields at all."""
    windows: dict[Fulfillment, PickupWindow] = {}
    for fulfillment, lines in (
        (Fulfillment.IN_STOCK, partition.in_stock),
        (Fulfillment.MADE_TO_ORDER, partition.made_to_order),
    ):
        if lines:
            windows[fulfillment] = PickupWindow(
                fulfillment=fulfillment,
                dates=selectable_dates(fulfillment, now, horizon_days),
                times=time_slots(fulfillment),
            )
    return windows


def pickup_moment(day: date, slot: str, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, parse_slot(slot), tzinfo=tz)


def reminder_time(moment: datetime) -> datetime:
    # 24 elapsed hours, even across a DST change.
    return (moment.astimezone(timezone.utc) - REMINDER_LEAD).astimezone(moment.tzinfo)


def next_order_deadline(now: datetime, weekday: int, hour: int) -> datetime:
    """Next weekly cutoff strictly after now, in now's timezone."""
    days_ahead = (weekday - now.weekday()) % 7
    deadline = datetime.combine(now.date() + timedelta(days=days_ahead), time(hour), tzinfo=now.tzinfo)
    if deadline <= now:
        deadline += timedelta(days=7)
    return deadline


def deadline_pickup_date(deadline: datetime, pickup_weekday: int = 5) -> date:
    """The pickup day a given deadline closes orders for (Saturday by default)."""
    return deadline.date() + timedelta(days=(pickup_weekday - deadline.weekday()) % 7)
