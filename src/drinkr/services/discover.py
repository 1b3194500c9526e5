"""Discover page aggregates."""

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from drinkr.domain.logs import DrinkLogEntry
from drinkr.domain.social import TrendingItem
from drinkr.services.stats import DrinkLogRepository

TRENDING_LIMIT = 6
UNKNOWN_DRINK = "Unknown"


def percent_change(current: int, previous: int) -> int:
    """Week-over-week change; a drink new this week counts as +100%."""
    if previous > 0:
        return round((current - previous) / previous * 100)
    return 100


def compute_trending(
    logs: list[DrinkLogEntry],
    now: datetime,
    drink_names: dict[UUID, tuple[str, str]],
    limit: int = TRENDING_LIMIT,
) -> list[TrendingItem]:
    """Rank drinks logged in the last 7 days against the 7 days before.

    Logs with a catalog drink are counted per drink, the rest per drink type.
    """
    week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)
    this_week: Counter[UUID | str] = Counter()
    last_week: Counter[UUID | str] = Counter()
    for log in logs:
        if log.created_at is None or log.created_at < two_weeks_ago:
            continue
        key: UUID | str = log.drink_id or log.drink_type.value
        if log.created_at >= week_ago:
            this_week[key] += 1
        else:
            last_week[key] += 1

    items = []
    # Catalog drinks first, then the per-type fallbacks.
    for key, count in sorted(this_week.items(), key=lambda kv: isinstance(kv[0], str)):
        if isinstance(key, UUID):
            name, category = drink_names.get(key, (UNKNOWN_DRINK, "Other"))
            drink_id: UUID | None = key
        else:
            name, category, drink_id = key, key, None
        items.append(
            TrendingItem(
                drink_id=drink_id,
                name=name,
                category=category,
                count=count,
                percent_change=percent_change(count, last_week[key]),
            )
        )
    items.sort(key=lambda item: item.count, reverse=True)
    return items[:limit]


@dataclass
class DiscoverService:
    """Service for discover page data."""

    repository: DrinkLogRepository

    def get_trending(self, now: datetime | None = None) -> list[TrendingItem]:
        """Return drinks trending this week."""
        current = now or datetime.now(tz=UTC)
        logs = self.repository.list_logs_since(current - timedelta(days=14))
        drink_ids = sorted({log.drink_id for log in logs if log.drink_id})
        names = self.repository.get_drink_names(drink_ids) if drink_ids else {}
        return compute_trending(logs, current, names)
