"""
Holiday Service - company holiday calendar loaded from a JSON file

File format::

    {
      "version": 1,
      "fixed": [{"date": "* * 0", "name": "Sunday"}, {"date": "12-25", "name": "Christmas"}],
      "dates": [{"date": "2025-03-31", "name": "Idul Fitri"}]
    }

A fixed rule ``* * N`` matches a weekday where 0 is Sunday and 6 is Saturday.
A fixed rule ``MM-DD`` matches every year.
"""
import json
import threading
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from atams.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class HolidayCheck:
    is_holiday: bool
    name: Optional[str] = None


NOT_A_HOLIDAY = HolidayCheck(is_holiday=False)


def sunday_based_weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


class HolidayCalendar:
    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._loaded = False
        self._dates: Dict[date, str] = {}
        self._weekdays: Dict[int, str] = {}
        self._month_days: Dict[Tuple[int, int], str] = {}

    def is_holiday(self, day: date) -> HolidayCheck:
        self._ensure_loaded()

        name = (
            self._dates.get(day)
            or self._month_days.get((day.month, day.day))
            or self._weekdays.get(sunday_based_weekday(day))
        )
        if name is None:
            return NOT_A_HOLIDAY
        return HolidayCheck(is_holiday=True, name=name)

    def reload(self) -> None:
        with self._lock:
            self._loaded = False
        self._ensure_loaded()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            self._load()
            self._loaded = True

    def _load(self) -> None:
        self._dates, self._weekdays, self._month_days = {}, {}, {}

        if not self.path.exists():
            logger.warning(
                "Holiday file not found, no holidays configured",
                extra={'extra_data': {'path': str(self.path)}}
            )
            return

        with self.path.open(encoding="utf-8") as fh:
            data = json.load(fh)

        for entry in data.get("dates", []):
            self._dates[date.fromisoformat(entry["date"])] = entry.get("name", "Holiday")

        for entry in data.get("fixed", []):
            self._add_fixed_rule(entry["date"].strip(), entry.get("name", "Holiday"))

        logger.info(
            "Holiday calendar loaded",
            extra={'extra_data': {
                'path': str(self.path),
                'version': data.get("version"),
                'dates': len(self._dates),
                'fixed': len(self._weekdays) + len(self._month_days)
            }}
        )

    def _add_fixed_rule(self, rule: str, name: str) -> None:
        parts = rule.split()
        if len(parts) == 3 and parts[0] == "*" and parts[1] == "*":
            weekday = int(parts[2])
            if not 0 <= weekday <= 6:
                raise ValueError(f"Invalid weekday in holiday rule: {rule!r}")
            self._weekdays[weekday] = name
            return

        month, sep, day = rule.partition("-")
        if sep and month.isdigit() and day.isdigit():
            self._month_days[(int(month), int(day))] = name
            return

        raise ValueError(f"Unsupported holiday rule: {rule!r}")

    def list_fixed_rules(self) -> List[str]:
        self._ensure_loaded()
        return sorted(self._weekdays.values()) + sorted(self._month_days.values())
