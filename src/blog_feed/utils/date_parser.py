"""Utility for robust parsing of front matter date strings."""

import datetime
import logging
from datetime import timezone
from typing import Optional, Protocol

from dateutil import parser


class DateParserProtocol(Protocol):
    """Protocol defining the interface for date parsing."""

    def parse_date(self, date_str: Optional[str]) -> Optional[datetime.datetime]:
        """Parse a date string into a timezone-aware datetime object (UTC).

        Args:
            date_str: The date string to parse.

        Returns:
            A timezone-aware datetime object (UTC) or None if parsing fails.
        """
        ...


class RobustDateParser(DateParserProtocol):
    """Parses the date formats authors actually type into front matter."""

    # Timezone abbreviations dateutil does not resolve on its own
    _timezone_offsets = {
        "PDT": -7 * 3600,
        "PST": -8 * 3600,
        "EDT": -4 * 3600,
        "EST": -5 * 3600,
        "CEST": 2 * 3600,
        "CET": 1 * 3600,
        "AEST": 10 * 3600,
        "AEDT": 11 * 3600,
        "GMT": 0,
        "UTC": 0,
    }

    def _tzinfos(self, tzname: Optional[str], offset: Optional[int]):
        """Callback for dateutil.parser to resolve timezone abbreviations."""
        if tzname in self._timezone_offsets:
            return self._timezone_offsets[tzname]
        # Numeric offsets ("+02:00", "Z") arrive here with the name unset.
        return offset

    # Two unrelated defaults: a date field missing from the string shows up as a difference.
    _defaults = (datetime.datetime(2000, 1, 1), datetime.datetime(2001, 2, 2))

    def _attempt(self, date_str: str, **kwargs) -> Optional[datetime.datetime]:
        """Parse with dateutil, rejecting strings without a year, month and day."""
        try:
            first, second = (
                parser.parse(date_str, default=default, **kwargs) for default in self._defaults
            )
        except (ValueError, OverflowError):
            return None
        if first.date() != second.date():
            return None
        return first

    def parse_date(self, date_str: Optional[str]) -> Optional[datetime.datetime]:
        """Parse a date string into a timezone-aware datetime object (UTC).

        Strings without timezone information are taken as UTC. Returns None
        when no attempt succeeds.
        """
        if not date_str:
            return None
        date_str = date_str.strip()

        parsed_date = self._attempt(date_str, tzinfos=self._tzinfos)
        if parsed_date is None:
            parsed_date = self._attempt(date_str, ignoretz=True)
        if parsed_date is None:
            # Fuzzy parsing picks up dates embedded in prose ("Published on 3 May 2024").
            parsed_date = self._attempt(date_str, fuzzy=True, tzinfos=self._tzinfos)

        if parsed_date is None:
            logging.warning(f"Could not parse date: \"{date_str}\"")
            return None

        if parsed_date.tzinfo is None:
            parsed_date = parsed_date.replace(tzinfo=timezone.utc)
        return parsed_date.astimezone(timezone.utc)
