"""Clock implementation."""

from datetime import datetime, timezone

from s1ocn.domain.ports import ClockPort
from s1ocn.domain.types import Timestamp


class SystemClock(ClockPort):
    """System clock implementation."""

    def now(self) -> Timestamp:
        """Get current UTC timestamp."""
        return datetime.now(timezone.utc)
