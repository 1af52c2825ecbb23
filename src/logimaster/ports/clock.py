from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    def now(self) -> datetime:
        """Return current local time."""
        ...

    def now_ms(self) -> int:
        """Milliseconds since the epoch, used for new record ids."""
        ...
