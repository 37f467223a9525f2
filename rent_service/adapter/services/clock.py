from datetime import datetime

from rent_service.app.services.clock import Clock
from rent_service.domain.base import utcnow


class SystemClock(Clock):
    def now(self) -> datetime:
        return utcnow()
