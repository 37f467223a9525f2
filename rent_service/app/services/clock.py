from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of "now" for guards and scheduling (naive UTC)"""

    @abstractmethod
    def now(self) -> datetime:
        pass
