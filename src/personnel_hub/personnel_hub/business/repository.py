from __future__ import annotations

from typing import Optional, Protocol

from .model import Business


class BusinessRepository(Protocol):
    def create(self, business: Business) -> Business:
        raise NotImplementedError

    def get_by_id(self, business_id: str) -> Optional[Business]:
        raise NotImplementedError

    def update(self, business: Business) -> Business:
        raise NotImplementedError
