from __future__ import annotations

from abc import ABC, abstractmethod

from app.multibagger_radar.models.schemas import Stock


class DataProvider(ABC):
    @abstractmethod
    def get_stocks(self) -> list[Stock]:
        raise NotImplementedError
