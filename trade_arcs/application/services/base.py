from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from trade_arcs.domain.models.coordinates import GeoPoint, TradeFlowRecord


class BaseTradeFlowSource(ABC):
    """
    Abstract base class that defines the interface for loading trade-flow records.
    """

    @abstractmethod
    async def load(self) -> list[TradeFlowRecord]:
        """
        Asynchronously load trade-flow records from a file or another source.

        :return: Records in input order.
        """
        pass


class BaseCurveInterpolator(ABC):
    """
    Abstract base class for path generators between two geographic points.
    """

    @abstractmethod
    def interpolate(
        self,
        source: GeoPoint,
        dest: GeoPoint,
        sample_count: int | None = None,
    ) -> list[NDArray[np.float64]]:
        """
        Generate the path from source to dest.

        :return: One or more (n, 2) arrays of (lon, lat); more than one means
                 the path was split and the pieces must not be joined.
        """
        pass
