import logging
from typing import Callable, Iterator, List, Optional

from my_trips.exceptions import IndexOutOfRange
from my_trips.models import AddressRecord, Coordinates
from my_trips.trips.distance import haversine_km

logger = logging.getLogger(__name__)

DistanceFunction = Callable[[Coordinates, Coordinates], float]


class TripCollection:
    """
    Ordered list of saved trips, insertion order by default.

    Duplicates are allowed. The collection belongs to a single session and is
    not shared between concurrent callers.
    """

    def __init__(self, records: Optional[List[AddressRecord]] = None):
        self._records: List[AddressRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AddressRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> AddressRecord:
        self._check_index(index)
        return self._records[index]

    def is_empty(self) -> bool:
        return not self._records

    def add(self, record: AddressRecord) -> None:
        self._records.append(record)
        logger.debug(f"Added trip '{record.name}' ({len(self._records)} total)")

    def remove_at(self, index: int) -> AddressRecord:
        self._check_index(index)
        record = self._records.pop(index)
        logger.debug(f"Removed trip '{record.name}' at position {index}")
        return record

    def sort_by_distance_from(self, reference: Coordinates, distance: DistanceFunction = haversine_km) -> None:
        """Stable ascending sort by distance from ``reference``.

        Distances are computed before anything is reordered, so a failing
        distance function leaves the collection untouched.
        """
        distances = [distance(reference, record.coordinates) for record in self._records]
        order = sorted(range(len(self._records)), key=lambda i: distances[i])
        self._records = [self._records[i] for i in order]
        logger.debug(f"Sorted {len(self._records)} trips by distance from ({reference.latitude}, {reference.longitude})")

    def to_list(self) -> List[AddressRecord]:
        return list(self._records)

    def _check_index(self, index: int) -> None:
        # Negative positions are not valid list positions here
        if not 0 <= index < len(self._records):
            raise IndexOutOfRange(index, len(self._records))
