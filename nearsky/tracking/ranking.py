"""
NearSky Ranking
Selects the nearest flights from a provider batch.
"""

from typing import Dict, Iterable, List, Optional

from ..geo import GeoPoint
from .constants import MAX_RESULTS
from .models import FlightRecord, RankedResult


def deduplicate(records: Iterable[FlightRecord]) -> List[FlightRecord]:
    """
    Collapse records that share a callsign, keeping the nearest one.

    The surviving record takes the slot of the first occurrence so input
    order is otherwise preserved. Records without a callsign are kept as-is.
    """
    output: List[FlightRecord] = []
    slots: Dict[str, int] = {}

    for record in records:
        key = record.callsign.strip().upper()
        if not key:
            output.append(record)
            continue

        if key in slots:
            index = slots[key]
            if record.distance_km < output[index].distance_km:
                output[index] = record
            continue

        slots[key] = len(output)
        output.append(record)

    return output


def rank_flights(
    records: Iterable[FlightRecord],
    limit: int = MAX_RESULTS,
    home: Optional[GeoPoint] = None,
) -> RankedResult:
    """
    Rank flights by distance from home.

    Args:
        records: Provider batch, in provider order
        limit: Maximum number of flights to keep
        home: Used to annotate records that carry no distance yet

    Returns:
        RankedResult with at most ``limit`` flights, nearest first. Equal
        distances keep their input order. An empty batch gives an empty result.

    Raises:
        ValueError: If a record has no distance and no home point is given
    """
    annotated = []
    for record in records:
        if record.distance_km is None:
            if home is None:
                raise ValueError(
                    f"Flight {record.callsign or '?'} has no distance and no home point"
                )
            record = record.with_distance(home)
        annotated.append(record)

    ordered = sorted(deduplicate(annotated), key=lambda r: r.distance_km)
    return RankedResult(ordered[:limit])
