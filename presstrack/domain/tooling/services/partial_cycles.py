"""
Partial Cycle Calculator

Derives how many cycles a ledger entry added since the previous observation
in the same lineage. Ledger entries only carry the cumulative counter, so the
increment is computed against the earlier entries of the same press position.
"""

import logging
from bisect import bisect_left, insort
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from itertools import groupby

from ....shared.base import DomainService
from ..entities.cycle import CycleRecord
from ..value_objects.enums import Position

logger = logging.getLogger(__name__)

AnchorDates = Mapping[int, Sequence[datetime]]


class PartialCycleCalculator(DomainService):
    """
    Computes partial cycles over an immutable ledger snapshot.

    For a record, the baseline is the largest ``total_cycles`` strictly below
    the record's own total among entries of the same press and position that
    were observed before it (earlier date, or same date and lower id). No
    baseline means the record starts a lineage and its partial is the full
    total. Regeneration anchors of the record's tool cut the history: only
    entries dated after the latest anchor preceding the record are eligible.
    """

    def calculate(
        self,
        record: CycleRecord,
        history: Iterable[CycleRecord],
        anchors: AnchorDates | None = None,
    ) -> int:
        """
        Partial cycles of a single record.

        Args:
            record: Ledger entry to compute the increment for
            history: Entries to search for the baseline (may include ``record``)
            anchors: Regeneration anchor dates grouped by tool id

        Returns:
            ``record.total_cycles`` minus the baseline, or the full total
        """
        cutoff = lineage_cutoff(record, anchors)
        baseline = None
        for candidate in history:
            if not _is_eligible(candidate, record, cutoff):
                continue
            if candidate.total_cycles >= record.total_cycles:
                continue
            if baseline is None or candidate.total_cycles > baseline:
                baseline = candidate.total_cycles

        if baseline is None:
            return record.total_cycles
        return record.total_cycles - baseline

    def annotate(
        self,
        records: Sequence[CycleRecord],
        history: Sequence[CycleRecord] | None = None,
        anchors: AnchorDates | None = None,
    ) -> list[CycleRecord]:
        """
        Annotated copies of ``records``, in input order.

        ``history`` defaults to ``records`` itself. Each press position is
        walked once in observation order with a sorted index of the totals
        seen so far. Records with a lineage cut, or missing from ``history``,
        fall back to a scan of their position's entries.
        """
        history = records if history is None else history

        by_lineage: dict[tuple[int, Position], list[CycleRecord]] = defaultdict(list)
        for entry in history:
            if entry.tool_id > 0:
                by_lineage[entry.lineage_key].append(entry)

        running: dict[tuple, int] = {}
        for entries in by_lineage.values():
            entries.sort(key=observation_order)
            running.update(_running_partials(entries))

        annotated = []
        for record in records:
            key = _record_key(record)
            if lineage_cutoff(record, anchors) is None and key in running:
                partial = running[key]
            else:
                partial = self.calculate(
                    record, by_lineage.get(record.lineage_key, []), anchors
                )
            annotated.append(record.with_partial_cycles(partial))

        logger.debug(
            "Annotated %d cycle records against %d history entries",
            len(annotated),
            len(history),
        )
        return annotated


def observation_order(record: CycleRecord) -> tuple[datetime, int]:
    """Sort key placing entries in the order they were recorded."""
    return record.date, record.id if record.id is not None else 0


def lineage_cutoff(
    record: CycleRecord, anchors: AnchorDates | None
) -> datetime | None:
    """Date of the latest regeneration anchor of the record's tool before it."""
    if not anchors:
        return None
    earlier = [date for date in anchors.get(record.tool_id, ()) if date < record.date]
    return max(earlier) if earlier else None


def _is_eligible(
    candidate: CycleRecord, record: CycleRecord, cutoff: datetime | None
) -> bool:
    if candidate.tool_id <= 0:
        return False
    if candidate.lineage_key != record.lineage_key:
        return False
    if observation_order(candidate) >= observation_order(record):
        return False
    return cutoff is None or candidate.date > cutoff


def _record_key(record: CycleRecord) -> tuple:
    return record.lineage_key, observation_order(record), record.total_cycles


def _running_partials(entries: list[CycleRecord]) -> dict[tuple, int]:
    # Entries sharing an observation slot never serve as each other's baseline
    partials: dict[tuple, int] = {}
    totals: list[int] = []
    for _, group in groupby(entries, key=observation_order):
        slot = list(group)
        for entry in slot:
            partials[_record_key(entry)] = _partial_from_totals(
                entry.total_cycles, totals
            )
        for entry in slot:
            insort(totals, entry.total_cycles)
    return partials


def _partial_from_totals(total_cycles: int, totals: list[int]) -> int:
    # Largest total strictly below the current one; equal totals never match
    index = bisect_left(totals, total_cycles)
    if index == 0:
        return total_cycles
    return total_cycles - totals[index - 1]
