"""Before/after timing of the criteria query around index creation.

Runs strictly in order: drop indexes, measure, create indexes, measure, report.
Dropping first makes the baseline an unindexed run no matter what earlier
invocations left behind. One sample per phase, no warm-up.
"""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from employee_db.dal.schema import TARGET_GENDER, TARGET_PREFIX, WORK_MEM

RULE = "=" * 100
THIN_RULE = "-" * 100


class Phase(enum.Enum):
    DROPPED = "Dropped"
    MEASURED_BEFORE = "MeasuredBefore"
    INDEXES_CREATED = "IndexesCreated"
    MEASURED_AFTER = "MeasuredAfter"
    REPORTED = "Reported"


@dataclass
class OptimizationReport:
    before_ms: float
    after_ms: float
    before_count: int
    after_count: int
    phases: List[Phase] = field(default_factory=list)

    @property
    def time_saved_ms(self) -> float:
        """Negative when the indexed run was slower; not clamped."""
        return self.before_ms - self.after_ms

    @property
    def improvement_pct(self) -> float:
        """Time saved as a share of the baseline; 0 when the baseline is 0."""
        if self.before_ms > 0:
            return self.time_saved_ms / self.before_ms * 100.0
        return 0.0


def timed_query(store, gender: str, prefix: str, clock: Callable[[], float] = time.perf_counter) -> Tuple[float, int]:
    """Run the criteria query once; return (elapsed ms, row count)."""
    start = clock()
    rows = store.find_by_criteria(gender, prefix)
    elapsed_ms = (clock() - start) * 1000.0
    return max(elapsed_ms, 0.0), len(rows)


def run_optimization(
    store,
    gender: str = TARGET_GENDER,
    prefix: str = TARGET_PREFIX,
    clock: Callable[[], float] = time.perf_counter,
) -> OptimizationReport:
    """Drive the store through the five phases and return the measurements."""
    phases: List[Phase] = []

    print("\nStep 0: Removing any existing optimization indexes...")
    store.drop_indexes()
    store.clear_cache()
    phases.append(Phase.DROPPED)
    print(THIN_RULE)

    print("\nMeasuring query time BEFORE optimization...")
    before_ms, before_count = timed_query(store, gender, prefix, clock)
    phases.append(Phase.MEASURED_BEFORE)
    print(f"Time BEFORE optimization: {before_ms:.2f} ms")
    print(f"Found {before_count} employees")
    print(THIN_RULE)

    print("\nApplying optimizations:")
    store.create_optimization_indexes(gender, prefix)
    phases.append(Phase.INDEXES_CREATED)
    print(THIN_RULE)

    print("\nMeasuring query time AFTER optimization...")
    after_ms, after_count = timed_query(store, gender, prefix, clock)
    phases.append(Phase.MEASURED_AFTER)
    print(f"Time AFTER optimization: {after_ms:.2f} ms")
    print(f"Found {after_count} employees")

    report = OptimizationReport(before_ms, after_ms, before_count, after_count, phases)
    phases.append(Phase.REPORTED)
    return report


def format_report(report: OptimizationReport) -> List[str]:
    """Lines of the results block printed after the AFTER measurement."""
    return [
        RULE,
        "",
        "*** PERFORMANCE RESULTS ***",
        f"Time BEFORE optimization: {report.before_ms:.2f} ms",
        f"Time AFTER optimization:  {report.after_ms:.2f} ms",
        f"Performance improvement: {report.improvement_pct:.2f}%",
        f"Time saved: {report.time_saved_ms:.2f} ms",
        RULE,
        "",
        "Optimization techniques applied:",
        "  1. Partial Index: Index only for Male employees with surname 'F'",
        "  2. Covering Index: Includes all query columns to avoid table lookups",
        "  3. VACUUM ANALYZE: Reclaimed storage and updated statistics",
        f"  4. Increased work_mem: Better memory for sorting operations ({WORK_MEM})",
    ]
