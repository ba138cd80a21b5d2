#!/usr/bin/env python3
"""
KPI counters for processed comparisons.
"""

import threading
import time

from quote_compare.models import KPIMetrics


class MetricsStore:
    """Accumulates straight-through-processing metrics for the running service"""

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.total_processed = 0
            self.total_processing_time = 0.0
            self.auto_approved_count = 0
            self.escalated_count = 0
            self.total_cost_savings = 0.0
            self.error_count = 0
            self.start_time = time.time()

    def record(
        self,
        processing_time: float = 0.0,
        auto_approved: bool = False,
        escalated: bool = False,
        cost_savings: float = 0.0,
        error: bool = False
    ) -> None:
        with self._lock:
            self.total_processed += 1
            self.total_processing_time += processing_time
            if auto_approved:
                self.auto_approved_count += 1
            if escalated:
                self.escalated_count += 1
            # Only savings count; dearer-than-estimate comparisons add nothing
            if cost_savings > 0:
                self.total_cost_savings += cost_savings
            if error:
                self.error_count += 1

    def snapshot(self) -> KPIMetrics:
        with self._lock:
            processed = self.total_processed
            avg_time = self.total_processing_time / processed if processed else 0.0
            return KPIMetrics(
                total_processed=processed,
                avg_processing_time=f"{avg_time:.1f} seconds" if avg_time > 0 else "0 seconds",
                stp_rate=round(self.auto_approved_count / processed * 100, 1) if processed else 0.0,
                auto_approved_count=self.auto_approved_count,
                escalated_count=self.escalated_count,
                total_cost_savings=self.total_cost_savings,
                avg_cost_savings=round(self.total_cost_savings / processed, 2) if processed else 0.0,
                error_rate=round(self.error_count / processed * 100, 2) if processed else 0.0
            )
