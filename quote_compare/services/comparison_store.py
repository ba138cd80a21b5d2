#!/usr/bin/env python3
"""
In-memory comparison store keyed by comparison id.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from quote_compare.exceptions import ComparisonNotFoundError
from quote_compare.models import ComparisonResult


class ComparisonStore:
    """Process-wide comparison map; writes are serialized with a lock"""

    def __init__(self):
        self._comparisons: Dict[str, ComparisonResult] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    def save(self, comparison: ComparisonResult) -> None:
        with self._lock:
            self._comparisons[comparison.id] = comparison
        self.logger.debug(f"Stored comparison {comparison.id}")

    def get(self, comparison_id: str) -> Optional[ComparisonResult]:
        return self._comparisons.get(comparison_id)

    def list(self) -> List[ComparisonResult]:
        return list(self._comparisons.values())

    def update(self, comparison_id: str, change: Callable[[ComparisonResult], ComparisonResult]) -> ComparisonResult:
        """Apply change to the stored comparison atomically and store its result"""
        with self._lock:
            current = self._comparisons.get(comparison_id)
            if current is None:
                raise ComparisonNotFoundError(comparison_id)
            updated = change(current)
            self._comparisons[comparison_id] = updated
        return updated

    def clear(self) -> None:
        with self._lock:
            self._comparisons.clear()

    def __len__(self) -> int:
        return len(self._comparisons)
