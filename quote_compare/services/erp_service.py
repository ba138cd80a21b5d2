#!/usr/bin/env python3
"""
Mock ERP integration: purchase order creation and status lookup.
"""

import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from quote_compare.models import PurchaseOrder


class ErpService:
    """Stands in for a real ERP; every PO is created immediately"""

    def __init__(self, po_prefix: str = "TEST"):
        self.po_prefix = po_prefix
        self.logger = logging.getLogger(self.__class__.__name__)

    def create_purchase_order(self, po_data: Dict[str, Any]) -> PurchaseOrder:
        po_number = f"PO-{self.po_prefix}-{int(time.time() * 1000)}"
        self.logger.info(f"Mock PO created: {po_number} for comparison {po_data.get('comparisonId')}")
        return PurchaseOrder(
            success=True,
            po_number=po_number,
            po_id=f"po-{uuid.uuid4()}",
            status='CREATED',
            created_at=datetime.now(timezone.utc).isoformat(),
            vendor_notification_sent=True
        )

    def get_po_status(self, po_number: str) -> Dict[str, Any]:
        self.logger.info(f"Fetching PO status: {po_number}")
        now = datetime.now(timezone.utc)
        return {
            'poNumber': po_number,
            'status': 'CONFIRMED',
            'confirmedAt': now.isoformat(),
            'estimatedDelivery': (now + timedelta(days=14)).isoformat(),
            'vendorAcknowledged': True
        }
