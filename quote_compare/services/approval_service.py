#!/usr/bin/env python3
"""
Approval workflow: records the approver's decision and creates the purchase order.
"""

import logging
import uuid
from typing import Optional

from quote_compare.exceptions import ComparisonNotFoundError, InvalidStateError
from quote_compare.models import (
    ApprovalResult,
    AuditLogEntry,
    ComparisonResult,
    ComparisonStatus,
    Decision
)
from quote_compare.models.api_models import ApprovalRequest
from quote_compare.models.comparison_models import utc_now
from quote_compare.services.comparison_store import ComparisonStore
from quote_compare.services.erp_service import ErpService
from quote_compare.services.notification_service import NotificationService


class ApprovalService:
    """Applies APPROVED / REJECTED decisions to pending comparisons"""

    def __init__(
        self,
        store: ComparisonStore,
        erp: ErpService,
        notifier: Optional[NotificationService] = None,
        default_recipient: str = 'procurement@company.com'
    ):
        self.store = store
        self.erp = erp
        self.notifier = notifier
        self.default_recipient = default_recipient
        self.logger = logging.getLogger(self.__class__.__name__)

    def submit_approval(self, request: ApprovalRequest) -> ApprovalResult:
        comparison = self.store.get(request.comparison_id)
        if comparison is None:
            raise ComparisonNotFoundError(request.comparison_id)
        if comparison.status != ComparisonStatus.PENDING_APPROVAL:
            raise InvalidStateError(
                f"Comparison {comparison.id} is {comparison.status.value}, not {ComparisonStatus.PENDING_APPROVAL.value}"
            )

        approval_id = f"approval-{uuid.uuid4()}"
        approver = request.approver_email or 'Unknown'
        approved = request.decision == Decision.APPROVED
        new_status = ComparisonStatus.APPROVED if approved else ComparisonStatus.REJECTED

        def apply_decision(current: ComparisonResult) -> ComparisonResult:
            # Runs under the store lock; the PO is created only after the pending check
            if current.status != ComparisonStatus.PENDING_APPROVAL:
                raise InvalidStateError(f"Comparison {current.id} was decided concurrently")

            entries = [AuditLogEntry(
                action=f"COMPARISON_{request.decision.value}",
                details={'approvalId': approval_id, 'role': request.approver_role, 'comment': request.comment},
                user_id=approver
            )]
            po = None
            if approved:
                po = self.erp.create_purchase_order({
                    'comparisonId': current.id,
                    'vendor': current.best_vendor,
                    'approverEmail': request.approver_email,
                    'timestamp': utc_now()
                })
                entries.append(AuditLogEntry(action='PO_CREATED', details={'poNumber': po.po_number}))

            return current.model_copy(update={
                'status': new_status,
                'updated_at': utc_now(),
                'audit_log': current.audit_log + entries,
                'purchase_order': po
            })

        updated = self.store.update(comparison.id, apply_decision)
        po = updated.purchase_order
        self.logger.info(f"Approval submitted: {approval_id} - {request.decision.value}")

        if po is not None:
            next_step = f"PO Created: {po.po_number}"
            message = 'Approval successful, PO created'
            self._notify_approved(comparison.id, po.po_number, po.status, approver, request.approver_email)
        else:
            next_step = 'Comparison rejected; no PO created'
            message = 'Comparison rejected'

        return ApprovalResult(
            id=approval_id,
            comparison_id=comparison.id,
            decision=request.decision,
            next_step=next_step,
            approval_id=approval_id,
            message=message,
            po_details=po
        )

    def _notify_approved(self, comparison_id: str, po_number: str, po_status: str,
                         approver: str, approver_email: Optional[str]) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.send_slack_notification(
                {
                    'id': comparison_id,
                    'decision': 'APPROVED',
                    'poNumber': po_number,
                    'poStatus': po_status,
                    'approver': approver
                },
                approver_email or self.default_recipient
            )
        except Exception as e:
            # The decision is already recorded
            self.logger.warning(f"Failed to send Slack notification: {e}")
