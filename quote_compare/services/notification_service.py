#!/usr/bin/env python3
"""
Slack notifications for approval requests and approved purchase orders.
Sending is best effort: failures are logged and reported, never raised.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import requests


class NotificationService:
    """Posts Slack block messages to an incoming webhook"""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 10.0):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    def send_slack_notification(self, payload: Dict[str, Any], approver_email: str) -> Dict[str, Any]:
        if not self.webhook_url:
            self.logger.warning("Slack webhook URL not configured, skipping notification")
            return {'success': True, 'channel': 'slack-mock'}

        if payload.get('decision') == 'APPROVED':
            message = self._approved_message(payload, approver_email)
        else:
            message = self._approval_request_message(payload)

        try:
            response = requests.post(self.webhook_url, json=message, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"Error sending Slack notification: {e}")
            return {'success': False, 'channel': 'slack'}

        self.logger.info(f"Slack notification sent for comparison: {payload.get('id')}")
        return {'success': True, 'channel': 'slack'}

    def send_email_notification(self, to_email: str, subject: str, html_content: str) -> Dict[str, Any]:
        # No mail transport is wired in; the message is only logged
        self.logger.info(f"Email would be sent to: {to_email} ({subject})")
        return {'success': True, 'channel': 'email', 'recipient': to_email}

    def _approved_message(self, payload: Dict[str, Any], approver_email: str) -> Dict[str, Any]:
        now = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        return {
            'text': 'Purchase Order Approved',
            'blocks': [
                {'type': 'header', 'text': {'type': 'plain_text', 'text': 'Purchase Order Approved'}},
                {
                    'type': 'section',
                    'fields': [
                        {'type': 'mrkdwn', 'text': f"*Comparison ID:*\n{payload.get('id')}"},
                        {'type': 'mrkdwn', 'text': f"*PO Number:*\n{payload.get('poNumber') or 'N/A'}"},
                        {'type': 'mrkdwn', 'text': f"*PO Status:*\n{payload.get('poStatus') or 'CREATED'}"},
                        {'type': 'mrkdwn', 'text': f"*Approved By:*\n{payload.get('approver') or approver_email}"},
                    ]
                },
                {
                    'type': 'section',
                    'text': {
                        'type': 'mrkdwn',
                        'text': f"*Status:* Purchase order has been created and sent to vendor.\n*Time:* {now}"
                    }
                },
            ]
        }

    def _approval_request_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        total_cost = payload.get('totalCost')
        cost_savings = payload.get('costSavings')
        comparison_id = payload.get('id')
        return {
            'text': 'New Purchase Approval Required',
            'blocks': [
                {'type': 'header', 'text': {'type': 'plain_text', 'text': 'Purchase Approval Request'}},
                {
                    'type': 'section',
                    'fields': [
                        {'type': 'mrkdwn', 'text': f"*Comparison ID:*\n{comparison_id}"},
                        {'type': 'mrkdwn', 'text': f"*Total Cost:*\n{'$%.2f' % total_cost if total_cost is not None else 'N/A'}"},
                        {'type': 'mrkdwn', 'text': f"*Best Vendor:*\n{payload.get('bestVendor') or 'TBD'}"},
                        {'type': 'mrkdwn', 'text': f"*Cost Savings:*\n${(cost_savings or 0):.2f}"},
                    ]
                },
                {
                    'type': 'section',
                    'text': {
                        'type': 'mrkdwn',
                        'text': f"*Status:* Pending Approval\n*Approval Route:* {payload.get('approvalRoute') or 'PROCUREMENT_MANAGER'}"
                    }
                },
                {
                    'type': 'actions',
                    'elements': [
                        {'type': 'button', 'text': {'type': 'plain_text', 'text': 'Approve'},
                         'value': comparison_id, 'action_id': 'approve_button', 'style': 'primary'},
                        {'type': 'button', 'text': {'type': 'plain_text', 'text': 'Reject'},
                         'value': comparison_id, 'action_id': 'reject_button', 'style': 'danger'},
                    ]
                },
            ]
        }
