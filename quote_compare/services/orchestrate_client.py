#!/usr/bin/env python3
"""
Client for the external workflow-orchestration agent.

Flows are triggered with POST /v1/agents/{agent_id}/run and polled with
GET /v1/agents/{agent_id}/runs/{execution_id}. Errors are reported in the
returned status dict instead of being raised.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from quote_compare.models import BOQ, Quote

TERMINAL_STATUSES = ('COMPLETED', 'FAILED')


class OrchestrateClient:
    """Triggers and polls comparison flows on the orchestration agent"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        agent_id: Optional[str] = None,
        timeout: float = 60.0,
        flow_timeout: float = 300.0,
        poll_interval: float = 2.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic
    ):
        self.base_url = (base_url or '').rstrip('/')
        self.agent_id = agent_id
        self.timeout = timeout
        self.flow_timeout = flow_timeout
        self.poll_interval = poll_interval
        self.sleep = sleep
        self.clock = clock
        self.logger = logging.getLogger(self.__class__.__name__)

        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f"Bearer {api_key or ''}",
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        })
        self.enabled = bool(self.base_url and api_key and agent_id)
        if not self.enabled:
            self.logger.warning("Orchestration credentials not fully configured - flows will be skipped")

    def _failed_execution(self, message: str) -> Dict[str, Any]:
        return {
            'success': False,
            'flowExecutionId': f"exec-{int(time.time() * 1000)}",
            'status': 'FAILED',
            'error': message
        }

    def trigger_comparison_flow(self, boq: BOQ, quotes: List[Quote]) -> Dict[str, Any]:
        if not self.enabled:
            return {'success': False, 'status': 'SKIPPED', 'message': 'Orchestration not configured'}

        payload = {
            'boqData': {
                'items': [item.to_json_dict() for item in boq.items or []],
                'totalBOQ': boq.total_boq
            },
            'vendorQuotes': [
                {
                    'vendorId': quote.vendor_id,
                    'vendorName': quote.vendor_name,
                    'items': [item.to_json_dict() for item in quote.items or []],
                    'totalCost': quote.total_cost
                }
                for quote in quotes
            ]
        }

        self.logger.info(f"Triggering comparison flow with {len(quotes)} quotes")
        try:
            response = self.session.post(
                f"{self.base_url}/v1/agents/{self.agent_id}/run",
                json={'input': payload, 'skill': 'vendor_comparison_flow'},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Error triggering comparison flow: {e}")
            return self._failed_execution(str(e))

        execution_id = data.get('id') or data.get('executionId') or f"exec-{int(time.time() * 1000)}"
        self.logger.info(f"Comparison flow triggered: {execution_id}")
        return {
            'success': True,
            'flowExecutionId': execution_id,
            'status': data.get('status', 'RUNNING'),
            'data': data
        }

    def check_flow_status(self, execution_id: str) -> Dict[str, Any]:
        try:
            response = self.session.get(
                f"{self.base_url}/v1/agents/{self.agent_id}/runs/{execution_id}",
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Error checking flow status: {e}")
            return {'success': False, 'executionId': execution_id, 'status': 'UNKNOWN', 'error': str(e)}

        self.logger.debug(f"Status check: {execution_id} = {data.get('status')}")
        return {'success': True, 'executionId': execution_id, 'status': data.get('status'), 'data': data}

    def wait_for_completion(
        self,
        execution_id: str,
        max_wait_seconds: Optional[float] = None,
        poll_interval: Optional[float] = None
    ) -> Dict[str, Any]:
        """Poll until the flow finishes; report TIMEOUT rather than waiting forever.

        Timeout and poll interval default to the values the client was built with.
        """
        if max_wait_seconds is None:
            max_wait_seconds = self.flow_timeout
        if poll_interval is None:
            poll_interval = self.poll_interval

        self.logger.info(f"Waiting for flow completion: {execution_id} ({max_wait_seconds}s timeout)")
        deadline = self.clock() + max_wait_seconds

        while self.clock() < deadline:
            status = self.check_flow_status(execution_id)
            if status['status'] in TERMINAL_STATUSES:
                self.logger.info(f"Flow finished: {status['status']}")
                return status
            self.sleep(poll_interval)

        self.logger.warning(f"Flow timeout after {max_wait_seconds}s")
        return {
            'success': False,
            'executionId': execution_id,
            'status': 'TIMEOUT',
            'error': f"Flow did not complete within {max_wait_seconds} seconds"
        }
