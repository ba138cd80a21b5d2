#!/usr/bin/env python3

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
import os
import time
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError
from werkzeug.exceptions import HTTPException
from werkzeug.utils import secure_filename

from quote_compare.config import ConfigManager
from quote_compare.exceptions import QuoteCompareError
from quote_compare.matchers import SimilarityMatcher, apply_manual_match
from quote_compare.models.api_models import (
    ApprovalRequest,
    CreateComparisonRequest,
    CreatePORequest,
    ExportRequest,
    MatchRequest,
    MatchResponse,
    MatchSummary,
    OverrideMatchRequest
)
from quote_compare.models.config_models import (
    ConfigInquiryResponse,
    ConfigUpdateRequest,
    ConfigUpdateResponse
)
from quote_compare.services import (
    ApprovalService,
    ComparisonService,
    ComparisonStore,
    ErpService,
    MetricsStore,
    NotificationService,
    OrchestrateClient
)
from quote_compare.services import selection_service
from quote_compare.services.export_service import export_updated_boq


def success(data: Any = None, message: Optional[str] = None, status: int = 200):
    body = {'success': True, 'data': data}
    if message:
        body['message'] = message
    return jsonify(body), status


def failure(message: str, status: int, code: Optional[str] = None, details: Any = None):
    error = {'message': message}
    if code:
        error['code'] = code
    if details is not None:
        error['details'] = details
    return jsonify({'success': False, 'error': error}), status


class App:
    """QuoteCompare HTTP API: comparisons, matching, approvals, KPIs and configuration"""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        store: Optional[ComparisonStore] = None,
        metrics: Optional[MetricsStore] = None,
        output_folder: Optional[str] = None
    ):
        self.app = Flask(__name__)
        CORS(self.app)
        self.logger = logging.getLogger(self.__class__.__name__)
        self.started_at = time.time()

        # Configuration manager
        self.config_manager = config_manager or ConfigManager()

        # Stores live as long as the app
        self.store = store or ComparisonStore()
        self.metrics = metrics or MetricsStore()

        self.output_folder = output_folder or str(self.config_manager.config_dir / 'output')
        os.makedirs(self.output_folder, exist_ok=True)

        self._build_services()
        self.setup_error_handlers()
        self.setup_routes()

    def _build_services(self):
        """(Re)create services from the current configuration"""
        config = self.config_manager.get_all_configs()
        integrations = config.integrations

        self.notifier = NotificationService(integrations.slack_webhook_url, integrations.request_timeout_seconds)
        self.erp = ErpService(integrations.po_prefix)
        self.orchestrator = OrchestrateClient(
            integrations.orchestrate_url,
            integrations.orchestrate_api_key,
            integrations.orchestrate_agent_id,
            timeout=integrations.request_timeout_seconds,
            flow_timeout=integrations.flow_timeout_seconds,
            poll_interval=integrations.flow_poll_interval_seconds
        )
        self.similarity_matcher = SimilarityMatcher(config.matching)
        self.comparison_service = ComparisonService(
            config, self.store, self.metrics, self.notifier, self.orchestrator
        )
        self.approval_service = ApprovalService(self.store, self.erp, self.notifier)
        self.logger.info("Services built from current configuration")

    def setup_error_handlers(self):

        @self.app.errorhandler(ValidationError)
        def handle_validation_error(e: ValidationError):
            details = [
                {'loc': list(err['loc']), 'msg': err['msg'], 'type': err['type']}
                for err in e.errors()
            ]
            return failure('Invalid request', 400, 'VALIDATION_ERROR', details)

        @self.app.errorhandler(QuoteCompareError)
        def handle_domain_error(e: QuoteCompareError):
            self.logger.warning(f"{e.code}: {e}")
            return failure(str(e), e.status_code, e.code)

        @self.app.errorhandler(HTTPException)
        def handle_http_error(e: HTTPException):
            if e.code == 404:
                return failure('Endpoint not found', 404, 'NOT_FOUND', {'path': request.path, 'method': request.method})
            return failure(e.description, e.code)

        @self.app.errorhandler(Exception)
        def handle_unexpected_error(e: Exception):
            self.logger.error(f"Unhandled error on {request.path}: {e}", exc_info=True)
            return failure(str(e) or 'An unexpected error occurred', 500, 'INTERNAL_ERROR')

    def _json_body(self) -> dict:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}

    def setup_routes(self):
        """Setup Flask routes"""

        @self.app.route('/health', methods=['GET'])
        def health_route():
            return jsonify({
                'status': 'OK',
                'timestamp': datetime.now(timezone.utc).isoformat(),
                'uptime': round(time.time() - self.started_at, 1)
            })

        # ========== COMPARISON ROUTES ==========

        @self.app.route('/api/comparison', methods=['POST'])
        def create_comparison_route():
            """Match, score and policy-check vendor quotes against a BOQ"""
            body = self._json_body()
            if not isinstance(body.get('boqData'), dict) or not isinstance(body.get('quotes'), list):
                return failure('Invalid request: boqData and quotes array required', 400, 'VALIDATION_ERROR')

            payload = CreateComparisonRequest.model_validate(body)
            comparison = self.comparison_service.create_comparison(payload.boq_data, payload.quotes)
            return success(comparison.to_json_dict(), 'Comparison created successfully')

        @self.app.route('/api/comparison', methods=['GET'])
        def list_comparisons_route():
            comparisons = self.comparison_service.list_comparisons()
            return success([c.to_json_dict() for c in comparisons])

        @self.app.route('/api/comparison/<comparison_id>', methods=['GET'])
        def get_comparison_route(comparison_id):
            comparison = self.comparison_service.get_comparison(comparison_id)
            if comparison is None:
                return failure('Comparison not found', 404, 'COMPARISON_NOT_FOUND')
            return success(comparison.to_json_dict())

        # ========== FUZZY MATCHING ROUTES ==========

        @self.app.route('/api/match', methods=['POST'])
        def match_route():
            """Fuzzy-match quotation rows to BOQ items and pick default selections"""
            payload = MatchRequest.model_validate(self._json_body())
            matches = self.similarity_matcher.match(payload.boq_items, payload.quote_items)
            selections = selection_service.default_selections(payload.boq_items, matches)

            project_total = selection_service.project_total(payload.boq_items, selections)
            base_total = selection_service.base_total(payload.boq_items)
            summary = MatchSummary(
                boq_item_count=len(payload.boq_items),
                vendor_count=len({m.quote.vendor for m in matches}),
                coverage_percent=selection_service.coverage(payload.boq_items, matches),
                project_total=project_total,
                base_total=base_total,
                savings=base_total - project_total if base_total > 0 else 0
            )
            response = MatchResponse(matches=matches, selections=selections, summary=summary)

            data = response.to_json_dict()
            for match_data, match in zip(data['matches'], matches):
                match_data['confidenceBand'] = self.similarity_matcher.confidence_band(match.confidence)
            return success(data)

        @self.app.route('/api/match/override', methods=['POST'])
        def override_match_route():
            payload = OverrideMatchRequest.model_validate(self._json_body())
            updated = apply_manual_match(payload.match, payload.boq_id)
            self.logger.info(f"Manual match: '{updated.quote.description[:40]}' -> {payload.boq_id}")
            return success(updated.to_json_dict())

        # ========== APPROVAL / ERP ROUTES ==========

        @self.app.route('/api/approval', methods=['POST'])
        def approval_route():
            body = self._json_body()
            if not body.get('comparisonId') or body.get('decision') not in ('APPROVED', 'REJECTED'):
                return failure(
                    'Invalid request: comparisonId and decision (APPROVED/REJECTED) required',
                    400, 'VALIDATION_ERROR'
                )
            payload = ApprovalRequest.model_validate(body)
            result = self.approval_service.submit_approval(payload)
            return success(result.to_json_dict(), f"Approval {payload.decision.value.lower()} successfully")

        @self.app.route('/api/erp/create-po', methods=['POST'])
        def create_po_route():
            payload = CreatePORequest.model_validate(self._json_body())
            self.logger.info(f"Creating PO for vendor: {payload.selected_vendor}, comparison: {payload.comparison_id}")
            po = self.erp.create_purchase_order({
                **payload.po_data,
                'vendor': payload.selected_vendor,
                'comparisonId': payload.comparison_id
            })
            return success(po.to_json_dict(), 'Purchase order created successfully')

        @self.app.route('/api/erp/po-status/<po_number>', methods=['GET'])
        def po_status_route(po_number):
            return success(self.erp.get_po_status(po_number))

        # ========== KPI ROUTES ==========

        @self.app.route('/api/kpi', methods=['GET'])
        def kpi_route():
            return success(self.metrics.snapshot().to_json_dict(), 'KPIs retrieved successfully')

        # ========== EXPORT ROUTES ==========

        @self.app.route('/api/export', methods=['POST'])
        def export_route():
            """Export the BOQ with selected vendors and rates as an Excel file"""
            payload = ExportRequest.model_validate(self._json_body())
            filename = secure_filename(f"Updated-BOQ-{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx")
            output_path = export_updated_boq(
                payload.boq_items, payload.selections, os.path.join(self.output_folder, filename)
            )
            return send_file(str(output_path), as_attachment=True, download_name=filename)

        # ========== CONFIGURATION ROUTES ==========

        @self.app.route('/api/config', methods=['GET'])
        def get_config_route():
            response = ConfigInquiryResponse(success=True, configs=self.config_manager.get_all_configs())
            data = response.model_dump(mode='json')
            data['configs'] = self.config_manager.get_config_summary()
            return jsonify(data)

        @self.app.route('/api/config', methods=['POST'])
        def update_config_route():
            update_request = ConfigUpdateRequest.model_validate(self._json_body())
            if not self.config_manager.update_config(update_request):
                response = ConfigUpdateResponse(
                    success=False,
                    message='Configuration update rejected',
                    error=f"Invalid values for section '{update_request.section.value}'"
                )
                return jsonify(response.model_dump(mode='json')), 400

            self._build_services()
            response = ConfigUpdateResponse(
                success=True,
                message='Configuration updated',
                updated_section=update_request.section.value
            )
            return jsonify(response.model_dump(mode='json'))


def create_app(config_file_path: Optional[str] = None) -> Flask:
    """Application factory for WSGI servers"""
    return App(ConfigManager(config_file_path)).app
