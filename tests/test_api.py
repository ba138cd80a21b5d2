"""
HTTP API tests using the Flask test client.
"""

import pytest


def create_comparison(client, boq_payload, quotes_payload):
    response = client.post('/api/comparison', json={'boqData': boq_payload, 'quotes': quotes_payload})
    assert response.status_code == 200
    return response.get_json()['data']


@pytest.mark.api
class TestHealth:

    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.get_json()['status'] == 'OK'

    def test_unknown_route(self, client):
        response = client.get('/api/nothing-here')

        assert response.status_code == 404
        body = response.get_json()
        assert body['success'] is False
        assert body['error']['message'] == 'Endpoint not found'


@pytest.mark.api
class TestComparisonRoutes:

    def test_create_comparison(self, client, boq_payload, quotes_payload):
        data = create_comparison(client, boq_payload, quotes_payload)

        assert data['id'].startswith('comp-')
        assert data['bestVendor'] == 'Best Supply Co.'
        assert data['costSavings'] == 90
        assert data['approvalRoute'] == 'PROCUREMENT_MANAGER'
        assert data['status'] == 'PENDING_APPROVAL'
        assert data['policyEvaluation']['policyChecksPassed'] is True
        assert [q['vendorId'] for q in data['quotes']] == ['v1', 'v2']
        assert data['quotes'][1]['complianceScore'] == 80

    @pytest.mark.parametrize('body', [
        {},
        {'quotes': []},
        {'boqData': {'id': 'b'}},
        {'boqData': {'id': 'b'}, 'quotes': 'nope'},
        {'boqData': ['not', 'an', 'object'], 'quotes': []},
    ])
    def test_create_requires_boq_and_quotes(self, client, body):
        response = client.post('/api/comparison', json=body)

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'

    @pytest.mark.parametrize('boq_data', [
        {},
        {'totalBOQ': 1000},
        {'totalBOQ': 1000, 'items': 'oops'},
    ])
    def test_boq_without_items_gives_empty_ranking(self, client, quotes_payload, boq_data):
        response = client.post('/api/comparison', json={'boqData': boq_data, 'quotes': quotes_payload})

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['quotes'] == []
        assert data['bestVendor'] == 'N/A'
        assert data['boqId'] is None
        assert data['costSavings'] == boq_data.get('totalBOQ', 0)
        assert data['status'] == 'PENDING_APPROVAL'

    def test_malformed_quote_is_a_validation_error(self, client, boq_payload):
        response = client.post('/api/comparison', json={'boqData': boq_payload, 'quotes': [{'totalCost': 5}]})

        assert response.status_code == 400
        assert response.get_json()['error']['details']

    def test_get_and_list(self, client, boq_payload, quotes_payload):
        created = create_comparison(client, boq_payload, quotes_payload)

        fetched = client.get(f"/api/comparison/{created['id']}").get_json()['data']
        listed = client.get('/api/comparison').get_json()['data']

        assert fetched == created
        assert [c['id'] for c in listed] == [created['id']]

    def test_get_missing(self, client):
        response = client.get('/api/comparison/comp-unknown')

        assert response.status_code == 404
        assert response.get_json()['error']['message'] == 'Comparison not found'


@pytest.mark.api
class TestMatchRoutes:

    @pytest.fixture
    def match_body(self, boq_items, quote_items):
        return {
            'boqItems': [item.to_json_dict() for item in boq_items],
            'quoteItems': [item.to_json_dict() for item in quote_items],
        }

    def test_match(self, client, match_body):
        response = client.post('/api/match', json=match_body)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert [m['matchedBoqId'] for m in data['matches']] == ['b1', 'b1', 'b2']
        assert data['matches'][0]['confidenceBand'] == 'high'
        assert data['selections'][0] == {'boqItemId': 'b1', 'selectedVendor': 'Bolt', 'finalRate': 230}
        assert data['summary']['coveragePercent'] == 67
        assert data['summary']['vendorCount'] == 2
        assert data['summary']['savings'] == 129000 - 123000

    def test_match_requires_lists(self, client):
        response = client.post('/api/match', json={'boqItems': 'x'})

        assert response.status_code == 400

    def test_override(self, client, match_body):
        match = client.post('/api/match', json=match_body).get_json()['data']['matches'][0]
        match.pop('confidenceBand')

        response = client.post('/api/match/override', json={'match': match, 'boqId': 'b3'})

        data = response.get_json()['data']
        assert data['matchedBoqId'] == 'b3'
        assert data['confidence'] == 1.0
        assert data['manual'] is True


@pytest.mark.api
class TestApprovalRoutes:

    def test_approve(self, client, boq_payload, quotes_payload):
        created = create_comparison(client, boq_payload, quotes_payload)

        response = client.post('/api/approval', json={
            'comparisonId': created['id'],
            'decision': 'APPROVED',
            'approverEmail': 'boss@company.com'
        })

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['poDetails']['poNumber'].startswith('PO-TEST-')
        assert data['nextStep'].startswith('PO Created: ')
        stored = client.get(f"/api/comparison/{created['id']}").get_json()['data']
        assert stored['status'] == 'APPROVED'

    def test_second_decision_conflicts(self, client, boq_payload, quotes_payload):
        created = create_comparison(client, boq_payload, quotes_payload)
        client.post('/api/approval', json={'comparisonId': created['id'], 'decision': 'REJECTED'})

        response = client.post('/api/approval', json={'comparisonId': created['id'], 'decision': 'APPROVED'})

        assert response.status_code == 409
        assert response.get_json()['error']['code'] == 'INVALID_STATE'

    def test_unknown_comparison(self, client):
        response = client.post('/api/approval', json={'comparisonId': 'comp-x', 'decision': 'APPROVED'})

        assert response.status_code == 404

    @pytest.mark.parametrize('body', [{}, {'comparisonId': 'c'}, {'comparisonId': 'c', 'decision': 'MAYBE'}])
    def test_invalid_approval(self, client, body):
        assert client.post('/api/approval', json=body).status_code == 400

    def test_erp_routes(self, client):
        po = client.post('/api/erp/create-po', json={'selectedVendor': 'Acme', 'comparisonId': 'comp-1'})
        assert po.status_code == 200
        po_number = po.get_json()['data']['poNumber']

        status = client.get(f"/api/erp/po-status/{po_number}").get_json()['data']
        assert status['status'] == 'CONFIRMED'


@pytest.mark.api
class TestKpiExportAndConfig:

    def test_kpi(self, client, boq_payload, quotes_payload):
        create_comparison(client, boq_payload, quotes_payload)

        data = client.get('/api/kpi').get_json()['data']

        assert data['totalProcessed'] == 1
        assert data['autoApprovedCount'] == 1
        assert data['totalCostSavings'] == 90

    def test_export(self, client, boq_items):
        response = client.post('/api/export', json={
            'boqItems': [item.to_json_dict() for item in boq_items],
            'selections': [{'boqItemId': 'b1', 'selectedVendor': 'Bolt', 'finalRate': 230}]
        })

        assert response.status_code == 200
        assert 'attachment' in response.headers['Content-Disposition']
        assert response.data[:2] == b'PK'

    def test_get_config(self, client):
        body = client.get('/api/config').get_json()

        assert body['success'] is True
        assert body['configs']['matching']['distance_threshold'] == 0.4

    def test_update_config_rebuilds_services(self, client, boq_payload, quotes_payload):
        response = client.post('/api/config', json={'section': 'integrations', 'values': {'po_prefix': 'acme'}})

        assert response.status_code == 200
        assert response.get_json()['updated_section'] == 'integrations'

        created = create_comparison(client, boq_payload, quotes_payload)
        approval = client.post('/api/approval', json={'comparisonId': created['id'], 'decision': 'APPROVED'})
        assert approval.get_json()['data']['poDetails']['poNumber'].startswith('PO-ACME-')

    def test_flow_timing_reaches_orchestrator(self, client, server):
        response = client.post('/api/config', json={
            'section': 'integrations',
            'values': {'flow_timeout_seconds': 42, 'flow_poll_interval_seconds': 5}
        })

        assert response.status_code == 200
        assert server.orchestrator.flow_timeout == 42
        assert server.orchestrator.poll_interval == 5

    def test_rejected_config_update(self, client):
        response = client.post('/api/config', json={'section': 'matching', 'values': {'bogus': 1}})

        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_invalid_section(self, client):
        response = client.post('/api/config', json={'section': 'nope', 'values': {'a': 1}})

        assert response.status_code == 400
