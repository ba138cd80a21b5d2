"""
Shared fixtures for QuoteCompare tests.
"""

import pytest

from quote_compare.backend.app import App
from quote_compare.config import ConfigManager
from quote_compare.models import BOQ, AppConfig, BOQItem, QuotationItem, Quote
from quote_compare.services import ComparisonService, ComparisonStore, MetricsStore


@pytest.fixture
def boq_items():
    return [
        BOQItem(id='b1', item_number='1.1', description='Excavation in ordinary soil', unit='cum', quantity=100, base_rate=250),
        BOQItem(id='b2', item_number='1.2', description='Plain cement concrete 1:4:8', unit='cum', quantity=20, base_rate=5200),
        BOQItem(id='b3', item_number='2.1', description='Brick masonry in cement mortar', unit='sqm', quantity=50),
    ]


@pytest.fixture
def quote_items():
    return [
        QuotationItem(vendor='Acme', description='Excavation in ordinary soil', unit='cum', rate=240),
        QuotationItem(vendor='Bolt', description='Excavation in ordinary soil', unit='cum', rate=230),
        QuotationItem(vendor='Acme', description='Plain cement concrete 1:4:8', unit='cum', rate=5000),
    ]


@pytest.fixture
def boq_payload():
    return {
        'id': 'boq-1',
        'version': '1.0',
        'currency': 'USD',
        'totalBOQ': 2000,
        'items': [
            {'lineNo': 1, 'sku': 'SKU-A', 'description': 'Steel pipe 50mm', 'qty': 10, 'uom': 'm', 'estimatedPrice': 100},
            {'lineNo': 2, 'sku': 'SKU-B', 'description': 'Gate valve 50mm', 'qty': 20, 'uom': 'nos', 'estimatedPrice': 50},
        ]
    }


@pytest.fixture
def quotes_payload():
    return [
        {
            'vendorId': 'v1',
            'vendorName': 'Best Supply Co.',
            'totalCost': 1910,
            'items': [
                {'boqLineNo': 1, 'sku': 'SKU-A', 'unitPrice': 95, 'qty': 10, 'leadTime': 7},
                {'boqLineNo': 2, 'sku': 'SKU-B', 'unitPrice': 48, 'qty': 20, 'leadTime': 7},
            ]
        },
        {
            'vendorId': 'v2',
            'vendorName': 'Pipe World',
            'totalCost': 2100,
            'items': [
                {'boqLineNo': 1, 'sku': 'SKU-A', 'unitPrice': 100, 'qty': 10},
                {'sku': 'SKU-C', 'unitPrice': 10, 'qty': 100},
            ]
        },
    ]


@pytest.fixture
def boq(boq_payload):
    return BOQ.model_validate(boq_payload)


@pytest.fixture
def quotes(quotes_payload):
    return [Quote.model_validate(q) for q in quotes_payload]


@pytest.fixture
def comparison_service():
    return ComparisonService(AppConfig.get_default_config(), ComparisonStore(), MetricsStore())


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(str(tmp_path / 'config.json'))


@pytest.fixture
def server(config_manager, tmp_path):
    server = App(config_manager, output_folder=str(tmp_path / 'output'))
    server.app.config['TESTING'] = True
    return server


@pytest.fixture
def client(server):
    return server.app.test_client()
