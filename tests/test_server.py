"""
Tests for the HTTP surface.
"""

import copy
import logging

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from shopmerge.api.server import create_app
from shopmerge.config import DEFAULT_CONFIG
from shopmerge.core.exceptions import FetchError, ParseError, SerializationError
from shopmerge.core.models import SourceRecord
from shopmerge.scraper.shop_scraper import SasShopScraper, TrumfShopScraper


@pytest.fixture
def client():
    """Provide a test client over a default-configured app."""
    return TestClient(create_app(copy.deepcopy(DEFAULT_CONFIG)))


@pytest.fixture
def sas_records():
    return [
        SourceRecord.from_sas_json({'uuid': 'u1', 'name': 'Acme', 'slug': 'acme'}),
        SourceRecord.from_sas_json({'uuid': 'u3', 'name': 'Casa', 'slug': 'casa'}),
    ]


@pytest.fixture
def trumf_records():
    return [SourceRecord.from_trumf_name('Bravo'), SourceRecord.from_trumf_name('Casa')]


def test_ping(client):
    response = client.get('/ping')

    assert response.status_code == 200
    assert response.text == 'pong'


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.text == "I'm healthy"


def test_probes_do_not_touch_upstreams(client):
    with patch.object(SasShopScraper, 'fetch') as sas_fetch, \
         patch.object(TrumfShopScraper, 'fetch') as trumf_fetch:
        sas_fetch.side_effect = FetchError('sasonlineshopping', 'down')

        assert client.get('/ping').status_code == 200
        assert client.get('/health').status_code == 200

        sas_fetch.assert_not_called()
        trumf_fetch.assert_not_called()


def test_root_returns_merged_shops(client, sas_records, trumf_records):
    """Test the full fetch-merge-assemble pipeline."""
    with patch.object(SasShopScraper, 'fetch', return_value=sas_records), \
         patch.object(TrumfShopScraper, 'fetch', return_value=trumf_records):
        response = client.get('/')

    assert response.status_code == 200
    assert response.headers['content-type'].startswith('application/json')

    shops = {entry['name']: entry for entry in response.json()['data']}
    assert set(shops) == {'Acme', 'Bravo', 'Casa'}
    assert shops['Casa']['source'] == ['sasonlineshopping', 'trumfnetthandel']
    assert shops['Acme']['trumfnetthandel_extra'] == {'slug': '', 'url': ''}
    assert 'sasonlineshopping_extra' not in shops['Bravo']


def test_root_with_no_shops(client):
    with patch.object(SasShopScraper, 'fetch', return_value=[]), \
         patch.object(TrumfShopScraper, 'fetch', return_value=[]):
        response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'data': []}


def test_root_upstream_failure_returns_502(client):
    """Test an upstream failure fails the whole request without a partial result."""
    with patch.object(SasShopScraper, 'fetch') as sas_fetch, \
         patch.object(TrumfShopScraper, 'fetch') as trumf_fetch:
        sas_fetch.side_effect = FetchError('sasonlineshopping', 'connection refused')
        response = client.get('/')

        trumf_fetch.assert_not_called()

    assert response.status_code == 502
    assert response.json() == {
        'error': 'upstream_error',
        'source': 'sasonlineshopping',
        'detail': 'connection refused'
    }


def test_root_parse_failure_returns_502(client, sas_records):
    with patch.object(SasShopScraper, 'fetch', return_value=sas_records), \
         patch.object(TrumfShopScraper, 'fetch') as trumf_fetch:
        trumf_fetch.side_effect = ParseError('trumfnetthandel', 'Could not parse HTML')
        response = client.get('/')

    assert response.status_code == 502
    assert response.json()['source'] == 'trumfnetthandel'


def test_root_serialization_failure_returns_500(client):
    with patch.object(SasShopScraper, 'fetch', return_value=[]), \
         patch.object(TrumfShopScraper, 'fetch', return_value=[]), \
         patch('shopmerge.api.server.serialize_response') as serialize:
        serialize.side_effect = SerializationError('boom')
        response = client.get('/')

    assert response.status_code == 500
    assert response.json() == {'error': 'serialization_error', 'detail': 'boom'}


def test_server_keeps_serving_after_failure(client):
    with patch.object(SasShopScraper, 'fetch', side_effect=FetchError('sasonlineshopping', 'down')):
        assert client.get('/').status_code == 502

    assert client.get('/ping').status_code == 200


def test_unknown_path_is_not_found(client):
    assert client.get('/shops').status_code == 404


@pytest.mark.parametrize('headers,expected_ip', [
    ({'X-Forwarded-For': '10.0.0.1, 172.16.0.1'}, '10.0.0.1'),
    ({'X-Real-IP': '192.168.1.5'}, '192.168.1.5'),
    ({'X-Forwarded-For': ' 10.0.0.2 ', 'X-Real-IP': '192.168.1.5'}, '10.0.0.2'),
])
def test_request_logging(client, caplog, headers, expected_ip):
    """Test the middleware logs client IP, path, status and user agent."""
    caplog.set_level(logging.INFO, logger='shopmerge.request')

    client.get('/ping', headers={**headers, 'User-Agent': 'healthcheck/1.0'})

    messages = [record.getMessage() for record in caplog.records]
    assert any(
        f'Request incoming; IP: {expected_ip} Event: "/ping" Status: "200" UserAgent:"healthcheck/1.0"' in message
        for message in messages
    )


def test_request_logging_falls_back_to_peer_address(client, caplog):
    caplog.set_level(logging.INFO, logger='shopmerge.request')

    client.get('/health')

    assert any('IP: testclient' in record.getMessage() for record in caplog.records)


def test_request_logging_on_unhandled_error(caplog):
    """Test the access line is still written when the handler crashes."""
    caplog.set_level(logging.INFO, logger='shopmerge.request')
    client = TestClient(create_app(copy.deepcopy(DEFAULT_CONFIG)), raise_server_exceptions=False)

    with patch('shopmerge.api.server.aggregate_shops', side_effect=RuntimeError("boom")):
        response = client.get('/')

    assert response.status_code == 500
    assert any('Event: "/" Status: "500"' in record.getMessage() for record in caplog.records)
