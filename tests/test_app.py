import base64
import datetime as dt

import pytest

import app as app_module
from data_pipeline.data_service import DataService
from services.dashboard_service import DashboardService
from services.llm_service import LLMService


def fake_history(asset):
    start = dt.date(2024, 1, 1)
    offset = sorted(app_module.ASSET_SYMBOLS).index(asset)
    return [
        {'date': (start + dt.timedelta(days=i)).isoformat(), 'value': 10.0 + offset + (i * (offset + 1)) % 17}
        for i in range(182)
    ]


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app_module, 'dashboard', DashboardService(DataService(loader=fake_history)))
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as c:
        yield c


def test_asset_catalogue(client):
    resp = client.get('/api/assets')
    assert resp.status_code == 200
    body = resp.get_json()
    assert 'S&P 500' in body['assets']
    assert body['rate_like_assets'] == ['KR Rate', 'US Rate']
    assert body['scales'] == ['daily', 'weekly', 'monthly']


def test_asset_data(client):
    resp = client.post('/api/asset-data', json={'assets': ['Gold', 'Bitcoin'], 'scale': 'monthly'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['total'] == 6
    assert body['window'] == {'start': 0, 'end': 6}
    assert len(body['rows']) == 6
    assert 'chart' not in body
    for row in body['rows']:
        assert 0.0 <= row['Gold'] <= 100.0


def test_asset_data_with_chart(client):
    resp = client.post('/api/asset-data', json={'assets': ['Gold'], 'scale': 'monthly', 'include_chart': True})
    assert resp.status_code == 200
    png = base64.b64decode(resp.get_json()['chart'])
    assert png.startswith(b'\x89PNG')


def test_asset_data_rejects_unknown_asset(client):
    resp = client.post('/api/asset-data', json={'assets': ['Tulips']})
    assert resp.status_code == 400
    assert 'unknown_asset' in resp.get_json()['error']


def test_asset_data_window_beyond_data(client):
    resp = client.post('/api/asset-data', json={
        'assets': ['Gold'], 'scale': 'monthly', 'window_start': 0, 'window_end': 10,
    })
    assert resp.status_code == 400
    assert 'invalid_request' in resp.get_json()['error']


def test_correlation(client):
    resp = client.post('/api/correlation', json={
        'asset_a': 'Gold', 'asset_b': 'Bitcoin', 'scale': 'daily', 'window_size': 10,
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['window_size'] == 10
    assert body['total'] == len(body['points'])
    assert all(-1.0 <= p['correlation'] <= 1.0 for p in body['points'])


def test_correlation_same_asset_warns(client):
    resp = client.post('/api/correlation', json={'asset_a': 'Gold', 'asset_b': 'Gold'})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['warning'] is True
    assert 'assets_must_differ' in body['error']


def test_export_csv(client):
    resp = client.get('/api/export?assets=Gold,Bitcoin')
    assert resp.status_code == 200
    assert resp.mimetype == 'text/csv'
    assert 'asset_history.csv' in resp.headers['Content-Disposition']
    lines = resp.get_data(as_text=True).strip().splitlines()
    assert lines[0] == 'asset,date,value'
    assert len(lines) == 2 * 182 + 1


def test_export_unknown_asset(client):
    resp = client.get('/api/export?assets=Tulips')
    assert resp.status_code == 400


def test_llm_summary_mock(client, monkeypatch):
    monkeypatch.setenv('LLM_MOCK', '1')
    resp = client.post('/api/llm-summary', json={'investment_period': '3y', 'max_loss_rate': '5%'})
    assert resp.status_code == 200
    summary = resp.get_json()['summary']
    assert '3y' in summary
    assert '5%' in summary


def test_predictions_without_api_key(client, monkeypatch):
    monkeypatch.delenv('LLM_MOCK', raising=False)
    monkeypatch.delenv('OPENAI_API_KEY', raising=False)
    monkeypatch.setattr(app_module, 'llm_service', LLMService())
    resp = client.get('/api/predictions')
    assert resp.status_code == 500
    assert resp.get_json()['error'] == 'openai_api_key_not_configured'
