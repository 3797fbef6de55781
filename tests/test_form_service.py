import datetime as dt

from services.form_service import FormService


class DummyRequest:
    def __init__(self, form_dict):
        self.form = form_dict


class JsonRequest:
    def __init__(self, payload):
        self.payload = payload
        self.form = {}

    def get_json(self, silent=False):
        return self.payload


def test_extract_chart_params_from_form():
    form_dict = {
        'assets': 'Gold, Bitcoin',
        'scale': 'weekly',
        'mode': 'relative',
        'window_start': '0',
        'window_end': '36',
        'start_date': '2020-01-01',
        'include_chart': 'true',
    }
    params = FormService.extract_chart_params(DummyRequest(form_dict))
    assert params['assets'] == ['Gold', 'Bitcoin']
    assert params['scale'] == 'weekly'
    assert params['mode'] == 'relative'
    assert (params['window_start'], params['window_end']) == (0, 36)
    assert params['parsed_start_date'] == dt.date(2020, 1, 1)
    assert params['parsed_end_date'] is None
    assert params['include_chart'] is True


def test_extract_chart_params_defaults():
    params = FormService.extract_chart_params(DummyRequest({}))
    assert params['assets'] == ['US Rate', 'S&P 500']
    assert params['scale'] == 'monthly'
    assert params['mode'] == 'range'
    assert params['window_start'] is None
    assert params['include_chart'] is False
    assert params['client_id'] is None


def test_extract_chart_params_from_json_list():
    req = JsonRequest({'assets': ['Gold', 'Kospi'], 'window_start': 5, 'window_end': 'x'})
    params = FormService.extract_chart_params(req)
    assert params['assets'] == ['Gold', 'Kospi']
    assert params['window_start'] == 5
    assert params['window_end'] is None
    assert params['window_raw'] == (5, 'x')


def test_extract_correlation_params():
    req = JsonRequest({'asset_a': 'Gold', 'asset_b': 'Bitcoin', 'window_size': '12', 'missing': 'skip'})
    params = FormService.extract_correlation_params(req)
    assert params['asset_a'] == 'Gold'
    assert params['asset_b'] == 'Bitcoin'
    assert params['window_size'] == 12
    assert params['missing'] == 'skip'


def test_extract_correlation_params_defaults_to_pair():
    params = FormService.extract_correlation_params(DummyRequest({}))
    assert (params['asset_a'], params['asset_b']) == ('US Rate', 'S&P 500')
    assert params['window_size'] is None
    assert params['missing'] == 'zero'


def test_extract_summary_params_strips_and_defaults():
    params = FormService.extract_summary_params(DummyRequest({'investment_period': ' 3y '}))
    assert params == {'investment_period': '3y', 'max_loss_rate': '10%'}
