import datetime as dt

from services.validation_service import ValidationService

# Helpers to build minimal valid params


def build_chart_params(**overrides):
    base = {
        'assets': ['Gold', 'S&P 500'],
        'scale': 'monthly',
        'mode': 'range',
        'window_start': None,
        'window_end': None,
        'window_raw': (None, None),
        'start_date': '',
        'end_date': '',
        'parsed_start_date': None,
        'parsed_end_date': None,
    }
    base.update(overrides)
    return base


def build_correlation_params(**overrides):
    base = build_chart_params(asset_a='US Rate', asset_b='S&P 500',
                              window_size=None, window_size_raw='', missing='zero')
    base.update(overrides)
    return base


def test_chart_params_pass():
    assert ValidationService.validate_chart_params(build_chart_params()) is None


def test_chart_requires_assets():
    msg = ValidationService.validate_chart_params(build_chart_params(assets=[]))
    assert 'please_select_at_least_one_asset' in msg


def test_chart_unknown_asset():
    msg = ValidationService.validate_chart_params(build_chart_params(assets=['Gold', 'Tulips']))
    assert msg == 'unknown_asset: Tulips'


def test_chart_invalid_mode_and_scale():
    assert 'invalid_mode_selected' in ValidationService.validate_chart_params(build_chart_params(mode='zscore'))
    assert 'invalid_scale_selected' in ValidationService.validate_chart_params(build_chart_params(scale='hourly'))


def test_window_must_be_integers():
    params = build_chart_params(window_start=0, window_end=None, window_raw=(0, 'abc'))
    assert 'must_be_integers' in ValidationService.validate_chart_params(params)


def test_window_range_must_be_ordered():
    params = build_chart_params(window_start=10, window_end=10, window_raw=(10, 10))
    assert 'invalid_window_range' in ValidationService.validate_chart_params(params)
    params = build_chart_params(window_start=0, window_end=10, window_raw=(0, 10))
    assert ValidationService.validate_chart_params(params) is None


def test_date_format_and_order():
    params = build_chart_params(start_date='someday')
    assert 'invalid_start_date_format' in ValidationService.validate_chart_params(params)
    params = build_chart_params(
        start_date='2024-02-01', parsed_start_date=dt.date(2024, 2, 1),
        end_date='2024-01-01', parsed_end_date=dt.date(2024, 1, 1),
    )
    assert 'end_date_must_be_on_or_after_start_date' in ValidationService.validate_chart_params(params)


def test_correlation_params_pass():
    assert ValidationService.validate_correlation_params(build_correlation_params()) is None


def test_correlation_assets_must_differ():
    params = build_correlation_params(asset_a='Gold', asset_b='Gold')
    assert 'assets_must_differ' in ValidationService.validate_correlation_params(params)


def test_correlation_window_size_positive():
    params = build_correlation_params(window_size_raw='0', window_size=0)
    assert 'window_size_must_be_a_positive_integer' in ValidationService.validate_correlation_params(params)
    params = build_correlation_params(window_size_raw='abc', window_size=None)
    assert 'window_size_must_be_a_positive_integer' in ValidationService.validate_correlation_params(params)


def test_correlation_missing_policy():
    params = build_correlation_params(missing='interpolate')
    assert 'invalid_missing_policy' in ValidationService.validate_correlation_params(params)


def test_summary_params():
    assert ValidationService.validate_summary_params({'investment_period': '1y', 'max_loss_rate': '10%'}) is None
    assert 'invalid_investment_period' in ValidationService.validate_summary_params(
        {'investment_period': '', 'max_loss_rate': '10%'})
    assert 'invalid_max_loss_rate' in ValidationService.validate_summary_params(
        {'investment_period': '1y', 'max_loss_rate': 'x' * 11})
