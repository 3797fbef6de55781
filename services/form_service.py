import logging
from utils.constants import (
    DEFAULT_ASSETS,
    DEFAULT_NORMALIZE_MODE,
    DEFAULT_PAIR,
    DEFAULT_SCALE,
    INVESTMENT_PERIODS,
    MAX_LOSS_RATES,
)
from utils.utils import parse_date_str, parse_int

logger = logging.getLogger(__name__)


class FormService:
    """
    Service for extracting dashboard parameters from a Flask request.
    - extract_chart_params: asset selection, scale, mode, viewport
    - extract_correlation_params: asset pair, scale, window size, viewport
    - extract_summary_params: investment period and max loss rate
    JSON bodies are preferred; form fields and query args are accepted too.
    """

    @staticmethod
    def _payload(request) -> dict:
        data = None
        if hasattr(request, 'get_json'):
            data = request.get_json(silent=True)
        if not data:
            data = getattr(request, 'form', None) or getattr(request, 'args', None) or {}
        return data

    @staticmethod
    def _get_list(data, key, default):
        if hasattr(data, 'getlist'):
            values = data.getlist(key)
            if len(values) == 1:
                values = values[0]
        else:
            values = data.get(key)
        if values is None or values == []:
            return list(default)
        if isinstance(values, str):
            values = values.split(',')
        return [str(v).strip() for v in values if str(v).strip()]

    @staticmethod
    def _get_flag(data, key) -> bool:
        value = data.get(key, False)
        if isinstance(value, str):
            return value.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(value)

    @staticmethod
    def _common(data) -> dict:
        start_date = data.get('start_date', '') or ''
        end_date = data.get('end_date', '') or ''
        return {
            'scale': data.get('scale', DEFAULT_SCALE) or DEFAULT_SCALE,
            'window_start': parse_int(data.get('window_start', '')),
            'window_end': parse_int(data.get('window_end', '')),
            'window_raw': (data.get('window_start'), data.get('window_end')),
            'start_date': start_date,
            'end_date': end_date,
            'parsed_start_date': parse_date_str(start_date),
            'parsed_end_date': parse_date_str(end_date),
            'include_chart': FormService._get_flag(data, 'include_chart'),
            'client_id': data.get('client_id') or None,
        }

    @staticmethod
    def extract_chart_params(request) -> dict:
        """
        Extract chart parameters.
        Returns:
            dict: assets, scale, mode, window_start/window_end, dates, include_chart, client_id
        """
        data = FormService._payload(request)
        params = FormService._common(data)
        params['assets'] = FormService._get_list(data, 'assets', DEFAULT_ASSETS)
        params['mode'] = data.get('mode', DEFAULT_NORMALIZE_MODE) or DEFAULT_NORMALIZE_MODE
        return params

    @staticmethod
    def extract_correlation_params(request) -> dict:
        data = FormService._payload(request)
        params = FormService._common(data)
        params['asset_a'] = (data.get('asset_a') or DEFAULT_PAIR[0]).strip()
        params['asset_b'] = (data.get('asset_b') or DEFAULT_PAIR[1]).strip()
        raw_size = data.get('window_size', '')
        params['window_size_raw'] = raw_size
        params['window_size'] = parse_int(raw_size)
        params['missing'] = data.get('missing', 'zero') or 'zero'
        return params

    @staticmethod
    def extract_summary_params(request) -> dict:
        data = FormService._payload(request)
        return {
            'investment_period': str(data.get('investment_period') or INVESTMENT_PERIODS[0]).strip(),
            'max_loss_rate': str(data.get('max_loss_rate') or MAX_LOSS_RATES[1]).strip(),
        }
