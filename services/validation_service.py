from utils.constants import ASSET_SYMBOLS, NORMALIZE_MODES, SCALES
from core.correlation import MISSING_POLICIES


def _given(value) -> bool:
    return value is not None and str(value).strip() != ''


class ValidationService:
    """
    Service for validating dashboard request parameters.
    - validate_chart_params: assets, scale, mode, viewport, date range
    - validate_correlation_params: asset pair (must differ), scale, window size
    - validate_summary_params: investment period and loss rate
    Each returns an error message string if invalid, else None.
    """

    @staticmethod
    def _validate_common(params):
        if params['scale'] not in SCALES:
            return f"invalid_scale_selected: {params['scale']}"

        raw_start, raw_end = params.get('window_raw', (None, None))
        if _given(raw_start) or _given(raw_end):
            start, end = params.get('window_start'), params.get('window_end')
            if start is None or end is None:
                return "window_start_and_window_end_must_be_integers."
            if start < 0 or end <= start:
                return "invalid_window_range: window_end_must_be_greater_than_window_start."

        if params.get('start_date') and not params.get('parsed_start_date'):
            return f"invalid_start_date_format: {params['start_date']}. please_use_yyyy-mm-dd."
        if params.get('end_date') and not params.get('parsed_end_date'):
            return f"invalid_end_date_format: {params['end_date']}. please_use_yyyy-mm-dd."
        if params.get('parsed_start_date') and params.get('parsed_end_date'):
            if params['parsed_end_date'] < params['parsed_start_date']:
                return "end_date_must_be_on_or_after_start_date."
        return None

    @staticmethod
    def validate_chart_params(params):
        """
        Validate chart parameters and return error message if invalid.

        Args:
            params (dict): Extracted chart parameters

        Returns:
            str or None: Error message if invalid, else None
        """
        if not params['assets']:
            return "please_select_at_least_one_asset."

        for asset in params['assets']:
            if asset not in ASSET_SYMBOLS:
                return f"unknown_asset: {asset}"

        if params['mode'] not in NORMALIZE_MODES:
            return f"invalid_mode_selected: {params['mode']}"

        return ValidationService._validate_common(params)

    @staticmethod
    def validate_correlation_params(params):
        for key in ('asset_a', 'asset_b'):
            if params[key] not in ASSET_SYMBOLS:
                return f"unknown_asset: {params[key]}"

        if params['asset_a'] == params['asset_b']:
            return "assets_must_differ: please_select_two_different_assets."

        if _given(params.get('window_size_raw')):
            if params.get('window_size') is None or params['window_size'] < 1:
                return "window_size_must_be_a_positive_integer."

        if params['missing'] not in MISSING_POLICIES:
            return f"invalid_missing_policy: {params['missing']}"

        return ValidationService._validate_common(params)

    @staticmethod
    def validate_summary_params(params):
        if not params['investment_period'] or len(params['investment_period']) > 20:
            return "invalid_investment_period."
        if not params['max_loss_rate'] or len(params['max_loss_rate']) > 10:
            return "invalid_max_loss_rate."
        return None
