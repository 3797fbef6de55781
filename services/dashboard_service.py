import logging
from core.window import Window
from .chart_service import ChartService

logger = logging.getLogger(__name__)


class DashboardService:
    """Service for coordinating chart and correlation requests against a DataService"""

    def __init__(self, data_service):
        self.data_service = data_service

    @staticmethod
    def _window(params):
        if params.get('window_start') is None or params.get('window_end') is None:
            return None
        return Window(params['window_start'], params['window_end'])

    def generate_chart_data(self, params):
        """Normalized chart rows for the selected assets, plus an optional PNG chart"""
        try:
            result = self.data_service.run_selection(
                params.get('client_id') and ('chart', params['client_id']),
                lambda: self.data_service.chart_rows(
                    params['assets'],
                    scale=params['scale'],
                    mode=params['mode'],
                    window=self._window(params),
                    start=params.get('parsed_start_date'),
                    end=params.get('parsed_end_date'),
                ),
            )
            if result is None:
                return {'error': 'superseded_by_newer_selection', 'status': 409}

            result.update({'assets': params['assets'], 'scale': params['scale'], 'mode': params['mode']})
            if params.get('include_chart') and result['rows']:
                chart = ChartService.render_asset_chart(result['rows'], params['assets'], params['mode'])
                if chart:
                    result['chart'] = chart
                else:
                    logger.warning("Asset chart rendering failed")
            return result

        except ValueError as e:
            logger.warning(f"Invalid chart request: {e}")
            return {'error': f"invalid_request: {e}", 'status': 400}
        except Exception as e:
            logger.error(f"Error generating chart data: {e}", exc_info=True)
            return {'error': f"chart_data_failed: {str(e)}", 'status': 500}

    def generate_correlation(self, params):
        """Correlation series between two different assets, plus an optional PNG chart"""
        # Same-asset correlation is trivially 1.0; refuse before touching the estimator
        if params['asset_a'] == params['asset_b']:
            return {'error': 'assets_must_differ: please_select_two_different_assets.',
                    'warning': True, 'status': 400}
        try:
            result = self.data_service.run_selection(
                params.get('client_id') and ('correlation', params['client_id']),
                lambda: self.data_service.correlation(
                    params['asset_a'],
                    params['asset_b'],
                    scale=params['scale'],
                    window_size=params.get('window_size'),
                    window=self._window(params),
                    missing=params.get('missing', 'zero'),
                    start=params.get('parsed_start_date'),
                    end=params.get('parsed_end_date'),
                ),
            )
            if result is None:
                return {'error': 'superseded_by_newer_selection', 'status': 409}

            result.update({'asset_a': params['asset_a'], 'asset_b': params['asset_b'], 'scale': params['scale']})
            if params.get('include_chart') and result['points']:
                chart = ChartService.render_correlation_chart(result['points'], params['asset_a'], params['asset_b'])
                if chart:
                    result['chart'] = chart
                else:
                    logger.warning("Correlation chart rendering failed")
            return result

        except ValueError as e:
            logger.warning(f"Invalid correlation request: {e}")
            return {'error': f"invalid_request: {e}", 'status': 400}
        except Exception as e:
            logger.error(f"Error generating correlation: {e}", exc_info=True)
            return {'error': f"correlation_failed: {str(e)}", 'status': 500}

    def export_csv(self, assets):
        try:
            return self.data_service.export(assets)
        except Exception as e:
            logger.error(f"Error exporting series: {e}", exc_info=True)
            return None
