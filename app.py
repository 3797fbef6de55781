from flask import Flask, Response, request, jsonify
import logging
import os
from dotenv import load_dotenv
load_dotenv()  # load .env before reading configuration


from services.form_service import FormService
from services.validation_service import ValidationService
from services.dashboard_service import DashboardService
from services.llm_service import LLMService
from data_pipeline.data_service import DataService
from data_pipeline.scheduler import RefreshScheduler
from utils.constants import (
    ASSET_SYMBOLS,
    AUTO_REFRESH_ASSETS,
    CORRELATION_WINDOW,
    DEFAULT_ASSETS,
    DEFAULT_PAIR,
    INVESTMENT_PERIODS,
    MAX_LOSS_RATES,
    NORMALIZE_MODES,
    RATE_LIKE_ASSETS,
    SCALES,
)

app = Flask(__name__)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# One cache per process, owned here and shared through the data service
data_service = DataService()
dashboard = DashboardService(data_service)
llm_service = LLMService()

_scheduler = None
try:
    if AUTO_REFRESH_ASSETS:
        _scheduler = RefreshScheduler(data_service.cache)
        _scheduler.start_daily_refresh(AUTO_REFRESH_ASSETS)
except Exception as e:
    logger.warning(f"Scheduler init failed: {e}")


def _respond(result):
    status = result.pop('status', 200)
    return jsonify(result), status


@app.route('/', methods=['GET'])
@app.route('/api/assets', methods=['GET'])
def assets():
    """Asset catalogue and dashboard defaults."""
    return jsonify({
        'assets': list(ASSET_SYMBOLS),
        'rate_like_assets': sorted(RATE_LIKE_ASSETS),
        'scales': SCALES,
        'modes': NORMALIZE_MODES,
        'default_assets': DEFAULT_ASSETS,
        'default_pair': list(DEFAULT_PAIR),
        'correlation_window': CORRELATION_WINDOW,
        'investment_periods': INVESTMENT_PERIODS,
        'max_loss_rates': MAX_LOSS_RATES,
    })


@app.route('/api/asset-data', methods=['POST'])
def asset_data():
    """
    Chart-ready rows.
    Request: JSON {"assets": [...], "scale": "monthly", "mode": "range",
                   "window_start": 0, "window_end": 36, "include_chart": false}
    Response: {"rows": [...], "total": n, "window": {"start", "end"}, ...}
    """
    try:
        params = FormService.extract_chart_params(request)
        validation_error = ValidationService.validate_chart_params(params)
        if validation_error:
            return jsonify({'error': validation_error}), 400
        return _respond(dashboard.generate_chart_data(params))
    except Exception as e:
        logger.error(f"Unexpected error in asset data route: {e}", exc_info=True)
        return jsonify({'error': f"An unexpected error occurred: {str(e)}"}), 500


@app.route('/api/correlation', methods=['POST'])
def correlation():
    """
    Correlation cycle between two assets.
    Request: JSON {"asset_a": "US Rate", "asset_b": "S&P 500", "scale": "monthly", "window_size": 6}
    Response: {"points": [{"date", "correlation"}], "total": n, "window": {...}, ...}
    """
    try:
        params = FormService.extract_correlation_params(request)
        validation_error = ValidationService.validate_correlation_params(params)
        if validation_error:
            return jsonify({'error': validation_error,
                            'warning': params['asset_a'] == params['asset_b']}), 400
        return _respond(dashboard.generate_correlation(params))
    except Exception as e:
        logger.error(f"Unexpected error in correlation route: {e}", exc_info=True)
        return jsonify({'error': f"An unexpected error occurred: {str(e)}"}), 500


@app.route('/api/export', methods=['GET'])
def export():
    """CSV download of the raw cached series: /api/export?assets=Gold,Bitcoin"""
    params = FormService.extract_chart_params(request)
    unknown = [a for a in params['assets'] if a not in ASSET_SYMBOLS]
    if unknown:
        return jsonify({'error': f"unknown_asset: {unknown[0]}"}), 400
    csv_text = dashboard.export_csv(params['assets'])
    if csv_text is None:
        return jsonify({'error': 'export_failed'}), 500
    return Response(
        csv_text,
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=asset_history.csv'},
    )


@app.route('/api/llm-summary', methods=['POST'])
def llm_summary():
    """
    Narrative outlook.
    Request: JSON {"investment_period": "1y", "max_loss_rate": "10%"}
    Response: {"summary": "..."}
    """
    params = FormService.extract_summary_params(request)
    validation_error = ValidationService.validate_summary_params(params)
    if validation_error:
        return jsonify({'error': validation_error}), 400
    return _respond(llm_service.generate_summary(params['investment_period'], params['max_loss_rate']))


@app.route('/api/predictions', methods=['GET'])
def predictions():
    return _respond(llm_service.generate_predictions())


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "") == "1")
