"""Application constants and configuration"""

import os

# Dashboard assets -> Yahoo Finance symbols
ASSET_SYMBOLS = {
    'S&P 500': '^GSPC',
    'Kospi': '^KS11',
    'Bitcoin': 'BTC-USD',
    'Gold': 'GC=F',
    'Treasury 10Y': '^TNX',
    'USD/KRW': 'KRW=X',
    'Real Estate': 'VNQ',
    'US Rate': '^IRX',       # US short-term rate
    'KR Rate': 'KRWCBDKY=SB' # Korean call rate
}

# Assets normalized on the fixed rate domain instead of the window min/max
RATE_LIKE_ASSETS = frozenset({'US Rate', 'KR Rate'})

# Fixed linear remap for rate-like series: (domain_min, domain_max, range_min, range_max)
RATE_DOMAIN = (-10.0, 30.0)
RATE_RANGE = (-10.0, 30.0)

# Chart scales
SCALES = ['daily', 'weekly', 'monthly']
DEFAULT_SCALE = 'monthly'

SCALE_DISPLAY = {
    'daily': 'Daily',
    'weekly': 'Weekly',
    'monthly': 'Monthly'
}

# Chart normalization modes
NORMALIZE_MODES = ['range', 'relative']
DEFAULT_NORMALIZE_MODE = 'range'

# Initial viewport size (rows) per scale
CHART_VIEW_SIZE = {
    'daily': 90,
    'weekly': 52,
    'monthly': 36
}
CORRELATION_VIEW_SIZE = {
    'daily': 60,
    'weekly': 36,
    'monthly': 24
}

# Viewport zoom step and minimum window size (rows)
ZOOM_STEP = 6
MIN_WINDOW_SIZE = 6

# Correlation window size (points per coefficient) per scale
CORRELATION_WINDOW = {
    'daily': 20,
    'weekly': 12,
    'monthly': 6
}

DEFAULT_ASSETS = ['US Rate', 'S&P 500']
DEFAULT_PAIR = ('US Rate', 'S&P 500')

# History download
HISTORY_YEARS = int(os.environ.get("HISTORY_YEARS", 20))

# Scheduled cache refresh
AUTO_REFRESH_ASSETS = [
    a.strip() for a in os.environ.get("AUTO_REFRESH_ASSETS", "").split(",") if a.strip()
]
SCHED_TZ = os.environ.get("SCHED_TZ", "UTC")

# LLM summary
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo")
LLM_TEMPERATURE = 0.7
SUMMARY_ASSETS = [
    'Bonds',
    'Gold',
    'Nasdaq',
    'US large-cap value stocks',
    'Bitcoin',
    'Seoul real estate'
]
PREDICTION_ASSETS = ['Gold', 'Bonds', 'Stocks', 'RealEstate', 'Crypto']
INVESTMENT_PERIODS = ['1y', '3y', '5y', '10y']
MAX_LOSS_RATES = ['5%', '10%', '20%']

# Chart configuration
CHART_CONFIG = {
    'dpi': 150,
    'format': 'png',
    'bbox_inches': 'tight',
    'default_figsize': (12, 5)
}

ASSET_COLORS = {
    'US Rate': '#0EA5E9',
    'KR Rate': '#14B8A6',
    'Real Estate': '#F97316',
    'S&P 500': '#10B981',
    'Kospi': '#6366F1',
    'Bitcoin': '#EF4444',
    'Treasury 10Y': '#3B82F6',
    'USD/KRW': '#8B5CF6',
    'Gold': '#FFD700',
}
