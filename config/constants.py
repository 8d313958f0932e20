"""System constants and default values."""

# Feed endpoints
DEFAULT_MARKET_FEED_URL = (
    "https://raw.githubusercontent.com/digital-era/AIEPMarketData/main/data/AIEPMarketData11.json"
)
DEFAULT_INVESTMENT_FEED_URL = (
    "https://raw.githubusercontent.com/digital-era/AIPEMarketData/main/data/AIEPMarketData.json"
)
DEFAULT_FETCH_TIMEOUT_SECONDS = 10

# Streamlit cache TTL for loaded feeds
DEFAULT_CACHE_TTL_SECONDS = 300

# Market timing constants (local exchange time)
MARKET_OPEN_HOUR = 9
MARKET_CLOSE_HOUR = 15
DEFAULT_TIMEZONE_NAME = "Asia/Shanghai"

# Currency per view
MARKET_VIEW_CURRENCY = "CNY"
INVESTMENT_VIEW_CURRENCY = "USD"

# Dashboard views
VIEW_MARKET = "market"
VIEW_AIPE = "aipe"
VIEW_PORTFOLIO = "portfolio"
VIEW_MODERN = "modern"
DEFAULT_VIEW = VIEW_MARKET

# Display limits for the dynamic sheet view
MAX_SHEET_TABS = 4
MAX_CHART_ROWS = 20
MAX_CHART_SERIES = 5
MAX_TABLE_ROWS = 50

# Date range codes for time-series windows
DATE_RANGES = ["1W", "1M", "3M", "6M", "1Y", "YTD"]
DEFAULT_DATE_RANGE = "1M"

RISK_LEVELS = ["Low", "Medium", "High"]

# Logging configuration
LOG_FILE = "dashboard.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Version information
VERSION = "1.0.0"
