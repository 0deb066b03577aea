"""
Constants for the Shyft SDK.
"""

# Base URL for the Shyft REST API (v1, Solana)
BASE_URL = "https://api.shyft.to/sol/v1/"

# Header carrying the API key on every request
API_KEY_HEADER = "x-api-key"

# Retry defaults, in seconds
MIN_RETRY_INTERVAL = 0.5
MAX_RETRY_INTERVAL = 1.0
MAX_RETRIES = 3

# Per-attempt request timeout, in seconds
REQUEST_TIMEOUT = 10.0

# Request timeout, too many requests
RETRYABLE_CLIENT_STATUS_CODES = frozenset({408, 429})

# Endpoint paths, relative to BASE_URL
TRANSACTION_HISTORY_PATH = "transaction/history"
TRANSACTION_PARSED_PATH = "transaction/parsed"
TRANSACTION_PARSE_SELECTED_PATH = "transaction/parse_selected"

# Environment variables read by ClientConfig.from_env
ENV_API_KEY = "SHYFT_API_KEY"
ENV_NETWORK = "SHYFT_NETWORK"
ENV_COMMITMENT = "SHYFT_COMMITMENT"
ENV_BASE_URL = "SHYFT_BASE_URL"
