"""
Application configuration and constants.
"""

import os
from typing import List

from dotenv import load_dotenv

# Load environment variables from a local .env, if any
load_dotenv()

# API configuration
API_VERSION = "1.0.0"
API_TITLE = "FIRE Calculator API"
API_DESCRIPTION = "Deterministic year-by-year retirement projection with financial-independence detection"

# CORS configuration
CORS_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]
# Browsers reject credentialed requests against a wildcard origin
CORS_CREDENTIALS = "*" not in CORS_ORIGINS
CORS_METHODS = ["*"]
CORS_HEADERS = ["*"]

# Simulation defaults
DEFAULT_LIFE_EXPECTANCY = 100
MONTHS_PER_YEAR = 12

# Display settings
CURRENCY_SYMBOL = "$"
DEFAULT_PERCENT_DECIMALS = 1
NEVER_LABEL = "Never"
INFINITY_LABEL = "∞"

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
