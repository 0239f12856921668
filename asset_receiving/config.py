# asset_receiving/config.py

import os
import logging

# --- Local Storage Configuration ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) # project root
DATA_DIR = os.environ.get("ASSET_RECEIVING_DATA_DIR", os.path.join(BASE_DIR, "data"))
DB_NAME = "asset_receiving_session.db"
DATABASE_PATH = os.path.join(DATA_DIR, DB_NAME)

# Create data directory if it doesn't exist
if not os.path.exists(DATA_DIR):
    os.makedirs(DATA_DIR)

# --- Backend API ---
# Change this (or set ASSET_RECEIVING_API_URL) when deploying against another backend
API_BASE_URL = os.environ.get("ASSET_RECEIVING_API_URL", "https://opex.bemsol.com/backend/public/api")
LOGIN_ENDPOINT = "/auth/login"

# --- Logging Configuration ---
LOGS_DIR = os.environ.get("ASSET_RECEIVING_LOGS_DIR", os.path.join(BASE_DIR, "logs"))
LOG_FILE_PATH = os.path.join(LOGS_DIR, "asset_receiving.log")
os.makedirs(LOGS_DIR, exist_ok=True)

LOG_LEVEL = logging.DEBUG  # logging.INFO / logging.WARNING in production
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s.%(funcName)s:%(lineno)d - %(message)s'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'detailed': {'format': LOG_FORMAT, 'datefmt': '%Y-%m-%d %H:%M:%S'},
    },
    'handlers': {
        'stderr': {'class': 'logging.StreamHandler', 'formatter': 'detailed', 'level': LOG_LEVEL},
        'logfile': {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'detailed',
            'filename': LOG_FILE_PATH,
            'maxBytes': 2 * 1024 * 1024,
            'backupCount': 3,
            'level': logging.INFO,
            'encoding': 'utf-8',
        },
    },
    # requests logs every connection at DEBUG
    'loggers': {'urllib3': {'level': logging.WARNING}},
    'root': {'handlers': ['stderr', 'logfile'], 'level': LOG_LEVEL},
}

# --- Receipt list settings ---
DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS = (5, 10, 20, 50)

# "gregorian" or "shamsi"; only affects how dates are displayed in tables
DISPLAY_CALENDAR = os.environ.get("ASSET_RECEIVING_CALENDAR", "gregorian").lower()
