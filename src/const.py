"""Constants for the Notas AI template cache service."""

# Default configuration values
DEFAULT_APP_NAME = "Notas AI"
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 8000
DEFAULT_STORAGE_TYPE = "memory"

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "uvicorn": "WARNING",
    "uvicorn.access": "WARNING",
    "fastapi": "WARNING",
    "sqlalchemy.engine": "WARNING",
}

# Template limits
MAX_TEMPLATE_NAME_LENGTH = 100
MAX_TEMPLATE_CONTENT_LENGTH = 50000
