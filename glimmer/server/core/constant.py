"""Server-wide constants."""

PROJECT_NAME = "Glimmer"
API_V1_STR = "/api/v1"
WEBSOCKET_PATH = "/ws"
API_VERSION = "1.0.0"

# Header carrying the acting user's id
USER_ID_HEADER = "X-User-Id"
