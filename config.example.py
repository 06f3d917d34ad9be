"""
Example configuration file for the MCPEDL client
Copy this file to config.py and adjust the values
(or generate it with: python3 utils/config_generator.py)
"""

# === Client Configuration ===
MCPEDL_BASE_URL = 'https://mcpedl.org'
MCPEDL_TIMEOUT = 10.0  # Seconds per request
MCPEDL_USER_AGENT = 'Mozilla/5.0 (compatible; McpedlAPI/2.0; +https://github.com/terastudio-org/mcpedl)'

# === Retry Configuration ===
MCPEDL_MAX_RETRIES = 3  # Retries after the first attempt (429, 5xx, timeouts, connection errors)
MCPEDL_RETRY_DELAY = 1.0  # Base backoff in seconds; doubles per retry, capped at 4x

# === Rate Limit Configuration ===
MCPEDL_RATE_LIMIT_MIN_TIME = 1.0  # Minimum seconds between request starts
MCPEDL_RATE_LIMIT_MAX_CONCURRENT = 2  # Maximum requests in flight

# === Logging Configuration ===
LOG_LEVEL = 'INFO'  # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_FILE = 'logs/mcpedl.log'
