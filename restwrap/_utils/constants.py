# Environment variables
ENV_DEBUG = "RESTWRAP_DEBUG"
ENV_USER_AGENT = "RESTWRAP_USER_AGENT"

# Headers
HEADER_USER_AGENT = "User-Agent"

# Logging
LOGGER_NAME = "restwrap"
