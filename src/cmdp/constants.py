"""Application-level constants for cmdp."""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "cmdp"

# ============================================================================
# Environment configuration
# ============================================================================

# When set to a non-empty value, callback failures also print a traceback.
DEBUG_ENV_VAR = "CMDP_DEBUG"

# ============================================================================
# Threads
# ============================================================================

READER_THREAD_NAME = f"{APP_NAME}-line-reader"
DISPATCH_THREAD_NAME = f"{APP_NAME}-dispatch"

# ============================================================================
# Logging
# ============================================================================

LOG_FILE_EXTENSION = ".log"
DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"

# ============================================================================
# Diagnostics
# ============================================================================

DIAGNOSTIC_PREFIX = "ERROR: "
LINE_ENCODING = "utf-8"
