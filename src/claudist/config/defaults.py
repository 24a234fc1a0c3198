"""Default configuration values for claudist.

This module centralizes all hard-coded default values used throughout
the application, making them easy to discover and modify.
"""

# Filtering
DEFAULT_FILTER_PRESET = "heavy"
SUB_AGENT_TOOL_NAME = "Task"
TRUNCATION_MARKER = "...[truncated]"
INTERRUPTED_MARKER = "[Request interrupted"

# Token estimates used by the statistics collector
THINKING_TOKEN_ESTIMATE = 100
SUB_AGENT_CALL_TOKEN_ESTIMATE = 150
SUB_AGENT_RESPONSE_TOKEN_FALLBACK = 5000
TOOL_TOKEN_ESTIMATE = 200
FAILED_TOOL_TOKEN_ESTIMATE = 50

# Transcript storage
TRANSCRIPT_SUFFIX = ".jsonl"
DEFAULT_MAX_FILE_SIZE_BYTES = 100 * 1024 * 1024

# Cache
DEFAULT_CACHE_MAX_SIZE = 100
DEFAULT_CACHE_TTL_SECONDS = 3600

# Timing
SLOW_OPERATION_THRESHOLD_MS = 100
