DEFAULT_API_CALL_TIMEOUT = 30
DEFAULT_LANGUAGE = "en"
DEFAULT_GROUP_NAME = "Default"
FEATURE_FILE_PATTERN = "*.feature"
# Trimming description lines only applies up to this compatibility level
TRIM_LINE_START_MAX_COMPAT_LEVEL = 2
