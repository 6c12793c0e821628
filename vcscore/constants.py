"""Constants shared by the execution layer and the output parsers."""

# Exit codes assigned when the process did not report one of its own
EXIT_INDETERMINATE = -1
EXIT_CANCELLED = -2
EXIT_TIMED_OUT = -3

# Runner timing (seconds)
POLL_INTERVAL = 1.0
KILL_GRACE_PERIOD = 5.0
DRAIN_JOIN_TIMEOUT = 2.0
READ_CHUNK_SIZE = 4096

# Log record format: records end with RS, fields are separated by NUL
RECORD_SEPARATOR = "\x1e"
FIELD_SEPARATOR = "\x00"
LOG_PRETTY_FORMAT = (
    "%H%x00%h%x00%s%x00%an%x00%ae%x00%at%x00%P%x00%cn%x00%ce%x00%ct%x1e"
)
MIN_COMMIT_FIELDS = 7
SHORT_HASH_LENGTH = 7

DEV_NULL = "/dev/null"
NO_NEWLINE_MARKER = "\\ No newline at end of file"

SETTINGS_KEY = "vcs/git.json"
DEFAULT_AUTO_REFRESH_INTERVAL = 5.0
UNKNOWN_BRANCH = "(unknown)"
DETACHED_BRANCH = "(detached)"
