"""Protocol constants for the datagram wire format.

These are protocol-level constants that should not be changed
without updating both transmitting and receiving nodes.
"""

# Wire format keys (case-sensitive)
KEY_TIME = "Time"
KEY_MESSAGE = "Msg"
KEY_CHECKSUM = "CRC"
KEY_JOIN_THREAD = "Join_thr"

# Compact JSON, no whitespace between tokens
JSON_SEPARATORS = (",", ":")

# Text encoding of the frame and of the checksummed payload
WIRE_ENCODING = "utf-8"

# Only the low 8 bits of the checksum are meaningful
CHECKSUM_MASK = 0xFF

# Node defaults
DEFAULT_MAX_MESSAGE_SIZE = 1024
DEFAULT_MAX_QUEUE_SIZE = 100

# Seconds a blocked receive waits before re-checking the stop request
RECEIVE_POLL_INTERVAL = 0.5

# Seconds stop_receiving waits for the receive thread to finish
JOIN_TIMEOUT = 5.0

# Payload of the self-addressed datagram that wakes the receive thread
WAKEUP_MESSAGE = "Goodbye"
