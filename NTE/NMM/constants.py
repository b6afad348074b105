# =============================================================================
# constants.py — NMM Telemetry Constants and Channel Naming
# =============================================================================
#
# Values mirror what the multi-device capture program writes.  DO NOT change
# the device or slice counts without changing the capture program as well:
# the browser lays out exactly MAX_DEVICES brain tiles of NUM_SLICES slices.

# -----------------------------------------------------------------------------
# CAPTURE LAYOUT
# -----------------------------------------------------------------------------

MAX_DEVICES         = 12        # device indices 0..11
MIN_DEVICE_INDEX    = 0
MAX_DEVICE_INDEX    = MAX_DEVICES - 1
NUM_SLICES          = 5         # fixed temporal buckets per channel
CHANNELS_PER_DEVICE = 32        # A0..A15 + B0..B15 on the capture side
BANK_SIZE           = CHANNELS_PER_DEVICE // 2
DEFAULT_SCAN_INTERVAL_MS = 100  # one scan = NUM_SLICES slices of 20 ms


# -----------------------------------------------------------------------------
# TIME-SLICED FILE SCHEMES  (time_sliced_data.txt)
# -----------------------------------------------------------------------------
#
#   basic : device, channel, a0..a4, frequency, phase
#   rich  : device, channel, a0..a4, frequency, p0..p4
#
# Field positions are 0-based.

SCHEME_BASIC = "basic"
SCHEME_RICH  = "rich"
SCHEMES      = (SCHEME_BASIC, SCHEME_RICH)

BASIC_MIN_FIELDS = 9
RICH_MIN_FIELDS  = 12

FIELD_DEVICE     = 0
FIELD_CHANNEL    = 1
FIELD_ACTIVITY   = 2                         # a0 .. a4 = fields 2..6
FIELD_FREQUENCY  = FIELD_ACTIVITY + NUM_SLICES   # = 7
FIELD_PHASE      = FIELD_FREQUENCY + 1           # = 8 (basic: one, rich: p0..)

COMMENT_PREFIX = "#"


# -----------------------------------------------------------------------------
# SYNCHRONIZATION LABELS  (brain-pair view)
# -----------------------------------------------------------------------------
# |avg(first) - avg(second)| <  SYNC_HIGH_MAX_DIFF   -> "High"
# |avg(first) - avg(second)| <  SYNC_MEDIUM_MAX_DIFF -> "Medium"
# otherwise                                          -> "Low"

SYNC_HIGH_MAX_DIFF   = 0.1
SYNC_MEDIUM_MAX_DIFF = 0.3
SYNC_HIGH   = "High"
SYNC_MEDIUM = "Medium"
SYNC_LOW    = "Low"


# -----------------------------------------------------------------------------
# SPHERE SCENE  (activity levels are percentages, 0..100)
# -----------------------------------------------------------------------------

MARKER_COUNT       = 64
SPHERE_RADIUS      = 5.0
LABEL_OFFSET       = 1.2        # labels sit at 1.2 x the marker position
POLL_INTERVAL_MS   = 500

COLOR_HIGH     = 0xff0000       # >= 75  red
COLOR_MEDIUM   = 0xffff00       # >= 50  yellow
COLOR_LOW      = 0x00ff00       # >= 25  green
COLOR_VERY_LOW = 0x00ffff       # <  25  cyan
COLOR_INACTIVE = 0x444444
COLOR_IDLE     = 0x888888       # marker before the first update
COLOR_LINE     = 0xffffff

LEVEL_HIGH     = 75
LEVEL_MEDIUM   = 50
LEVEL_LOW      = 25
CONNECTION_MIN_LEVEL = LEVEL_MEDIUM

INACTIVE_SCALE = 0.7


# -----------------------------------------------------------------------------
# DATA FILES
# -----------------------------------------------------------------------------

TIME_SLICED_FILE = "time_sliced_data.txt"
LOGIC_DATA_FILE  = "logic_data.txt"
PHASE_DATA_FILE  = "phase_data.txt"
CONFIG_FILE      = "analyzer_config.json"


# -----------------------------------------------------------------------------
# CHANNEL NAMING
# -----------------------------------------------------------------------------

def channel_name(channel_id: int) -> str:
    """
    Display name of a channel.  Banks alternate every BANK_SIZE ids:
    0..15 -> A0..A15, 16..31 -> B0..B15, 32..47 -> A16..A31,
    48..63 -> B16..B31.  One scheme for the telemetry channels and the
    sphere markers, so channel 16 always lights marker "B0".
    """
    block, offset = divmod(channel_id, BANK_SIZE)
    bank = "AB"[block % 2]
    return f"{bank}{offset + BANK_SIZE * (block // 2)}"
