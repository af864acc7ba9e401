"""Internal constants shared across the library."""

BASE_URL = "https://api.switch-bot.com/v1.0/devices"
USER_AGENT = "pysensorsync/aiohttp"

#: Default polling interval in seconds.
DEFAULT_REFRESH_RATE: float = 300.0

#: How long a local radio scan listens for advertisements, in seconds.
DEFAULT_SCAN_WINDOW: float = 10.0

DEFAULT_REQUEST_TIMEOUT: float = 15.0

# ------------------------------------------------------------------
# Radio advertisement model tags (scan filters)
# ------------------------------------------------------------------

RADIO_MODEL_CONTACT = "d"
RADIO_MODEL_METER = "e"

# ------------------------------------------------------------------
# Ambient light bands
# ------------------------------------------------------------------

# The radio payload only carries a dark/light bit, so it maps onto two
# fixed lux values.
LIGHT_LEVEL_DARK: float = 0.0001
LIGHT_LEVEL_BRIGHT: float = 100000.0

# ------------------------------------------------------------------
# Battery
# ------------------------------------------------------------------

# The cloud status document carries no battery reading. A present body
# is reported as full, a missing one as nearly empty.
REMOTE_BATTERY_WITH_BODY = 100
REMOTE_BATTERY_WITHOUT_BODY = 10

REMOTE_LOW_BATTERY_THRESHOLD = 15
CONTACT_RADIO_LOW_BATTERY_THRESHOLD = 10
METER_RADIO_LOW_BATTERY_THRESHOLD = 15
