"""DOM contract shared by the LiveView E2E helpers.

Values match what phoenix_live_view renders on the client
(loading markers, stream containers, `phx:` window events).
"""

# Loading markers
LOADING_ATTR = "phx-loading"
LOADING_CLASS = "phx-loading"

# Custom events are dispatched on window as "<prefix>:<name>"
EVENT_PREFIX = "phx"

# Page-global socket handle
SOCKET_GLOBAL = "liveSocket"

# Flash banners
BANNER_SEVERITIES = ("info", "error", "success", "warning")
BANNER_SELECTOR = (
    '[role="alert"], .alert, .flash-{severity}, [data-test="flash-{severity}"]'
)

# Stream containers
COLLECTION_SELECTOR = '#{container_id}[phx-update="stream"]'

# Timeouts (seconds)
SETTLE_TIMEOUT = 5.0
CONNECT_TIMEOUT = 5.0
EVENT_TIMEOUT = 5.0
EVENT_FALLBACK = 0.1
NETWORK_IDLE_WINDOW = 0.5
VALIDATION_DELAY = 0.5
BANNER_TIMEOUT = 3.0
BANNER_TEXT_TIMEOUT = 2.0
COLLECTION_ATTACH_TIMEOUT = 3.0
COLLECTION_COUNT_TIMEOUT = 5.0

# Polling
DEFAULT_POLL_INTERVAL = 0.025
MAX_POLL_INTERVAL = 0.05
