from __future__ import annotations

import logging

LOGGER = logging.getLogger("playsite.auth")

DEFAULT_EXCHANGE_TIMEOUT_SECONDS = 10.0
