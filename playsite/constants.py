from __future__ import annotations

import logging

LOGGER = logging.getLogger("playsite")
APP_VERSION = "0.1.0"
SITE_NAME = "React Router Playground"
