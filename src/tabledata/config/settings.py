"""Global configuration and constants for the table data pipeline."""

from __future__ import annotations

import os
from typing import Final

# Name under which the generic matcher is registered in the service locator
DEFAULT_FILTER_NAME: Final = os.environ.get("TABLEDATA_FILTER_NAME", "filter")

DEFAULT_PAGE: Final = 1
DEFAULT_COUNT: Final = int(os.environ.get("TABLEDATA_PAGE_SIZE", "10"))

LOG_LEVEL: Final = os.environ.get("TABLEDATA_LOG_LEVEL", "WARNING")
