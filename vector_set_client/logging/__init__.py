"""
Unified logging package: format with importance (0-10) for library and CLI output.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from vector_set_client.logging.unified_logging import (
    LEVEL_TO_IMPORTANCE,
    PACKAGE_LOGGER,
    UNIFIED_DATE_FMT,
    UNIFIED_FORMAT_STR,
    UnifiedFormatter,
    create_unified_formatter,
    importance_from_level,
    setup_logging,
)

__all__ = [
    "LEVEL_TO_IMPORTANCE",
    "PACKAGE_LOGGER",
    "UNIFIED_DATE_FMT",
    "UNIFIED_FORMAT_STR",
    "UnifiedFormatter",
    "create_unified_formatter",
    "importance_from_level",
    "setup_logging",
]
