"""
Helper methods for the vector set client.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from __future__ import annotations

import logging

from ..exceptions import VectorClientError
from .dispatcher import RawCommandDispatcher
from .protocol import CommandFrame, Reply

logger = logging.getLogger(__name__)


class _ClientHelpersMixin:
    """Mixin dispatching encoded frames and logging each call."""

    dispatcher: RawCommandDispatcher

    def _execute(self, frame: CommandFrame) -> Reply:
        """Dispatch a frame, logging the call and any failure.

        Args:
            frame: Encoded command frame

        Returns:
            Reply for the frame

        Raises:
            VectorClientError: Any dispatch, pool, remote or decode failure
        """
        logger.debug(
            "vset call command=%s key=%s tokens=%d", frame.command, frame.key, len(frame)
        )
        try:
            return self.dispatcher.execute(frame)
        except VectorClientError as e:
            logger.warning(
                "vset call command=%s key=%s failed: %s", frame.command, frame.key, e
            )
            raise
