# gemini_relay/observability/logging.py
from __future__ import annotations

import logging

from gemini_relay.observability.context import request_id_ctx, session_id_ctx


class ContextFilter(logging.Filter):
    """Injects request/session ids into every LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        record.session_id = session_id_ctx.get() or "-"
        return True
