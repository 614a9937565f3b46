"""Run audit outputs."""

from walkforward.monitoring.audit import AuditLog
from walkforward.monitoring.trade_log import TICK_HEADER, TRADE_HEADER, TradeLog

__all__ = [
    "AuditLog",
    "TICK_HEADER",
    "TRADE_HEADER",
    "TradeLog",
]
