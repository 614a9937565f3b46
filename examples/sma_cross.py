"""Moving average crossover on the M5 chart, filtered by the H1 trend.

Parameters (set as globals by the walk-forward runner):
    min_gap       minimum fast/slow SMA distance, in pips, before entering
    allow_shorts  whether short entries are taken
    trend_filter  require the H1 SMA to agree with the entry direction
"""

min_gap = 1.0
allow_shorts = True
trend_filter = False

FAST = "candlestick_M5_sma_10"
SLOW = "candlestick_M5_sma_40"
TREND = "candlestick_H1_sma_12"

_previous = None


def setup(parameters):
    global _previous
    _previous = None


def on_tick(view, tick):
    global _previous
    fast = view.indicators.get(FAST)
    slow = view.indicators.get(SLOW)
    if fast is None or slow is None:
        return "noop"

    gap = (fast - slow) * 10000
    side = "long" if gap > 0 else "short"
    crossed = _previous is not None and _previous != side
    _previous = side

    if not crossed:
        return "noop"
    if view.has_open_trades:
        return "close"
    if abs(gap) < min_gap:
        return "noop"
    if side == "short" and not allow_shorts:
        return "noop"

    trend = view.indicators.get(TREND)
    if trend_filter and trend is not None:
        if side == "long" and tick.bid < trend:
            return "noop"
        if side == "short" and tick.bid > trend:
            return "noop"
    return side
