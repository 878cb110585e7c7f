from backend.engine.gamestate.session import Session
from backend.engine.gamestate.ticker import RepeatingTicker, Ticker

__all__ = ["RepeatingTicker", "Session", "Ticker"]
