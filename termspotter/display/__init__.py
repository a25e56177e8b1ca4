"""Display subsystem - recency cooldowns, timers and single-definition display."""
from termspotter.display.TimerRegistry import TimerRegistry
from termspotter.display.RecencyFilter import RecencyFilter
from termspotter.display.DisplayCoordinator import DisplayCoordinator
from termspotter.display.SurfacedTermPublisher import SurfacedTermPublisher
from termspotter.display.SurfacedTermHistory import SurfacedTermHistory

__all__ = ['TimerRegistry', 'RecencyFilter', 'DisplayCoordinator', 'SurfacedTermPublisher', 'SurfacedTermHistory']
