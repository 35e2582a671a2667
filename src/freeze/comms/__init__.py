"""In-process messaging between the simulation and its hosts."""
from .event_bus import EventBus

__all__ = ["EventBus"]
