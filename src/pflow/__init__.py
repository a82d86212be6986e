"""pflow — declarative Petri-net models evaluated as guarded state machines."""

__version__ = "0.1.0"
