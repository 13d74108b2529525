"""strei: a tray media player's settings layer.

The tray GUI itself lives elsewhere; this package holds the durable
configuration store it drives, plus the small amount of process wiring
(home directory, logging, CLI) needed to use the store on its own.
"""

__version__ = "0.3.0"
