"""chainfeed - wallet transaction stream from Bitcoin-style node notifications."""

__version__ = "0.1.0"
