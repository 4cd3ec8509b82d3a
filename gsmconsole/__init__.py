"""Command-line manager for dedicated game servers: install, start, control, update, back up and remove them."""

__version__ = "0.1.0"