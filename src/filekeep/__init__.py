"""filekeep: read-only web file browser with per-file password protection."""

__version__ = "0.4.0"
