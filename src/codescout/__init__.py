"""codescout - heuristic code structure extraction and search."""

try:
    from importlib.metadata import version

    __version__ = version("codescout")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
