__version__ = "0.1.0"  # Single source; pyproject.toml reads it at build time
