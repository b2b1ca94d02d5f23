"""boardctl — position-ordered project boards (workspaces → boards → lists → cards)."""

__version__ = "0.1.0"
