"""
Pane Monitor - time accounting and attention alerts for AI agent panes.
"""

__version__ = "0.1.0"
