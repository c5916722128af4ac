"""sesh: smart tmux session manager for coding agents."""

__version__ = "0.4.0"
