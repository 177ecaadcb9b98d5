"""Headless node-graph models: graphs, ports, connections, calculator and sample nodes."""

__version__ = "0.1.0"