"""USPS Web Tools exposed as MCP tools.

Address validation, ZIP and city/state lookup, package tracking and
domestic rate calculation, served over stdio by FastMCP.
"""

__version__ = "1.0.0"
