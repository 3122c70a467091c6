"""MCP tools exposed by the server.

Each tool is a plain Python function taking the `AppConfig` explicitly,
which keeps it testable without the runtime. `server.py` registers them
with FastMCP. The tool functions return Pydantic models.
"""

from .status import available_services, server_status

__all__ = [
    "available_services",
    "server_status",
]
