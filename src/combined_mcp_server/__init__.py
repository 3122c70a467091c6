"""Combined MCP Server package.

An MCP server pairing Google Custom Search with Wikipedia lookups. This
package holds its configuration layer: environment variables (and an
optional ``.env`` file) are validated once at startup into an immutable
`AppConfig` that is passed to every consumer.

Usage example:
    from combined_mcp_server.server import main
    if __name__ == "__main__":
        raise SystemExit(main())
"""

__all__ = [
    "__version__",
]

__version__ = "1.0.0"
