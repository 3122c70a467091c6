import sys

from combined_mcp_server.server import main

if __name__ == "__main__":
    sys.exit(main())
