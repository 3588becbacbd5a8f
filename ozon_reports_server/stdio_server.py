"""Stdio transport server for local MCP clients such as Claude Desktop.

Usage:
    python -m ozon_reports_server.stdio_server

Environment Variables (required):
    OZON_CLIENT_ID - Ozon Seller client identifier
    OZON_API_KEY - Ozon Seller API key

Environment Variables (optional):
    MCP_LOG_LEVEL - Logging level (default: INFO)
    MCP_LOG_FILE - Log file path with rotation
    OZON_BASE_URL - API base URL (defaults to https://api-seller.ozon.ru/)
"""

from .server import server


def main():
    """Run the MCP server using stdio transport.

    No OAuth is involved; requests are authorized with the Ozon
    credentials from the environment.
    """
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
