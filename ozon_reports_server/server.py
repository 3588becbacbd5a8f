"""MCP server for Ozon Seller reports — tool, resource, and prompt registration."""

from __future__ import annotations

from fastmcp import FastMCP

from .resources import (
    auth as auth_tools,
    reports,
    finance,
    templates,
    prompts,
)
from .utils.logging import setup_logging

setup_logging()


def create_mcp_server(auth=None):
    """Create and configure the FastMCP server with all tools, resources, and prompts.

    Args:
        auth: Optional auth provider (e.g., ScalekitProvider) for OAuth
    """
    mcp = FastMCP("mcp-ozon-reports", auth=auth)

    # -- Tools: auth --------------------------------------------------------
    mcp.tool()(auth_tools.ozon_status)

    # -- Tools: reports -----------------------------------------------------
    mcp.tool()(reports.ozon_reports)
    mcp.tool()(reports.ozon_get_report)
    mcp.tool()(reports.ozon_create_products_report)
    mcp.tool()(reports.ozon_create_stocks_report)
    mcp.tool()(reports.ozon_create_products_movement_report)
    mcp.tool()(reports.ozon_create_returns_report)
    mcp.tool()(reports.ozon_create_shipment_report)

    # -- Tools: finance -----------------------------------------------------
    mcp.tool()(finance.ozon_cash_flow_statement)

    # -- Resources ----------------------------------------------------------
    mcp.resource("ozon://templates/products_report")(templates.resource_products_report_template)
    mcp.resource("ozon://templates/returns_report")(templates.resource_returns_report_template)
    mcp.resource("ozon://templates/shipment_report")(templates.resource_shipment_report_template)
    mcp.resource("ozon://reports/{code}")(templates.resource_report_by_code)

    # -- Prompts ------------------------------------------------------------
    mcp.prompt()(prompts.request_report)
    mcp.prompt()(prompts.cash_flow_summary)

    return mcp


# Default server instance for stdio transport
server = create_mcp_server()
