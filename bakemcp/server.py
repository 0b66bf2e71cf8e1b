"""Generated MCP entry point; tools are registered here by the generator."""

from mcp.server.fastmcp import FastMCP

from bakemcp.core.config import get_settings

mcp = FastMCP(get_settings().server_name)

# Tools are registered here by `bakemcp generate`.
#
# Example tool registration:
#
# @mcp.tool(
#     name="ping",
#     description="Calls GET /ping on the API and returns the response (expected: 'pong')",
#     annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
# )
# async def ping() -> str:
#     async with httpx.AsyncClient() as client:
#         response = await client.get(f"{BASE_URL}/ping")
#     if not response.is_success:
#         raise RuntimeError(
#             f"API responded with status {response.status_code}: {response.reason_phrase}"
#         )
#     return response.text


def main() -> None:
    mcp.run(transport="stdio")


__all__ = ["mcp"]
