"""
ECM MCP CLI — Command-line interface for the ECM MCP gateway

Commands:
    ecm-mcp init        Create ~/.ecm-mcp/ and generate config
    ecm-mcp server      Start the MCP server (stdio or http)
    ecm-mcp tools       List registered tools
    ecm-mcp mcp-config  Print Claude Desktop/Code JSON config
"""

import asyncio
import json
import shutil
import sys

import click

from ecm_mcp import __version__
from ecm_mcp.config import Config


@click.group()
@click.version_option(version=__version__, prog_name="ecm-mcp")
def main():
    """ECM MCP Server — Enterprise Content Management tools via MCP."""
    pass


@main.command()
def init():
    """Create ~/.ecm-mcp/, generate config, print setup instructions."""
    Config.ensure_dirs()

    config_env = Config.DATA_DIR / "config.env"
    if not config_env.exists():
        config_env.write_text(
            "# ECM MCP Configuration\n"
            "# Uncomment and edit as needed.\n"
            "\n"
            "# ECM_API_BASE_URL=http://localhost:8081/api\n"
            "# ECM_API_KEY=\n"
            "# ECM_API_USERNAME=\n"
            "# ECM_API_PASSWORD=\n"
            "# ECM_API_CONNECT_TIMEOUT=10\n"
            "# ECM_API_READ_TIMEOUT=30\n"
            "# ECM_API_MAX_RETRIES=3\n"
            "# ECM_MCP_TRANSPORT=stdio\n"
            "# ECM_MCP_LOG_LEVEL=INFO\n"
        )

    click.echo(f"ECM MCP initialized at {Config.DATA_DIR}")
    click.echo(f"  Config: {config_env}")
    click.echo(f"  Logs:   {Config.LOG_DIR}")
    click.echo()
    click.echo("Next: set ECM_API_BASE_URL and credentials in the config file.")
    click.echo("Run `ecm-mcp mcp-config` to get the JSON snippet for your MCP client.")


@main.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default=None,
    help="Transport to serve on (default: ECM_MCP_TRANSPORT or stdio).",
)
@click.option("--host", default=None, help="HTTP bind host.")
@click.option("--port", type=int, default=None, help="HTTP bind port.")
def server(transport, host, port):
    """Start the ECM MCP server."""
    transport = transport or Config.TRANSPORT

    if transport == "http":
        import uvicorn
        from ecm_mcp.server.http import create_app

        uvicorn.run(
            create_app(),
            host=host or Config.HTTP_HOST,
            port=port or Config.HTTP_PORT,
            log_level="warning",
        )
        return

    from ecm_mcp.server.server import StdioMCPServer

    async def _run():
        srv = StdioMCPServer()
        await srv.run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@main.command()
@click.option("--tag", default=None, help="Only show tools carrying this tag.")
@click.option("--json", "as_json", is_flag=True, help="Print descriptors as JSON.")
def tools(tag, as_json):
    """List the tools this server registers."""
    from ecm_mcp.client import EcmApiClient
    from ecm_mcp.tools import build_registry

    async def _collect():
        async with EcmApiClient.from_config() as client:
            registry = build_registry(client)
            found = registry.by_tag(tag) if tag else registry.all()
            return [t.descriptor() for t in sorted(found, key=lambda t: t.name)]

    descriptors = asyncio.run(_collect())

    if as_json:
        click.echo(json.dumps(descriptors, indent=2))
        return

    if not descriptors:
        click.echo(f"No tools tagged '{tag}'." if tag else "No tools registered.")
        return

    click.echo(f"Tools ({len(descriptors)})")
    click.echo("=" * 40)
    for d in descriptors:
        required = d["inputSchema"].get("required", [])
        click.echo(f"{d['name']}  [{', '.join(d['tags'])}]")
        click.echo(f"    {d['description']}")
        if required:
            click.echo(f"    required: {', '.join(required)}")


@main.command("mcp-config")
def mcp_config():
    """Print MCP config JSON for Claude Desktop or Claude Code."""
    path = _find_executable()
    args = ["server"] if path != sys.executable else ["-m", "ecm_mcp", "server"]

    config = {
        "mcpServers": {
            "ecm": {
                "command": path,
                "args": args,
                "env": {"ECM_API_BASE_URL": Config.ECM_BASE_URL},
            }
        }
    }

    click.echo("Add this to your MCP client settings:\n")
    click.echo(json.dumps(config, indent=2))


def _find_executable() -> str:
    """Find the ecm-mcp command path."""
    path = shutil.which("ecm-mcp")
    if path:
        return path
    # Fallback: use python -m ecm_mcp
    return sys.executable


if __name__ == "__main__":
    main()
