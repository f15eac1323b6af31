"""
ECM MCP Configuration — Unified settings for the gateway

Load order: env vars > ~/.ecm-mcp/config.env > defaults
"""

import os
from pathlib import Path

from ecm_mcp import __version__

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _load_config_env():
    """Load key=value pairs from ~/.ecm-mcp/config.env if it exists."""
    data_dir = Path(os.environ.get("ECM_MCP_DATA_DIR", str(Path.home() / ".ecm-mcp")))
    config_file = data_dir / "config.env"
    if not config_file.exists():
        return
    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


# Load config.env before reading env vars
_load_config_env()


class Config:
    # Server identity
    SERVER_NAME = "ecm-mcp-server"
    SERVER_VERSION = __version__
    PROTOCOL_VERSION = os.environ.get("ECM_MCP_PROTOCOL_VERSION", "2024-11-05")

    # Advertised capabilities
    CAPABILITY_TOOLS = env_bool("ECM_MCP_CAP_TOOLS", True)
    CAPABILITY_PROMPTS = env_bool("ECM_MCP_CAP_PROMPTS", False)
    CAPABILITY_RESOURCES = env_bool("ECM_MCP_CAP_RESOURCES", False)

    # Transport
    TRANSPORT = os.environ.get("ECM_MCP_TRANSPORT", "stdio")
    HTTP_HOST = os.environ.get("ECM_MCP_HOST", "127.0.0.1")
    HTTP_PORT = int(os.environ.get("ECM_MCP_PORT", "8080"))

    # ECM REST API
    ECM_BASE_URL = os.environ.get("ECM_API_BASE_URL", "http://localhost:8081/api")
    ECM_USERNAME = os.environ.get("ECM_API_USERNAME", "")
    ECM_PASSWORD = os.environ.get("ECM_API_PASSWORD", "")
    ECM_API_KEY = os.environ.get("ECM_API_KEY", "")
    ECM_CONNECT_TIMEOUT = float(os.environ.get("ECM_API_CONNECT_TIMEOUT", "10"))
    ECM_READ_TIMEOUT = float(os.environ.get("ECM_API_READ_TIMEOUT", "30"))
    ECM_MAX_RETRIES = int(os.environ.get("ECM_API_MAX_RETRIES", "3"))
    ECM_RETRY_BACKOFF = float(os.environ.get("ECM_API_RETRY_BACKOFF", "1.0"))

    # Paths
    DATA_DIR = Path(os.environ.get("ECM_MCP_DATA_DIR", str(Path.home() / ".ecm-mcp")))
    LOG_DIR = DATA_DIR / "logs"

    # Logging (NEVER to stdout: it carries the stdio JSON-RPC stream)
    LOG_LEVEL = os.environ.get("ECM_MCP_LOG_LEVEL", "INFO").upper()
    LOG_FILE = LOG_DIR / "ecm-mcp.log"
    ERROR_LOG = LOG_DIR / "ecm-mcp-errors.log"

    @classmethod
    def ensure_dirs(cls):
        """Create required directories."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def capabilities(cls) -> dict:
        """MCP capability descriptor derived from the capability flags."""
        caps = {}
        if cls.CAPABILITY_TOOLS:
            caps["tools"] = {"listChanged": False}
        if cls.CAPABILITY_PROMPTS:
            caps["prompts"] = {"listChanged": False}
        if cls.CAPABILITY_RESOURCES:
            caps["resources"] = {"subscribe": False, "listChanged": False}
        return caps
