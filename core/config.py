# =============================================================================
# core/config.py  -  Process Configuration
# =============================================================================
#
# Two knobs, both read from the environment once at startup:
#
#   AFFINITY_API_KEY   required.  Without it the server refuses to start.
#   PORT               optional.  Defaults to 3000.
#
# main.py calls load_dotenv() first, so either can also live in a .env file.
#
# Everything else (bind host, MCP path, Affinity base URL) is fixed.  They're
# fields on Settings so tests can point the client at a fake base URL.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigError


AFFINITY_BASE_URL = "https://api.affinity.co"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
MCP_PATH = "/mcp"


@dataclass(frozen=True)
class Settings:
    api_key: str
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    base_url: str = AFFINITY_BASE_URL
    mcp_path: str = MCP_PATH

    @property
    def endpoint(self) -> str:
        return f"http://{self.host}:{self.port}{self.mcp_path}"

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return f"Settings(api_key='***', port={self.port}, host={self.host!r}, base_url={self.base_url!r})"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Raises:
        ConfigError: AFFINITY_API_KEY is missing/blank, or PORT isn't a
            valid port number.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get("AFFINITY_API_KEY") or "").strip()
    if not api_key:
        raise ConfigError("AFFINITY_API_KEY required")

    raw_port = (env.get("PORT") or "").strip()
    if not raw_port:
        return Settings(api_key=api_key)

    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw_port!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")

    return Settings(api_key=api_key, port=port)
