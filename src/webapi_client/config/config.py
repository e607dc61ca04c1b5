import os
from dataclasses import dataclass
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv

from ..clients.transport import DEFAULT_TIMEOUT, RequestsTransport, Transport

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "environments.yaml")
DEFAULT_ENVIRONMENT = "default"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class Environment:
    """A named API deployment a client talks to.

    Attributes:
        name: Display name, e.g. "production" or "staging".
        base_url: Base URL resource paths are resolved against.
        transport: The transport that performs the HTTP requests.
    """

    name: str
    base_url: str
    transport: Transport


def load_environments(path: str, transport: Optional[Transport] = None) -> Dict[str, Environment]:
    """Load all environments defined in a YAML file.

    The file looks like:

        environments:
          production:
            base_url: https://api.example.com/v1/

    Args:
        path: Path to the YAML file.
        transport: Transport shared by every environment. Defaults to a new
            RequestsTransport.

    Returns:
        A dict mapping environment names to Environment instances.

    Raises:
        ConfigurationError: If the document is malformed or an entry has no base_url.
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    with open(path, "r") as f:
        document = yaml.safe_load(f) or {}

    entries = document.get("environments") if isinstance(document, dict) else None
    if not isinstance(entries, dict):
        raise ConfigurationError(f"{path}: expected an 'environments' mapping")

    transport = transport or RequestsTransport()
    environments = {}
    for name, entry in entries.items():
        if not isinstance(entry, dict):
            raise ConfigurationError(f"{path}: environment '{name}' must be a mapping")
        base_url = str(entry.get("base_url") or "").strip()
        if not base_url:
            raise ConfigurationError(f"{path}: environment '{name}' has no base_url")
        environments[str(name)] = Environment(name=str(name), base_url=base_url, transport=transport)
    return environments


def load_environment(
    name: Optional[str] = None,
    path: Optional[str] = None,
    transport: Optional[Transport] = None,
) -> Environment:
    """Load one environment from the process environment or a YAML file.

    Variables (a .env file is loaded first if present):
        WEBAPI_BASE_URL: If set, used directly as the base URL.
        WEBAPI_ENVIRONMENT: Environment name (default "default").
        WEBAPI_CONFIG: YAML file to look the name up in when WEBAPI_BASE_URL is unset.
        WEBAPI_TIMEOUT: Request timeout in seconds for the default transport.

    Args:
        name: Environment name. Overrides WEBAPI_ENVIRONMENT.
        path: YAML file path. Overrides WEBAPI_CONFIG.
        transport: Transport to use instead of a RequestsTransport.

    Returns:
        The resolved Environment.

    Raises:
        ConfigurationError: If no base URL can be found or WEBAPI_TIMEOUT is invalid.
    """
    load_dotenv()

    name = name or os.getenv("WEBAPI_ENVIRONMENT", "").strip() or DEFAULT_ENVIRONMENT

    if transport is None:
        timeout_raw = os.getenv("WEBAPI_TIMEOUT", "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"WEBAPI_TIMEOUT must be a number, got {timeout_raw!r}") from e
        transport = RequestsTransport(timeout=timeout)

    base_url = os.getenv("WEBAPI_BASE_URL", "").strip()
    if base_url:
        return Environment(name=name, base_url=base_url, transport=transport)

    path = path or os.getenv("WEBAPI_CONFIG", "").strip() or DEFAULT_CONFIG_PATH
    if not os.path.exists(path):
        raise ConfigurationError(f"WEBAPI_BASE_URL is not set and {path} does not exist")

    environments = load_environments(path, transport=transport)
    if name not in environments:
        raise ConfigurationError(
            f"Unknown environment '{name}'. Available: {', '.join(sorted(environments))}"
        )
    return environments[name]
