"""Pydantic configuration models for the exporter."""

import os
import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

DISABLED = "disabled"

DEFAULT_CERT = "$HOME/.chia/mainnet/config/ssl/full_node/private_full_node.crt"
DEFAULT_KEY = "$HOME/.chia/mainnet/config/ssl/full_node/private_full_node.key"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"


def parse_duration(text: str) -> float:
    """
    Parse a Go-style duration string such as ``5s``, ``1m30s`` or ``250ms``.

    Args:
        text: Duration string; ``0`` is accepted without a unit

    Returns:
        float: Duration in seconds

    Raises:
        ValueError: If the string is not a valid non-negative duration
    """
    value = text.strip()
    if value in ("0", "+0"):
        return 0.0
    if value.startswith("+"):
        value = value[1:]
    if not value or not re.fullmatch(f"(?:{_DURATION_PART})+", value):
        raise ValueError(f"invalid duration {text!r}")
    return sum(
        float(number) * _DURATION_UNITS[unit]
        for number, unit in re.findall(_DURATION_PART, value)
    )


class EndpointConfig(BaseModel):
    """Base URL of one node service, or a disabled marker."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_url: str = ""
    enabled: bool = False
    disabled_reason: str = ""

    @classmethod
    def disabled(cls, name: str, reason: str) -> "EndpointConfig":
        return cls(name=name, enabled=False, disabled_reason=reason)


def resolve_endpoint(name: str, url: Optional[str]) -> EndpointConfig:
    """
    Validate a configured base URL.

    Args:
        name: Service name (full_node, wallet, farmer, harvester)
        url: Configured URL, the ``disabled`` sentinel, or None

    Returns:
        EndpointConfig: Enabled endpoint, or a disabled one if the URL is
        not an absolute URI

    Raises:
        ValueError: If the URL is absolute but does not use https
    """
    if url is None or not url.strip() or url.strip() == DISABLED:
        return EndpointConfig.disabled(name, "disabled by configuration")

    url = url.strip()
    try:
        parts = urlsplit(url)
        parts.port  # raises on a malformed port
    except ValueError as e:
        return EndpointConfig.disabled(name, f"invalid URL {url!r}: {e}")

    # "localhost:8555" parses as scheme "localhost" with no host
    if not parts.scheme or (not parts.netloc and parts.scheme.lower() != "https"):
        return EndpointConfig.disabled(name, f"invalid URL {url!r}: not an absolute URI")

    if not url.lower().startswith("https://"):
        raise ValueError(
            f"{name} endpoint URL does not start with https://, endpoint SSL is mandatory: {url}"
        )

    if not parts.netloc:
        return EndpointConfig.disabled(name, f"invalid URL {url!r}: no host")

    return EndpointConfig(name=name, base_url=url.rstrip("/"), enabled=True)


class ExporterConfig(BaseModel):
    """Root configuration, resolved once at startup and read-only after."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    listen: str = ":9133"
    cert: str = DEFAULT_CERT
    key: str = DEFAULT_KEY
    ca: Optional[str] = None
    # Seconds per request; None means no timeout
    timeout: Optional[float] = Field(default=5.0)
    full_node: EndpointConfig = Field(
        default_factory=lambda: resolve_endpoint("full_node", "https://localhost:8555")
    )
    wallet: EndpointConfig = Field(
        default_factory=lambda: resolve_endpoint("wallet", "https://localhost:9256")
    )
    farmer: EndpointConfig = Field(
        default_factory=lambda: resolve_endpoint("farmer", "https://localhost:8559")
    )
    harvester: EndpointConfig = Field(
        default_factory=lambda: resolve_endpoint("harvester", "https://localhost:8560")
    )

    @field_validator("cert", "key", "ca")
    @classmethod
    def expand_path(cls, v: Optional[str]) -> Optional[str]:
        """Expand ``$VAR``/``${VAR}`` and ``~`` in file paths."""
        if v is None:
            return v
        return os.path.expanduser(os.path.expandvars(v))

    @field_validator("timeout", mode="before")
    @classmethod
    def validate_timeout(cls, v):
        """Accept a duration string or a number of seconds."""
        if isinstance(v, str):
            v = parse_duration(v)
        if v is None:
            return v
        if v < 0:
            raise ValueError("timeout must not be negative")
        return float(v) or None

    @field_validator("full_node", "wallet", "farmer", "harvester", mode="before")
    @classmethod
    def validate_endpoint(cls, v, info):
        """Resolve URL strings into endpoint configs."""
        if v is None or isinstance(v, str):
            return resolve_endpoint(info.field_name, v)
        return v

    @field_validator("listen")
    @classmethod
    def validate_listen(cls, v: str) -> str:
        """Require ``[host]:port`` with a valid port."""
        _, sep, port = v.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"listen address must be [host]:port, got {v!r}")
        return v

    @property
    def listen_address(self) -> Tuple[str, int]:
        """Host and port to bind; an empty host binds all interfaces."""
        host, _, port = self.listen.rpartition(":")
        return host.strip("[]"), int(port)

    @property
    def endpoints(self) -> Tuple[EndpointConfig, ...]:
        return (self.full_node, self.wallet, self.farmer, self.harvester)
