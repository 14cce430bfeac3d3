"""HTTPS JSON client for the node's RPC services."""

import json
import ssl
import time
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

# The RPC servers require a JSON body even for calls without parameters.
EMPTY_BODY: Dict[str, str] = {"": ""}


class RPCError(Exception):
    """A single RPC call failed; the message names the RPC path."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


def build_ssl_context(cert: str, key: str, ca: Optional[str] = None) -> ssl.SSLContext:
    """
    Build the TLS context used for every RPC call.

    The client presents ``cert``/``key``. Without ``ca`` the server
    certificate is not verified at all; with ``ca`` the chain is verified
    against that bundle, but the host name is not checked since node
    certificates are not issued for a host name.

    Args:
        cert: Path to the client certificate
        key: Path to the client private key
        ca: Optional CA bundle for server verification

    Returns:
        ssl.SSLContext: Configured context

    Raises:
        OSError: If a file cannot be read
        ssl.SSLError: If the key pair is invalid
    """
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    context.check_hostname = False
    if ca:
        context.load_verify_locations(cafile=ca)
        context.verify_mode = ssl.CERT_REQUIRED
    else:
        context.verify_mode = ssl.CERT_NONE
    context.load_cert_chain(certfile=cert, keyfile=key)
    return context


class ChiaRPCClient:
    """
    Issues RPC calls to any of the node services.

    One instance is shared by all collectors and all concurrent scrapes;
    ``httpx.Client`` pools connections and is safe to use from several
    threads. Each call must finish within ``timeout`` seconds end to end;
    httpx only bounds each connect or read step on its own.
    """

    def __init__(self, http_client: httpx.Client, timeout: Optional[float] = None):
        """
        Initialize RPC client.

        Args:
            http_client: Pre-configured client (TLS already set)
            timeout: Seconds allowed for a whole call; defaults to the
                client's read timeout, None for no limit
        """
        self.http = http_client
        self.timeout = timeout if timeout is not None else http_client.timeout.read

    @classmethod
    def create(
        cls,
        cert: str,
        key: str,
        timeout: float,
        ca: Optional[str] = None
    ) -> "ChiaRPCClient":
        """
        Create a client authenticating with a certificate/key pair.

        Args:
            cert: Path to the client certificate
            key: Path to the client private key
            timeout: Seconds allowed for each request
            ca: Optional CA bundle for server verification

        Returns:
            ChiaRPCClient: Ready-to-use client
        """
        http_client = httpx.Client(
            verify=build_ssl_context(cert, key, ca),
            timeout=timeout,
        )
        return cls(http_client, timeout)

    def call(
        self,
        base_url: str,
        path: str,
        schema: Type[T],
        body: Optional[Dict[str, Any]] = None
    ) -> T:
        """
        POST one RPC request and decode the response.

        Args:
            base_url: Service base URL, e.g. ``https://localhost:8555``
            path: RPC name, e.g. ``get_blockchain_state``
            schema: Response model to decode into
            body: Request parameters; an empty placeholder is sent if None

        Returns:
            Decoded response; fields missing from the response hold their
            zero value

        Raises:
            RPCError: On transport failure, HTTP error status, undecodable
                body or a node-reported failure
        """
        content = self._post(base_url, path, body if body is not None else EMPTY_BODY)

        try:
            payload = json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RPCError(path, f"error decoding {path} response: {e}") from e

        if not isinstance(payload, dict):
            raise RPCError(path, f"error decoding {path} response: expected a JSON object")

        if payload.get("success") is False:
            raise RPCError(path, f"{path} returned error: {payload.get('error', 'unknown error')}")

        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise RPCError(path, f"error decoding {path} response: {e}") from e

    def _post(self, base_url: str, path: str, body: Dict[str, Any]) -> bytes:
        """
        Send the request and read the whole body before the deadline.

        Raises:
            RPCError: On transport failure, HTTP error status or when the
                round trip outlasts ``self.timeout``
        """
        deadline = time.monotonic() + self.timeout if self.timeout else None

        def check_deadline():
            if deadline is not None and time.monotonic() > deadline:
                raise RPCError(path, f"error calling {path}: timeout after {self.timeout}s")

        try:
            with self.http.stream("POST", f"{base_url}/{path}", json=body) as response:
                check_deadline()
                if response.is_error:
                    raise RPCError(path, f"error calling {path}: HTTP {response.status_code}")

                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    check_deadline()
                return b"".join(chunks)
        except httpx.HTTPError as e:
            raise RPCError(path, f"error calling {path}: {e}") from e

    def close(self) -> None:
        """Close pooled connections."""
        self.http.close()
