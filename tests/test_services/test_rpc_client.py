"""Tests for the RPC client."""

import json
import socket
import threading
import time

import httpx
import pytest

from chia_exporter.services.rpc_client import ChiaRPCClient, EMPTY_BODY, RPCError, build_ssl_context
from chia_exporter.services.schemas import BlockchainStateResponse, HeightInfo, Wallets

from fakes import make_rpc_client

BASE_URL = "https://localhost:8555"


class Recorder:
    """Handler returning a fixed response and remembering the request."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.request = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.request = request
        return self.response


def test_call_posts_json_to_path():
    """Request goes to {base}/{path} as a JSON POST."""
    recorder = Recorder(httpx.Response(200, json={"height": 42, "success": True}))
    client = make_rpc_client(recorder)

    result = client.call("https://localhost:9256", "get_height_info", HeightInfo, {"wallet_id": 1})

    assert result.height == 42
    assert recorder.request.method == "POST"
    assert str(recorder.request.url) == "https://localhost:9256/get_height_info"
    assert recorder.request.headers["content-type"] == "application/json"
    assert json.loads(recorder.request.content) == {"wallet_id": 1}


def test_call_without_params_sends_placeholder_body():
    """Parameterless calls still carry the empty-keyed object."""
    recorder = Recorder(httpx.Response(200, json={"wallets": []}))
    client = make_rpc_client(recorder)

    client.call(BASE_URL, "get_wallets", Wallets)

    assert json.loads(recorder.request.content) == EMPTY_BODY == {"": ""}


def test_missing_fields_take_zero_values():
    """An empty object decodes; nested optional objects default to zero."""
    client = make_rpc_client(Recorder(httpx.Response(200, json={"success": True})))

    state = client.call(BASE_URL, "get_blockchain_state", BlockchainStateResponse).blockchain_state

    assert state.peak.height == 0
    assert state.peak.total_iters == 0
    assert state.sync.sync_mode is False
    assert state.sync.synced is False
    assert state.space == 0.0


def test_null_nested_object_takes_zero_value():
    """A null peak (fresh chain) is treated like an absent one."""
    client = make_rpc_client(Recorder(httpx.Response(
        200, json={"blockchain_state": {"peak": None, "difficulty": 7}}
    )))

    state = client.call(BASE_URL, "get_blockchain_state", BlockchainStateResponse).blockchain_state

    assert state.peak.height == 0
    assert state.difficulty == 7


def test_undecodable_body_names_path():
    """A non-JSON body is a decode error naming the RPC path."""
    client = make_rpc_client(Recorder(httpx.Response(200, text="<html>oops</html>")))

    with pytest.raises(RPCError) as exc_info:
        client.call(BASE_URL, "get_blockchain_state", BlockchainStateResponse)

    assert exc_info.value.path == "get_blockchain_state"
    assert "error decoding get_blockchain_state response" in str(exc_info.value)


def test_wrong_field_type_is_decode_error():
    """Present-but-wrong fields fail instead of silently defaulting."""
    client = make_rpc_client(Recorder(httpx.Response(200, json={"height": "tall"})))

    with pytest.raises(RPCError, match="error decoding get_height_info response"):
        client.call(BASE_URL, "get_height_info", HeightInfo)


def test_non_object_body_is_decode_error():
    client = make_rpc_client(Recorder(httpx.Response(200, json=[1, 2, 3])))

    with pytest.raises(RPCError, match="error decoding get_wallets response"):
        client.call(BASE_URL, "get_wallets", Wallets)


def test_transport_failure_names_path():
    """Connection errors are wrapped with the RPC path."""
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    client = make_rpc_client(refuse)

    with pytest.raises(RPCError) as exc_info:
        client.call(BASE_URL, "get_connections", Wallets)

    assert exc_info.value.path == "get_connections"
    assert "error calling get_connections" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_timeout_is_transport_failure():
    def hang(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_rpc_client(hang)

    with pytest.raises(RPCError, match="error calling get_plots"):
        client.call("https://localhost:8560", "get_plots", Wallets)


def test_http_error_status():
    client = make_rpc_client(Recorder(httpx.Response(500, text="internal error")))

    with pytest.raises(RPCError, match="HTTP 500"):
        client.call(BASE_URL, "get_connections", Wallets)


def test_node_reported_failure():
    """success=false from the node is an error, not a zero-valued result."""
    client = make_rpc_client(Recorder(httpx.Response(
        200, json={"success": False, "error": "Wallet needs to be fully synced."}
    )))

    with pytest.raises(RPCError) as exc_info:
        client.call("https://localhost:9256", "get_height_info", HeightInfo)

    assert "Wallet needs to be fully synced." in str(exc_info.value)


def test_build_ssl_context_missing_files(tmp_path):
    """Unreadable key pair fails at construction time."""
    with pytest.raises(OSError):
        build_ssl_context(str(tmp_path / "missing.crt"), str(tmp_path / "missing.key"))


def test_create_missing_key_pair(tmp_path):
    with pytest.raises(OSError):
        ChiaRPCClient.create(str(tmp_path / "missing.crt"), str(tmp_path / "missing.key"), 5.0)


class TricklingServer:
    """Local HTTP server that sends its body one byte at a time."""

    BODY = b'{"height": 42, "success": true}'

    def __init__(self, delay: float):
        self.delay = delay
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen(1)
        self.port = self.sock.getsockname()[1]
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        conn, _ = self.sock.accept()
        with conn:
            conn.recv(65536)
            conn.sendall(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                + f"Content-Length: {len(self.BODY)}\r\n\r\n".encode()
            )
            try:
                for i in range(len(self.BODY)):
                    conn.sendall(self.BODY[i:i + 1])
                    time.sleep(self.delay)
            except OSError:
                pass

    def close(self):
        self.sock.close()
        self.thread.join(timeout=10)


@pytest.fixture
def trickling_server():
    server = TricklingServer(delay=0.15)
    yield server
    server.close()


def test_timeout_bounds_whole_round_trip(trickling_server):
    """A body that keeps trickling in still fails once the overall timeout passes."""
    client = ChiaRPCClient(httpx.Client(timeout=1.0, trust_env=False))
    started = time.monotonic()

    with pytest.raises(RPCError, match="error calling get_height_info: timeout"):
        client.call(f"http://127.0.0.1:{trickling_server.port}", "get_height_info", HeightInfo)

    assert time.monotonic() - started < 2.5
    client.close()


def test_explicit_timeout_overrides_client_timeout():
    client = ChiaRPCClient(httpx.Client(timeout=30.0), timeout=2.0)

    assert client.timeout == 2.0


def test_no_timeout():
    client = ChiaRPCClient(httpx.Client(timeout=None))

    assert client.timeout is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
