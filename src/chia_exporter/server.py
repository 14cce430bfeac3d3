"""HTTP endpoint serving the banner and the metrics."""

import logging
import socket
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from .exporter import ChiaCollector
from .version import __version__

METRICS_PATH = "/metrics"

BANNER = (
    f"chia_exporter version {__version__}\n"
    f"metrics are published on {METRICS_PATH}\n\n"
    "This program is free software released under the GNU AGPL.\n"
    "The source code is availabe at https://github.com/artanicus/chia_exporter\n"
)


class ThreadingHTTPServerV6(ThreadingHTTPServer):
    address_family = socket.AF_INET6


def build_registry(collector: ChiaCollector) -> CollectorRegistry:
    """
    Create the registry exposed on the metrics path.

    Args:
        collector: The node collector

    Returns:
        CollectorRegistry: Registry with the node collector and the
        exporter's own process metrics
    """
    registry = CollectorRegistry()
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)
    registry.register(collector)
    return registry


class ExporterServer:
    """Threaded HTTP server; each scrape runs on its own thread."""

    def __init__(
        self,
        host: str,
        port: int,
        registry: CollectorRegistry,
        logger: Optional[logging.Logger] = None
    ):
        """
        Bind the server.

        Args:
            host: Address to bind; "" for all IPv4 interfaces, an IPv6
                address (e.g. "::") binds over IPv6
            port: TCP port
            registry: Registry rendered on the metrics path
            logger: Optional logger instance

        Raises:
            OSError: If the address cannot be bound
        """
        self.registry = registry
        self.logger = logger or logging.getLogger("chia_exporter")
        server_class = ThreadingHTTPServerV6 if ":" in host else ThreadingHTTPServer
        self.httpd = server_class((host, port), self._make_handler())
        self.httpd.daemon_threads = True

    @property
    def port(self) -> int:
        return self.httpd.server_address[1]

    def serve_forever(self) -> None:
        self.httpd.serve_forever()

    def shutdown(self) -> None:
        self.httpd.shutdown()
        self.httpd.server_close()

    def _make_handler(self):
        """Create a request handler with access to this server instance."""
        server = self

        class RequestHandler(BaseHTTPRequestHandler):
            def do_GET(self):
                path = self.path.split('?', 1)[0]
                if path == METRICS_PATH:
                    self._send(200, generate_latest(server.registry), CONTENT_TYPE_LATEST)
                elif path == '/':
                    self._send(200, BANNER.encode('utf-8'), "text/plain; charset=utf-8")
                else:
                    self._send(404, b"not found\n", "text/plain; charset=utf-8")

            def _send(self, status_code, body, content_type):
                self.send_response(status_code)
                self.send_header("Content-Type", content_type)
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def log_message(self, fmt, *args):
                server.logger.debug(f"{self.address_string()} - {fmt % args}")

        return RequestHandler
