"""Main application entry point for the Chia Prometheus exporter."""

import argparse
import signal
import ssl
import sys
from typing import List, Optional

from .config.loader import ConfigError, ConfigLoader
from .config.settings import Settings
from .exporter import ChiaCollector
from .server import METRICS_PATH, ExporterServer, build_registry
from .services.rpc_client import ChiaRPCClient
from .utils.logger import setup_logger
from .version import __version__


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.

    Every flag is accepted with one or two leading dashes. Flags left
    unset fall back to the YAML file, then to built-in defaults.
    """
    parser = argparse.ArgumentParser(
        prog="chia-exporter",
        description="Prometheus exporter for Chia node RPC services",
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults: all four services on localhost, listen on :9133
  chia-exporter

  # Farmer only, wallet and harvester not running here
  chia-exporter --wallet disabled --harvester disabled

  # Settings from a file, overridden on the command line
  chia-exporter --config config/config.yaml --timeout 10s
        """
    )

    def flag(name, **kwargs):
        parser.add_argument(f"-{name}", f"--{name}", dest=kwargs.pop("dest", name), **kwargs)

    flag("listen", help="The address to listen on for HTTP requests (default: :9133).")
    flag("cert", help="The full node SSL certificate; environment variables are expanded.")
    flag("key", help="The full node SSL key; environment variables are expanded.")
    flag("ca", help="CA bundle to verify node certificates against (default: no verification).")
    flag("full_node", help="The base URL for the full node RPC endpoint, or 'disabled'.")
    flag("url", dest="full_node", help="Legacy compatibility alias for --full_node.")
    flag("wallet", help="The base URL for the wallet RPC endpoint, or 'disabled'.")
    flag("farmer", help="The base URL for the farmer RPC endpoint, or 'disabled'.")
    flag("harvester", help="The base URL for the harvester RPC endpoint, or 'disabled'.")
    flag("timeout", help="HTTP client timeout per request, as duration string (default: 5s).")
    flag(
        "config",
        default=Settings.config_path(),
        help="Optional YAML configuration file (default: CHIA_EXPORTER_CONFIG env var)."
    )
    flag(
        "log-level",
        dest="log_level",
        default=Settings.log_level(),
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO or LOG_LEVEL env var)."
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    CLI entry point.

    Resolves configuration, builds the shared RPC client and serves
    metrics until interrupted. Configuration, TLS and bind failures exit
    with status 1.
    """
    args = build_parser().parse_args(argv)
    logger = setup_logger("chia_exporter", args.log_level)
    logger.info(f"chia_exporter version {__version__}")

    try:
        config = ConfigLoader.load(args)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    for endpoint in config.endpoints:
        if not endpoint.enabled:
            logger.warning(f"Disabling {endpoint.name} endpoint: {endpoint.disabled_reason}")

    try:
        client = ChiaRPCClient.create(config.cert, config.key, config.timeout, config.ca)
    except (OSError, ssl.SSLError) as e:
        logger.error(f"Failed to load TLS key pair {config.cert}, {config.key}: {e}")
        sys.exit(1)

    collector = ChiaCollector(config, client, logger)
    registry = build_registry(collector)

    host, port = config.listen_address
    try:
        server = ExporterServer(host, port, registry, logger)
    except OSError as e:
        logger.error(f"Failed to listen on {config.listen}: {e}")
        client.close()
        sys.exit(1)

    def _signal_handler(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        sys.exit(0)

    signal.signal(signal.SIGTERM, _signal_handler)

    logger.info(f"Listening on {config.listen}. Serving metrics on {METRICS_PATH}.")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    finally:
        server.httpd.server_close()
        client.close()


if __name__ == '__main__':
    main()
