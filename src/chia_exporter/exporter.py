"""Scrape orchestration: runs the service collectors and feeds the registry."""

import logging
from typing import Dict, Iterator, List, Optional

from prometheus_client.core import GaugeMetricFamily

from .collectors import catalog
from .collectors.base import BaseCollector
from .collectors.farmer import FarmerCollector
from .collectors.full_node import FullNodeCollector
from .collectors.harvester import HarvesterCollector
from .collectors.wallet import WalletCollector
from .config.models import ExporterConfig
from .services.rpc_client import ChiaRPCClient
from .utils.logger import setup_logger
from .utils.metrics import MetricSample, describe_families, to_metric_families


class ChiaCollector:
    """
    Prometheus collector querying the node services on every scrape.

    Nothing is cached between scrapes. Within one scrape all RPC calls are
    made one after another in a fixed order: full node, wallet, farmer,
    harvester. A service whose endpoint is disabled is skipped without any
    call or log line. Errors never leave this class; a failed call only
    leaves its metrics out of the scrape.
    """

    def __init__(
        self,
        config: ExporterConfig,
        client: ChiaRPCClient,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the collector.

        Args:
            config: Resolved exporter configuration
            client: Shared RPC client
            logger: Optional logger instance
        """
        self.config = config
        self.client = client
        self.logger = logger or setup_logger("chia_exporter")

        self.collectors: Dict[str, BaseCollector] = {
            "full_node": FullNodeCollector(client, config.full_node, self.logger),
            "wallet": WalletCollector(client, config.wallet, self.logger),
            "farmer": FarmerCollector(client, config.farmer, self.logger),
            "harvester": HarvesterCollector(client, config.harvester, self.logger),
        }

    def samples(self) -> List[MetricSample]:
        """
        Run one scrape and return its samples.

        Returns:
            List[MetricSample]: Samples from every enabled service, in
            collection order
        """
        samples: List[MetricSample] = []
        for name, collector in self.collectors.items():
            if not collector.enabled:
                continue
            try:
                samples.extend(collector.collect())
            except Exception as e:
                self.logger.error(f"Collector '{name}' failed: {e}", exc_info=True)
        return samples

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Yield this scrape's metric families (prometheus_client interface)."""
        yield from to_metric_families(self.samples())

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """Yield every metric the exporter can publish, without querying."""
        yield from describe_families(catalog.ALL_SPECS)
