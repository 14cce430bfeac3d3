"""Full node collector: peer connections and blockchain state."""

from collections import Counter
from typing import List

from ..services.schemas import BlockchainStateResponse, Connections
from ..utils.metrics import MetricSample
from ..utils.status import NodeType, SyncStatus
from . import catalog
from .base import BaseCollector, safe_collect

KNOWN_NODE_TYPES = frozenset(node_type.value for node_type in NodeType)


def connection_samples(conns: Connections) -> List[MetricSample]:
    """
    Count connected peers per node type.

    Every known type gets a sample, zero when no peer of that type is
    connected, so the label set stays the same from scrape to scrape.
    Peers reporting an unknown type code are not counted.

    Args:
        conns: ``get_connections`` response

    Returns:
        List[MetricSample]: One ``chia_peers_count`` sample per node type
    """
    counts = Counter(
        conn.type for conn in conns.connections if conn.type in KNOWN_NODE_TYPES
    )

    return [
        catalog.PEERS_COUNT.sample(counts[node_type.value], str(node_type.value))
        for node_type in NodeType
    ]


def blockchain_state_samples(response: BlockchainStateResponse) -> List[MetricSample]:
    state = response.blockchain_state
    sync = SyncStatus.from_flags(state.sync.sync_mode, state.sync.synced)
    return [
        catalog.BLOCKCHAIN_SYNC_STATUS.sample(sync),
        catalog.BLOCKCHAIN_HEIGHT.sample(state.peak.height),
        catalog.BLOCKCHAIN_DIFFICULTY.sample(state.difficulty),
        catalog.BLOCKCHAIN_SPACE.sample(state.space),
        catalog.BLOCKCHAIN_TOTAL_ITERS.sample(state.peak.total_iters),
    ]


class FullNodeCollector(BaseCollector):
    """Collector for the full node RPC service."""

    def collect(self) -> List[MetricSample]:
        return self.collect_connections() + self.collect_blockchain_state()

    @safe_collect
    def collect_connections(self) -> List[MetricSample]:
        conns = self._call("get_connections", Connections)
        for conn in conns.connections:
            if conn.type not in KNOWN_NODE_TYPES:
                self.logger.debug(
                    f"Ignoring peer {conn.peer_host} with unknown node type {conn.type}"
                )
        return connection_samples(conns)

    @safe_collect
    def collect_blockchain_state(self) -> List[MetricSample]:
        return blockchain_state_samples(
            self._call("get_blockchain_state", BlockchainStateResponse)
        )
