"""Farmer collector: pool state and the farmer's view of its harvesters."""

from collections import Counter
from typing import Dict, Iterable, List, NamedTuple

from ..services.schemas import HarvesterInfo, Harvesters, PlotEntry, PoolState
from ..utils.metrics import MetricSample
from . import catalog
from .base import BaseCollector, safe_collect

NODE_ID_DISPLAY_LENGTH = 12


class PlotGroupKey(NamedTuple):
    """
    Plots counted together in ``chia_farmer_plots``.

    Two plots belong to the same group when all three fields are equal
    (plain tuple equality); an absent pool key or contract is "".
    """

    pool_public_key: str
    pool_contract_puzzle_hash: str
    size: int


def group_plots(plots: Iterable[PlotEntry]) -> Dict[PlotGroupKey, int]:
    """
    Count plots per (pool public key, pool contract puzzle hash, size).

    Args:
        plots: Plot entries of one harvester

    Returns:
        dict: Group key mapped to the number of plots in the group, in
        first-seen order
    """
    return dict(Counter(
        PlotGroupKey(plot.pool_public_key, plot.pool_contract_puzzle_hash, plot.size)
        for plot in plots
    ))


def pool_state_samples(pools: PoolState) -> List[MetricSample]:
    samples = []
    for pool in pools.pool_state:
        labels = (pool.pool_config.launcher_id, pool.pool_config.pool_url)
        samples.extend([
            catalog.POOL_CURRENT_DIFFICULTY.sample(pool.current_difficulty, *labels),
            catalog.POOL_CURRENT_POINTS.sample(pool.current_points, *labels),
            # Counts are the lengths of the 24h lists as reported
            catalog.POOL_POINTS_ACKNOWLEDGED_24H.sample(len(pool.points_acknowledged_24h), *labels),
            catalog.POOL_POINTS_FOUND_24H.sample(len(pool.points_found_24h), *labels),
        ])
    return samples


def harvester_samples(harvester: HarvesterInfo) -> List[MetricSample]:
    """
    Plot counts for one harvester connected to the farmer.

    Args:
        harvester: Entry from ``get_harvesters``

    Returns:
        List[MetricSample]: Failed-to-open and no-key counts, then one
        ``chia_farmer_plots`` sample per plot group
    """
    host = harvester.connection.host
    node_id = harvester.connection.node_id[:NODE_ID_DISPLAY_LENGTH]

    samples = [
        catalog.FARMER_PLOTS_FAILED_TO_OPEN.sample(
            len(harvester.failed_to_open_filenames), host, node_id
        ),
        catalog.FARMER_PLOTS_NO_KEY.sample(len(harvester.no_key_filenames), host, node_id),
    ]
    for key, count in group_plots(harvester.plots).items():
        samples.append(catalog.FARMER_PLOTS.sample(
            count,
            host,
            node_id,
            key.pool_public_key,
            key.pool_contract_puzzle_hash,
            str(key.size),
        ))
    return samples


def harvesters_samples(harvesters: Harvesters) -> List[MetricSample]:
    samples = [catalog.FARMER_HARVESTERS.sample(len(harvesters.harvesters))]
    for harvester in harvesters.harvesters:
        samples.extend(harvester_samples(harvester))
    return samples


class FarmerCollector(BaseCollector):
    """Collector for the farmer RPC service."""

    def collect(self) -> List[MetricSample]:
        return self.collect_pool_state() + self.collect_harvesters()

    @safe_collect
    def collect_pool_state(self) -> List[MetricSample]:
        return pool_state_samples(self._call("get_pool_state", PoolState))

    @safe_collect
    def collect_harvesters(self) -> List[MetricSample]:
        return harvesters_samples(self._call("get_harvesters", Harvesters))
