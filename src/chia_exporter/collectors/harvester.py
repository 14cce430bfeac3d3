"""Harvester collector: the harvester's own view of its plot files."""

from typing import List

from ..services.schemas import PlotFiles
from ..utils.metrics import MetricSample
from . import catalog
from .base import BaseCollector, safe_collect


def plot_file_samples(plots: PlotFiles) -> List[MetricSample]:
    return [
        catalog.PLOTS_FAILED_TO_OPEN.sample(len(plots.failed_to_open_filenames)),
        catalog.PLOTS_NOT_FOUND.sample(len(plots.not_found_filenames)),
        catalog.PLOTS.sample(len(plots.plots)),
    ]


class HarvesterCollector(BaseCollector):
    """Collector for the harvester RPC service."""

    def collect(self) -> List[MetricSample]:
        return self.collect_plots()

    @safe_collect
    def collect_plots(self) -> List[MetricSample]:
        return plot_file_samples(self._call("get_plots", PlotFiles))
