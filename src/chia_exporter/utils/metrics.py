"""Metric data structures shared by all collectors."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from prometheus_client.core import GaugeMetricFamily


@dataclass(frozen=True)
class MetricSpec:
    """Name, help text and label names of one exported gauge."""

    name: str
    help: str
    label_names: Tuple[str, ...] = ()

    def sample(self, value: float, *label_values: str) -> "MetricSample":
        """
        Build a sample of this metric.

        Args:
            value: Gauge value
            *label_values: Label values, positionally matching ``label_names``

        Returns:
            MetricSample: The sample
        """
        return MetricSample(spec=self, value=float(value), label_values=tuple(label_values))

    def family(self) -> GaugeMetricFamily:
        """Return an empty gauge family for this metric."""
        return GaugeMetricFamily(self.name, self.help, labels=list(self.label_names))


@dataclass(frozen=True)
class MetricSample:
    """One gauge value with its label values."""

    spec: MetricSpec
    value: float
    label_values: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.label_values) != len(self.spec.label_names):
            raise ValueError(
                f"{self.spec.name}: expected {len(self.spec.label_names)} label values, "
                f"got {len(self.label_values)}"
            )

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def labels(self) -> Dict[str, str]:
        """Label names mapped to their values."""
        return dict(zip(self.spec.label_names, self.label_values))


def to_metric_families(samples: Iterable[MetricSample]) -> List[GaugeMetricFamily]:
    """
    Group samples into Prometheus gauge families.

    Families keep the order in which their metric name was first seen.

    Args:
        samples: Samples from one scrape

    Returns:
        List[GaugeMetricFamily]: One family per metric name
    """
    families: Dict[str, GaugeMetricFamily] = {}
    for sample in samples:
        family = families.get(sample.name)
        if family is None:
            family = families[sample.name] = sample.spec.family()
        family.add_metric(list(sample.label_values), sample.value)
    return list(families.values())


def describe_families(specs: Iterable[MetricSpec]) -> Iterator[GaugeMetricFamily]:
    """Yield an empty family per spec, for collector registration."""
    for spec in specs:
        yield spec.family()
