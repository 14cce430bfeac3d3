"""Base collector class for the node service collectors."""

import logging
from abc import ABC, abstractmethod
from functools import wraps
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel

from ..config.models import EndpointConfig
from ..services.rpc_client import ChiaRPCClient, RPCError
from ..utils.metrics import MetricSample

T = TypeVar("T", bound=BaseModel)


class BaseCollector(ABC):
    """Abstract base class for the per-service collectors."""

    def __init__(self, client: ChiaRPCClient, endpoint: EndpointConfig, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            client: Shared RPC client
            endpoint: Service endpoint this collector queries
            logger: Logger instance
        """
        self.client = client
        self.endpoint = endpoint
        self.logger = logger.getChild(self.__class__.__name__)

    @property
    def enabled(self) -> bool:
        return self.endpoint.enabled

    @abstractmethod
    def collect(self) -> List[MetricSample]:
        """
        Query the service and return this scrape's samples.

        Returns:
            List[MetricSample]: Samples from every transform that succeeded
        """

    def _call(self, path: str, schema: Type[T], body: Optional[Dict[str, Any]] = None) -> T:
        return self.client.call(self.endpoint.base_url, path, schema, body)


def safe_collect(func):
    """
    Decorator that contains a failing transform.

    An RPC failure is logged and the transform contributes no samples;
    sibling transforms in the same scrape are unaffected.

    Args:
        func: Collector method returning a list of samples

    Returns:
        Wrapped method that never raises
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except RPCError as e:
            self.logger.error(str(e), extra={"rpc_path": e.path})
            return []
        except Exception as e:
            self.logger.error(f"Collection failed in {func.__name__}: {e}", exc_info=True)
            return []
    return wrapper
