"""Legacy phpIPAM migrator.

Moves VLANs, subnets and IPv4 addresses from a pre-1.0 phpIPAM MySQL database
into a current phpIPAM instance through its REST API, rebuilding the
master-subnet hierarchy on the way.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    level: str | None = None,
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink and enable this package's log output.

    ``level`` defaults to ``LOGURU_LEVEL`` from the environment, then INFO.
    """
    level = level or os.getenv("LOGURU_LEVEL", "INFO")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=level, format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"skiplog": False})
    glogger.enable(__name__)


from ipammigrate.base import BaseInventoryClient  # noqa: E402
from ipammigrate.exceptions import (  # noqa: E402
    APIError,
    AuthenticationError,
    DatabaseError,
    InvalidAddressFormat,
    InvalidCIDRError,
    LookupFailedError,
    MigrationError,
    NotFoundError,
    SubnetNotFoundError,
    VLANNotFoundError,
)
from ipammigrate.hierarchy import ContainmentForest, OrderingStrategy, ParentResolver, order_subnets  # noqa: E402
from ipammigrate.pipeline import MigrationPipeline, MigrationSummary, plan_subnets  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "BaseInventoryClient",
    "MigrationPipeline",
    "MigrationSummary",
    "plan_subnets",
    "ParentResolver",
    "ContainmentForest",
    "OrderingStrategy",
    "order_subnets",
    "MigrationError",
    "InvalidAddressFormat",
    "InvalidCIDRError",
    "DatabaseError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "LookupFailedError",
    "VLANNotFoundError",
    "SubnetNotFoundError",
]
