"""Liquidity source contract.

The router never fetches market data itself. A LiquiditySource hands it one
consistent snapshot per computation; how that snapshot is refreshed or
cached is up to the source.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog

from swave_router.models.snapshot import LiquiditySnapshot

logger = structlog.get_logger()


@runtime_checkable
class LiquiditySource(Protocol):
    """Anything that can supply a liquidity snapshot on demand."""

    def snapshot(self) -> LiquiditySnapshot:
        """Return the current tokens and pools."""
        ...


class StaticLiquiditySource:
    """Liquidity source serving a fixed snapshot.

    Usage:
        source = StaticLiquiditySource.from_json_file("pools.json")
        router = SwapRouter(source=source)
    """

    def __init__(self, snapshot: LiquiditySnapshot) -> None:
        self._snapshot = snapshot

    def snapshot(self) -> LiquiditySnapshot:
        return self._snapshot

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StaticLiquiditySource:
        """Build a source from a {"tokens": [...], "pools": [...]} document.

        Raises:
            pydantic.ValidationError: If the document does not describe a snapshot
        """
        return cls(LiquiditySnapshot.model_validate(data))

    @classmethod
    def from_json_file(cls, path: str | Path) -> StaticLiquiditySource:
        """Load a snapshot document from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        source = cls.from_dict(data)
        logger.info(
            "liquidity_snapshot_loaded",
            path=str(path),
            tokens=len(source._snapshot.tokens),
            pools=len(source._snapshot.pools),
        )
        return source


__all__ = ["LiquiditySource", "StaticLiquiditySource"]
