"""Forecast cache with freshness-aware JSON envelopes.

Each JSON file is wrapped in a metadata envelope::

    {"meta": {"source": ..., "fetched_at": ..., "valid_until": ...}, "data": ...}

so the check flow can reuse a forecast until ``valid_until`` passes. Raw
forecasts live under ``live/``, keyed by how they were requested
(``coords_{lat}_{lon}`` or ``zip_{code}``).
"""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003 (used at runtime)
from typing import Any


def forecast_cache_path(
    *, lat: float | None = None, lon: float | None = None, zip_code: str | None = None
) -> Path:
    """Relative store path for a cached forecast.

    Raises:
        ValueError: If neither a ZIP code nor both coordinates are given.
    """
    if zip_code:
        key = "zip_" + re.sub(r"[^A-Za-z0-9]+", "_", zip_code.strip())
    elif lat is not None and lon is not None:
        key = f"coords_{lat}_{lon}"
    else:
        msg = "A ZIP code or both lat and lon are required"
        raise ValueError(msg)
    return Path("live") / f"forecast_{key}.json"


class DataStore:
    """Manages read/write of cached data files with TTL."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.live = base_dir / "live"

    def read(self, path: Path) -> dict[str, Any] | None:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``live/forecast_zip_10001.json``).
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"openweathermap.org"``).
            valid_until: Expiry timestamp. None means never fresh.
            **params: Extra metadata fields (location, query params, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": datetime.now(UTC).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)

        return full

    def fetched_at(self, path: Path) -> datetime | None:
        """When the stored payload was written, or None if unknown."""
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        value = envelope.get("meta", {}).get("fetched_at")
        if value is None:
            return None
        moment = datetime.fromisoformat(value)
        return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    def is_fresh(self, path: Path) -> bool:
        """Check if a file exists and hasn't expired.

        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return False

        valid_until = envelope.get("meta", {}).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return datetime.now(UTC) < expiry
