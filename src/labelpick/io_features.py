"""Vector dataset access for batch labeling."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Sequence

LOGGER = logging.getLogger("labelpick.io_features")

GEOMETRY_COLUMN = "geometry"


class FeatureRepository:
    """Thin wrapper around GeoPandas reads and writes of a feature layer."""

    def __init__(self, path: Path, *, layer: str | None = None) -> None:
        self.path = path
        self.layer = layer

    def load(self) -> Any:
        """Load the layer as a GeoDataFrame."""
        if not self.path.exists():
            raise FileNotFoundError(f"Feature dataset not found: {self.path}")
        gpd = self._require_geopandas()
        kwargs: dict[str, Any] = {}
        if self.layer is not None:
            kwargs["layer"] = self.layer
        frame = gpd.read_file(self.path, **kwargs)
        LOGGER.info("Loaded %d features from %s", len(frame), self.path)
        return frame

    @staticmethod
    def records(frame: Any) -> list[dict[str, Any]]:
        """Property dicts in column order, without geometry and missing values."""
        columns = [str(col) for col in frame.columns if str(col) != GEOMETRY_COLUMN]
        out: list[dict[str, Any]] = []
        for row in frame[columns].itertuples(index=False, name=None):
            out.append(
                {col: value for col, value in zip(columns, row) if not _is_missing(value)}
            )
        return out

    def write(
        self,
        frame: Any,
        records: Sequence[dict[str, Any]],
        out_path: Path,
        *,
        driver: str | None = None,
    ) -> Path:
        """Write the labeled records back with the original geometries."""
        if len(records) != len(frame):
            raise ValueError(
                f"Record count {len(records)} does not match feature count {len(frame)}"
            )
        gpd = self._require_geopandas()
        labeled = gpd.GeoDataFrame(
            list(records),
            geometry=list(frame.geometry),
            crs=frame.crs,
        )
        out_path.parent.mkdir(parents=True, exist_ok=True)
        kwargs: dict[str, Any] = {}
        if driver is not None:
            kwargs["driver"] = driver
        elif out_path.suffix.lower() in {".geojson", ".json"}:
            kwargs["driver"] = "GeoJSON"
        labeled.to_file(out_path, **kwargs)
        LOGGER.info("Wrote %d labeled features to %s", len(labeled), out_path)
        return out_path

    @staticmethod
    def _require_geopandas() -> Any:
        try:
            import geopandas as gpd
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError("geopandas is required for reading feature datasets") from exc
        return gpd


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)
