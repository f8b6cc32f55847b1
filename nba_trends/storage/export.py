"""Flat-file export of the cleaned datasets (CSV or Parquet)."""

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import structlog

from nba_trends.processing.cleaner import blank_to_missing
from nba_trends.processing.schema import SCHEMAS, apply_schema

logger = structlog.get_logger(__name__)

SUPPORTED_FORMATS = ("csv", "parquet")


def dataset_path(output_dir: Path, dataset: str, fmt: str) -> Path:
    """Path of one exported dataset, e.g. ``data/teams.csv``."""
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unknown export format '{fmt}'")
    return Path(output_dir) / f"{dataset}.{fmt}"


def write_dataset(frame: pd.DataFrame, output_dir: Path, dataset: str, fmt: str = "csv") -> Path:
    """
    Write one dataset to ``output_dir``.

    Parquet keeps the nullable column types; CSV writes missing cells empty
    and relies on ``read_dataset`` to re-type them.

    Returns:
        Path of the written file.
    """
    path = dataset_path(output_dir, dataset, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "csv":
        frame.to_csv(path, index=False)
    else:
        table = pa.Table.from_pandas(frame, preserve_index=False)
        pq.write_table(table, path)

    logger.info("Exported dataset", dataset=dataset, path=str(path), rows=len(frame))
    return path


def read_dataset(path: Path, dataset: str | None = None) -> pd.DataFrame:
    """
    Read an exported dataset and re-apply its typed schema.

    Args:
        path: CSV or Parquet file.
        dataset: "players" or "teams". If None, inferred from the file name.

    Raises:
        ValueError: If the format or dataset cannot be determined.
    """
    path = Path(path)
    dataset = dataset or path.stem
    if dataset not in SCHEMAS:
        raise ValueError(f"Unknown dataset '{dataset}'; expected one of {sorted(SCHEMAS)}")

    suffix = path.suffix.lstrip(".").lower()
    if suffix == "csv":
        frame = blank_to_missing(pd.read_csv(path, dtype=str, keep_default_na=False))
    elif suffix == "parquet":
        frame = pq.read_table(path).to_pandas()
    else:
        raise ValueError(f"Unknown export format '{suffix}'")

    logger.debug("Read dataset", dataset=dataset, path=str(path), rows=len(frame))
    return apply_schema(frame, SCHEMAS[dataset])
