"""Dataset export and reload."""

from nba_trends.storage.export import SUPPORTED_FORMATS, dataset_path, read_dataset, write_dataset

__all__ = ["SUPPORTED_FORMATS", "dataset_path", "read_dataset", "write_dataset"]
