"""Registry for season table builders."""

from typing import Type

from nba_trends.ingestion.base import BaseSeasonBuilder

# Registry of builder classes, keyed by dataset name
_BUILDER_REGISTRY: dict[str, Type[BaseSeasonBuilder]] = {}


def register_builder(cls: Type[BaseSeasonBuilder]) -> Type[BaseSeasonBuilder]:
    """
    Register a builder class.

    This is intended to be used as a decorator.

    Example:
        @register_builder
        class TeamSeasonBuilder(BaseSeasonBuilder):
            dataset = "teams"
            ...
    """
    if not hasattr(cls, "dataset"):
        raise ValueError(f"Builder class {cls.__name__} must define 'dataset'")

    _BUILDER_REGISTRY[cls.dataset] = cls
    return cls


def get_builder(dataset: str) -> Type[BaseSeasonBuilder] | None:
    """Get a builder class by dataset name, or None."""
    return _BUILDER_REGISTRY.get(dataset)


def create_builder(dataset: str, **kwargs) -> BaseSeasonBuilder | None:
    """
    Create a builder instance by dataset name.

    Args:
        dataset: Dataset name ("players" or "teams").
        **kwargs: Arguments to pass to the builder constructor.

    Returns:
        Builder instance if found, None otherwise.
    """
    builder_class = get_builder(dataset)
    if builder_class is None:
        return None
    return builder_class(**kwargs)
