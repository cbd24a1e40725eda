"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable value object compared by its fields.

    Provider payloads (Steam and Discord profiles) build on this.
    """

    model_config = ConfigDict(frozen=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Value object wrapping a single primitive, e.g. a provider account ID.

    Construct positionally (``SteamId("7656...")``); ``.root`` holds the
    primitive and ``model_dump()`` returns it unwrapped.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
