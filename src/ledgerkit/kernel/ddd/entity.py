"""Entity base class – identity-based equality."""

from __future__ import annotations

from ledgerkit.kernel.errors.domain import ValidationError
from ledgerkit.kernel.types.ids import EntityId


class Entity:
    """Something with a lifetime identity.

    Two entities are equal when they are of the same concrete class and carry
    the same ``id``, whatever their current state or version.
    """

    def __init__(self, id: EntityId) -> None:  # noqa: A002
        if not isinstance(id, EntityId):
            raise ValidationError(f"{type(self).__name__} id must be an EntityId, got {id!r}")
        self._id = id

    @property
    def id(self) -> EntityId:
        return self._id

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other._id == self._id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._id.value))

    def __repr__(self) -> str:  # pragma: no cover
        return f"{type(self).__name__}(id={str(self._id)!r})"


__all__ = ["Entity"]
