"""Resource wrappers.

A resource defers serialization of an underlying value until ``resolve()`` is
called. ``ResponseBuilder.success`` resolves any ``Resolvable`` it receives
and inspects its ``resource`` attribute for pagination.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Resolvable(Protocol):
    """Capability of a resource wrapper."""

    resource: Any

    def resolve(self) -> Any: ...


class JsonResource:
    """Wrap a single value and turn it into plain JSON-ready data.

    Subclasses override ``to_dict`` to shape the output::

        class UserResource(JsonResource):
            def to_dict(self) -> dict:
                return {"id": self.resource.id, "email": self.resource.email}
    """

    def __init__(self, resource: Any) -> None:
        self.resource = resource

    def to_dict(self) -> Any:
        value = self.resource
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json")
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return dataclasses.asdict(value)
        if isinstance(value, Mapping):
            return dict(value)
        return value

    def resolve(self) -> Any:
        return self.to_dict()

    @classmethod
    def collection(cls, resource: Any) -> "ResourceCollection":
        """Wrap a list or paginator, resolving each item with this class."""
        return ResourceCollection(resource, item_class=cls)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.resource!r})"


class ResourceCollection(JsonResource):
    """Wrap an iterable or a paginator of items.

    Paginators must iterate over the items of their current page. The
    paginator itself stays reachable through ``resource`` so that the
    builder can attach pagination metadata; only the items of the current
    page end up under ``data``.
    """

    item_class: type[JsonResource] = JsonResource

    def __init__(self, resource: Any, item_class: type[JsonResource] | None = None) -> None:
        super().__init__(resource)
        if item_class is not None:
            self.item_class = item_class

    def to_dict(self) -> list[Any]:
        return [self.item_class(item).resolve() for item in self.resource]
