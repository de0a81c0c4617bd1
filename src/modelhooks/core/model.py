"""
Model base classes and metadata orchestration for modelhooks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from ..events.concerns import HasEvents
from ..events.payloads import PayloadFactory
from ..events.registry import ModelEventRegistry, registry as default_registry


class ModelConfigurationError(Exception):
    """Raised when a model class is misconfigured."""


@dataclass
class ModelOptions:
    """
    Container for model metadata calculated by :class:`ModelMeta`.
    """

    model: Type["Model"]
    abstract: bool = False
    observables: Tuple[str, ...] = ()
    dispatches_events: Dict[str, PayloadFactory] = field(default_factory=dict)
    registry: ModelEventRegistry = default_registry


TModel = TypeVar("TModel", bound="Model")


class ModelMeta(type):
    """
    Metaclass collecting ``Meta`` options into :class:`ModelOptions`.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ModelMeta":
        cls = super().__new__(mcls, name, bases, attrs)

        meta = getattr(cls, "Meta", None)
        # Abstract is never inherited from a parent's Meta.
        abstract = bool(getattr(attrs.get("Meta"), "abstract", False))
        observables = tuple(getattr(meta, "observables", ()))
        dispatches_events = dict(getattr(meta, "dispatches_events", {}))
        event_registry = getattr(meta, "registry", None) or default_registry

        for observable in observables:
            if not isinstance(observable, str):
                raise ModelConfigurationError(
                    f"Observable event names on model '{name}' must be strings, got {observable!r}"
                )
        for event, factory in dispatches_events.items():
            if not isinstance(event, str):
                raise ModelConfigurationError(
                    f"Custom event keys on model '{name}' must be strings, got {event!r}"
                )
            if not callable(factory):
                raise ModelConfigurationError(
                    f"Custom event '{event}' on model '{name}' must map to a callable"
                )

        cls._meta = ModelOptions(
            model=cls,
            abstract=abstract,
            observables=observables,
            dispatches_events=dispatches_events,
            registry=event_registry,
        )
        return cls


class Model(HasEvents, metaclass=ModelMeta):
    """
    Base model holding attributes and driving the save/delete lifecycle.

    Storage is left to subclasses: ``perform_insert``, ``perform_update``
    and ``perform_delete`` are called between the lifecycle events and do
    nothing by default.
    """

    class Meta:
        abstract = True

    def __init__(self, **attributes: Any) -> None:
        if self._meta.abstract:
            raise ModelConfigurationError(
                f"Abstract model '{self.__class__.__name__}' cannot be instantiated."
            )
        self._attributes: Dict[str, Any] = {}
        self._original: Dict[str, Any] = {}
        self._exists = False
        for name, value in attributes.items():
            setattr(self, name, value)

    @classmethod
    def hydrate(cls: Type[TModel], **attributes: Any) -> TModel:
        """
        Build an instance representing an already persisted record.
        """
        instance = cls(**attributes)
        instance._exists = True
        instance.sync_original()
        return instance

    # Attribute access -------------------------------------------------
    def __getattribute__(self, name: str) -> Any:
        # Stored attributes win over class members such as ``updated``.
        if not name.startswith("_"):
            attributes = object.__getattribute__(self, "__dict__").get("_attributes")
            if attributes is not None and name in attributes:
                return attributes[name]
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        else:
            self._attributes[name] = value

    def __repr__(self) -> str:
        attribute_parts = ", ".join(
            f"{name}={value!r}" for name, value in self._attributes.items()
        )
        return f"<{self.__class__.__name__} {attribute_parts}>"

    @property
    def exists(self) -> bool:
        return self._exists

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def get_dirty(self) -> Dict[str, Any]:
        return {
            name: value
            for name, value in self._attributes.items()
            if name not in self._original or self._original[name] != value
        }

    def is_dirty(self) -> bool:
        return bool(self.get_dirty())

    def sync_original(self) -> None:
        self._original = dict(self._attributes)

    # Lifecycle --------------------------------------------------------
    def save(self) -> bool:
        """
        Save the model, firing ``saving`` and ``creating``/``updating``
        (vetoable) and ``created``/``updated`` and ``saved`` afterwards.
        """
        if self.fire_model_event("saving") is False:
            return False

        if self._exists:
            saved = self._perform_update() if self.is_dirty() else True
        else:
            saved = self._perform_insert()

        if saved:
            self.fire_model_event("saved", halt=False)
            self.sync_original()
        return saved

    def delete(self) -> Optional[bool]:
        if not self._exists:
            return None
        if self.fire_model_event("deleting") is False:
            return False
        self._perform_delete_on_model()
        self.fire_model_event("deleted", halt=False)
        return True

    def _perform_insert(self) -> bool:
        if self.fire_model_event("creating") is False:
            return False
        self.perform_insert()
        self._exists = True
        self.fire_model_event("created", halt=False)
        return True

    def _perform_update(self) -> bool:
        if self.fire_model_event("updating") is False:
            return False
        self.perform_update(self.get_dirty())
        self.fire_model_event("updated", halt=False)
        return True

    def _perform_delete_on_model(self) -> None:
        self.perform_delete()
        self._exists = False

    # Storage hooks ----------------------------------------------------
    def perform_insert(self) -> None:
        return None

    def perform_update(self, changes: Dict[str, Any]) -> None:
        return None

    def perform_delete(self) -> None:
        return None
