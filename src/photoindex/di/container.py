from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Set, Type

from .lifetime import Lifetime
from ..errors import CircularDependencyError, ResolutionError


@dataclass
class Registration:
    interface: Type
    implementation: Optional[Type] = None
    lifetime: Lifetime = Lifetime.TRANSIENT
    factory: Optional[Callable[[], Any]] = None
    kwargs: Dict[str, Any] = field(default_factory=dict)


class Scope:
    """Scoped container that caches SCOPED registrations for its lifetime."""

    def __init__(self, container: Container):
        self._container = container
        self._instances: Dict[Type, Any] = {}

    def resolve(self, interface: Type) -> Any:
        reg = self._container._get_registration(interface)
        if reg.lifetime == Lifetime.SCOPED:
            if interface not in self._instances:
                self._instances[interface] = self._container._create(reg)
            return self._instances[interface]
        return self._container.resolve(interface)

    def dispose(self):
        self._instances.clear()


class Container:
    """Tiny service locator used to wire the manager and its collaborators."""

    def __init__(self):
        self._registrations: Dict[Type, Registration] = {}
        self._singleton_instances: Dict[Type, Any] = {}
        self._resolving: Set[Type] = set()
        self._lock = threading.RLock()

    # --- Registration API ---

    def register_singleton(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        self._register(interface, implementation, Lifetime.SINGLETON, kwargs)

    def register_transient(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        self._register(interface, implementation, Lifetime.TRANSIENT, kwargs)

    def register_scoped(self, interface: Type, implementation: Optional[Type] = None, **kwargs):
        self._register(interface, implementation, Lifetime.SCOPED, kwargs)

    def register_factory(self, interface: Type, factory: Callable[[], Any], singleton: bool = False):
        self._registrations[interface] = Registration(
            interface=interface,
            lifetime=Lifetime.SINGLETON if singleton else Lifetime.TRANSIENT,
            factory=factory,
        )
        self._singleton_instances.pop(interface, None)

    def register_instance(self, interface: Type, instance: Any):
        self._registrations[interface] = Registration(
            interface=interface, lifetime=Lifetime.SINGLETON
        )
        self._singleton_instances[interface] = instance

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations

    # --- Resolution ---

    def resolve(self, interface: Type) -> Any:
        with self._lock:
            reg = self._get_registration(interface)
            if reg.lifetime == Lifetime.SINGLETON and interface in self._singleton_instances:
                return self._singleton_instances[interface]
            if interface in self._resolving:
                raise CircularDependencyError(
                    f"Circular dependency detected for {interface}"
                )
            self._resolving.add(interface)
            try:
                instance = self._create(reg)
                if reg.lifetime == Lifetime.SINGLETON:
                    self._singleton_instances[interface] = instance
                return instance
            finally:
                self._resolving.discard(interface)

    def create_scope(self) -> Scope:
        return Scope(self)

    # --- Helpers ---

    def _register(self, interface: Type, implementation: Optional[Type], lifetime: Lifetime, kwargs):
        self._registrations[interface] = Registration(
            interface=interface,
            implementation=implementation or interface,
            lifetime=lifetime,
            kwargs=kwargs,
        )
        self._singleton_instances.pop(interface, None)

    def _get_registration(self, interface: Type) -> Registration:
        if interface not in self._registrations:
            raise ResolutionError(f"No registration found for {interface}")
        return self._registrations[interface]

    def _create(self, reg: Registration) -> Any:
        if reg.factory:
            return reg.factory()
        impl = reg.implementation or reg.interface
        return impl(**reg.kwargs)
