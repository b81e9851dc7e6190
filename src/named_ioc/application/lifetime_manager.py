import logging
import threading
from typing import Any, Callable, Dict

from named_ioc.domain import ILifetimeManager, Lifetime, Registration

logger = logging.getLogger(__name__)


class LifetimeManager(ILifetimeManager):
    """Applies lifetime policies and owns the singleton cache.

    Singleton construction runs under one re-entrant lock shared by every
    name. Two threads racing to build the same singleton construct it once,
    and a dependency cycle spanning two threads cannot deadlock: the thread
    holding the lock walks the whole cycle itself and the per-thread path
    reports it. A failed construction leaves the entry unbuilt.

    Attributes:
        _singleton_cache: Built singleton instances keyed by registration name.
        _construction_lock: Guards singleton check-then-create.
    """

    def __init__(self) -> None:
        """Initialize the lifetime manager with an empty cache."""
        self._singleton_cache: Dict[str, Any] = {}
        self._construction_lock = threading.RLock()

    def get_or_create(self, registration: Registration, factory: Callable[[], Any]) -> Any:
        """Get an existing instance or create a new one based on lifetime.

        Args:
            registration: The registration being resolved.
            factory: Function constructing a new instance if needed.

        Returns:
            Instance according to lifetime rules:
            - Value/Type: The registered target itself, by identity
            - Singleton: The cached instance, built and cached on first use
            - Transient: A newly constructed instance

        Example:
            >>> registration = Registration.from_options("Repo", Repo, {"singleton": True})
            >>> repo = manager.get_or_create(registration, lambda: Repo())
        """
        lifetime = registration.lifetime

        if lifetime in (Lifetime.VALUE, Lifetime.TYPE):
            return registration.target

        if lifetime == Lifetime.SINGLETON:
            name = registration.name
            if name in self._singleton_cache:
                return self._singleton_cache[name]

            with self._construction_lock:
                # Another thread may have finished the build while we waited
                if name not in self._singleton_cache:
                    instance = factory()
                    self._singleton_cache[name] = instance
                    logger.debug("Built singleton '%s'", name)
            return self._singleton_cache[name]

        # Lifetime.TRANSIENT
        return factory()

    def is_built(self, name: str) -> bool:
        """Whether a singleton instance is cached under ``name``."""
        return name in self._singleton_cache

    def clear_cache(self) -> None:
        """Clear all cached singleton instances.

        Only used by test support; a serving container never invalidates singletons.
        """
        self._singleton_cache.clear()
