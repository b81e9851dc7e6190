"""Unit tests for LifetimeManager."""

import threading
import time

import pytest

from named_ioc.application.lifetime_manager import LifetimeManager
from named_ioc.domain import ILifetimeManager, Lifetime, Registration


class Service:
    pass


def make_registration(name, lifetime, target=Service):
    return Registration(name=name, target=target, lifetime=lifetime)


class TestLifetimeManagerInitialization:
    """Test cases for LifetimeManager initialization."""

    def test_manager_initialization(self):
        """Test that manager initializes with an empty cache."""
        manager = LifetimeManager()
        assert manager._singleton_cache == {}

    def test_manager_implements_interface(self):
        """Test that LifetimeManager implements ILifetimeManager."""
        assert isinstance(LifetimeManager(), ILifetimeManager)


class TestValueAndTypeLifetime:
    """Test cases for value and type lifetimes."""

    def test_value_returns_target(self):
        """Test that a value registration returns its target without calling the factory."""
        manager = LifetimeManager()
        value = ["mongodb://x"]
        registration = make_registration("Conn", Lifetime.VALUE, target=value)

        def factory():
            raise AssertionError("factory must not be called")

        assert manager.get_or_create(registration, factory) is value

    def test_type_returns_class(self):
        """Test that a type registration returns the class itself."""
        manager = LifetimeManager()
        registration = make_registration("ServiceType", Lifetime.TYPE)

        assert manager.get_or_create(registration, lambda: Service()) is Service
        assert not manager.is_built("ServiceType")


class TestSingletonLifetime:
    """Test cases for singleton lifetime management."""

    def test_singleton_creates_instance_once(self):
        """Test that singleton creates instance only once."""
        manager = LifetimeManager()
        registration = make_registration("Service", Lifetime.SINGLETON)
        calls = []

        def factory():
            calls.append(1)
            return Service()

        instance1 = manager.get_or_create(registration, factory)
        instance2 = manager.get_or_create(registration, factory)

        assert instance1 is instance2
        assert len(calls) == 1
        assert manager.is_built("Service")

    def test_singletons_are_keyed_by_name(self):
        """Test that two names for the same class get separate instances."""
        manager = LifetimeManager()
        first = manager.get_or_create(make_registration("First", Lifetime.SINGLETON), Service)
        second = manager.get_or_create(make_registration("Second", Lifetime.SINGLETON), Service)

        assert first is not second

    def test_failed_construction_is_not_cached(self):
        """Test that a raising factory leaves the singleton unbuilt."""
        manager = LifetimeManager()
        registration = make_registration("Service", Lifetime.SINGLETON)

        def failing_factory():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            manager.get_or_create(registration, failing_factory)

        assert not manager.is_built("Service")
        instance = manager.get_or_create(registration, Service)
        assert isinstance(instance, Service)

    def test_concurrent_first_resolution_builds_once(self):
        """Test that racing threads construct a singleton exactly once."""
        manager = LifetimeManager()
        registration = make_registration("Service", Lifetime.SINGLETON)
        calls = []
        results = []
        barrier = threading.Barrier(8)

        def slow_factory():
            calls.append(1)
            time.sleep(0.05)
            return Service()

        def worker():
            barrier.wait()
            results.append(manager.get_or_create(registration, slow_factory))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    def test_clear_cache(self):
        """Test that clear_cache drops built singletons."""
        manager = LifetimeManager()
        registration = make_registration("Service", Lifetime.SINGLETON)
        first = manager.get_or_create(registration, Service)

        manager.clear_cache()

        assert not manager.is_built("Service")
        assert manager.get_or_create(registration, Service) is not first


class TestTransientLifetime:
    """Test cases for transient lifetime management."""

    def test_transient_creates_new_instances(self):
        """Test that transient calls the factory every time."""
        manager = LifetimeManager()
        registration = make_registration("Service", Lifetime.TRANSIENT)

        instance1 = manager.get_or_create(registration, Service)
        instance2 = manager.get_or_create(registration, Service)

        assert instance1 is not instance2
        assert not manager.is_built("Service")

    def test_transient_propagates_factory_errors(self):
        """Test that factory errors are not swallowed."""
        manager = LifetimeManager()
        registration = make_registration("Service", Lifetime.TRANSIENT)

        def failing_factory():
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            manager.get_or_create(registration, failing_factory)
