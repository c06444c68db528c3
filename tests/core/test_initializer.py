"""Tests for binding initializers."""

from bindery import (
    BindingType,
    ClassBinding,
    InitializerChain,
    InMemoryRepository,
    RepositoryInitializer,
    Resource,
    ResourceBinding,
)
from bindery.core.binding import BindingInitializer


class CountingInitializer:
    """Accepts class bindings and records every call."""

    def __init__(self):
        self.accept_calls = []
        self.initialized = []

    def accepts_binding(self, binding_class):
        self.accept_calls.append(binding_class)
        return issubclass(binding_class, ClassBinding)

    def initialize_binding(self, binding):
        self.initialized.append(binding)


def test_initializers_satisfy_protocol():
    assert isinstance(RepositoryInitializer(InMemoryRepository()), BindingInitializer)
    assert isinstance(CountingInitializer(), BindingInitializer)


def test_repository_initializer_attaches_repository():
    repo = InMemoryRepository([Resource("/file1")])
    binding = ResourceBinding("/file1", BindingType("type"))

    RepositoryInitializer(repo).initialize_binding(binding)

    assert [r.path for r in binding.get_resources()] == ["/file1"]


def test_repository_initializer_leaves_initialized_bindings_alone():
    old_repo = InMemoryRepository([Resource("/file1")])
    new_repo = InMemoryRepository()
    binding = ResourceBinding.lazy("/file1", BindingType("type"), {}, old_repo)

    RepositoryInitializer(new_repo).initialize_binding(binding)

    assert len(binding.get_resources()) == 1


def test_chain_asks_each_class_once():
    """Acceptance is cached per binding class."""
    counting = CountingInitializer()
    chain = InitializerChain([counting])
    binding_type = BindingType("type")

    chain.initialize(ClassBinding("app.A", binding_type))
    chain.initialize(ClassBinding("app.B", binding_type))
    chain.initialize(ResourceBinding("/file1", binding_type))

    assert counting.accept_calls == [ClassBinding, ResourceBinding]
    assert [b.class_name for b in counting.initialized] == ["app.A", "app.B"]


def test_chain_added_initializer_resets_cache():
    chain = InitializerChain()
    binding_type = BindingType("type")
    chain.initialize(ClassBinding("app.A", binding_type))

    counting = CountingInitializer()
    chain.add(counting)
    chain.initialize(ClassBinding("app.B", binding_type))

    assert len(chain) == 1
    assert [b.class_name for b in counting.initialized] == ["app.B"]
