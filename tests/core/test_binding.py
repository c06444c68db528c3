"""Tests for binding construction, equality and resource resolution.

Critical Invariants:
- Parameters are validated once, at construction
- Equality is by value: target, type name, parameters
- Eager bindings never hold zero resources
- Lazy bindings resolve once and never again
"""

import uuid

import pytest

from bindery import (
    BindingError,
    BindingParameter,
    BindingType,
    ClassBinding,
    InMemoryRepository,
    MissingParameterError,
    NoSuchParameterError,
    NotInitializedError,
    Resource,
    ResourceBinding,
    UnsupportedLanguageError,
)
from bindery.core.binding import EagerResources, LazyResources, binding_from_dict, types_by_name
from bindery.errors import LoadingError


@pytest.fixture
def binding_type():
    return BindingType(
        "type",
        [
            BindingParameter("required", required=True),
            BindingParameter("optional", default="foo"),
        ],
    )


@pytest.fixture
def repo():
    return InMemoryRepository([Resource("/file1"), Resource("/file2")])


def test_unset_optional_parameters_get_defaults(binding_type):
    """Default filling: missing optional value equals the type default."""
    binding = ResourceBinding("/file1", binding_type, {"required": "bar"})

    assert binding.parameters == {"optional": "foo", "required": "bar"}
    assert binding.get_parameter_value("optional") == binding_type.get_parameter_value("optional")
    assert binding.has_parameter_value("optional")


def test_unknown_parameter_fails(binding_type):
    with pytest.raises(NoSuchParameterError):
        ResourceBinding("/file1", binding_type, {"required": "bar", "foo": "baz"})


def test_missing_required_parameter_fails(binding_type):
    with pytest.raises(MissingParameterError):
        ResourceBinding("/file1", binding_type, {"optional": "baz"})


def test_get_unknown_parameter_value_fails(binding_type):
    binding = ResourceBinding("/file1", binding_type, {"required": "bar"})

    assert not binding.has_parameter_value("foo")
    with pytest.raises(NoSuchParameterError):
        binding.get_parameter_value("foo")


def test_parameters_returns_a_copy(binding_type):
    binding = ResourceBinding("/file1", binding_type, {"required": "bar"})

    binding.parameters["required"] = "changed"

    assert binding.get_parameter_value("required") == "bar"


def test_unsupported_language_fails(binding_type):
    with pytest.raises(UnsupportedLanguageError, match='The language "xpath" is not supported.'):
        ResourceBinding("/file1", binding_type, {"required": "bar"}, language="xpath")


def test_type_must_be_binding_type():
    with pytest.raises(TypeError):
        ResourceBinding("/file1", "type")  # type: ignore[arg-type]


# Equality


def test_equal_when_explicit_value_equals_default(binding_type):
    """CRITICAL: an explicit default equals an omitted one.

    Why: Duplicate suppression compares the resolved parameter maps.
    """
    implicit = ResourceBinding("/file1", binding_type, {"required": "bar"})
    explicit = ResourceBinding("/file1", binding_type, {"required": "bar", "optional": "foo"})

    assert implicit.equals(explicit)
    assert implicit == explicit


def test_equality_ignores_uuid_and_type_instance(binding_type):
    same_schema = BindingType(
        "type",
        [BindingParameter("optional", default="foo"), BindingParameter("required", required=True)],
    )
    first = ResourceBinding("/file1", binding_type, {"required": "bar"})
    second = ResourceBinding("/file1", same_schema, {"required": "bar"})

    assert first.uuid != second.uuid
    assert first == second


def test_equality_ignores_resolution(binding_type, repo):
    eager = ResourceBinding.eager("/file1", binding_type, {"required": "bar"}, repo)
    lazy = ResourceBinding.lazy("/file1", binding_type, {"required": "bar"}, repo)

    assert eager == lazy


@pytest.mark.parametrize(
    "query, parameters",
    [
        ("/file2", {"required": "bar"}),
        ("/file1", {"required": "baz"}),
        ("/file1", {"required": "bar", "optional": "baz"}),
    ],
)
def test_not_equal_on_different_query_or_parameters(binding_type, query, parameters):
    binding = ResourceBinding("/file1", binding_type, {"required": "bar"})

    assert binding != ResourceBinding(query, binding_type, parameters)


def test_not_equal_on_different_type_name():
    first = ResourceBinding("/file1", BindingType("type1"))
    second = ResourceBinding("/file1", BindingType("type2"))

    assert first != second


def test_parameter_values_compare_strictly():
    """A string "2" is not the integer 2."""
    binding_type = BindingType("type", [BindingParameter("param")])

    as_string = ResourceBinding("/file1", binding_type, {"param": "2"})
    as_int = ResourceBinding("/file1", binding_type, {"param": 2})

    assert as_string != as_int


def test_class_binding_compares_class_name():
    binding_type = BindingType("type")

    assert ClassBinding("app.Foo", binding_type) == ClassBinding("app.Foo", binding_type)
    assert ClassBinding("app.Foo", binding_type) != ClassBinding("app.Bar", binding_type)
    assert ClassBinding("/file1", binding_type) != ResourceBinding("/file1", binding_type)


def test_matches_parameters_is_exact(binding_type):
    binding = ResourceBinding("/file1", binding_type, {"required": "bar"})

    assert binding.matches_parameters({"required": "bar", "optional": "foo"})
    assert not binding.matches_parameters({"required": "bar"})
    assert not binding.matches_parameters({"required": "baz", "optional": "foo"})


# Resolution


def test_eager_binding_snapshots_resources(binding_type, repo):
    binding = ResourceBinding.eager("/file*", binding_type, {"required": "bar"}, repo)
    repo.add(Resource("/file3"))

    assert [r.path for r in binding.get_resources()] == ["/file1", "/file2"]
    assert isinstance(binding.resolution, EagerResources)


def test_eager_binding_without_resources_fails(binding_type, repo):
    with pytest.raises(BindingError, match='Did not find any resources to bind for query "/missing".'):
        ResourceBinding.eager("/missing", binding_type, {"required": "bar"}, repo)


def test_eager_binding_checks_parameters_before_resources(binding_type, repo):
    with pytest.raises(MissingParameterError):
        ResourceBinding.eager("/missing", binding_type, {}, repo)


def test_lazy_binding_accepts_unmatched_query(binding_type, repo):
    binding = ResourceBinding.lazy("/later/*", binding_type, {"required": "bar"}, repo)
    repo.add(Resource("/later/file"))

    assert [r.path for r in binding.get_resources()] == ["/later/file"]


def test_lazy_binding_resolves_only_once(binding_type, repo):
    """CRITICAL: memoized, never re-resolved.

    Why: Resolution is part of a binding's lifetime, not of each access.
    """
    binding = ResourceBinding.lazy("/file*", binding_type, {"required": "bar"}, repo)
    assert isinstance(binding.resolution, LazyResources)
    assert not binding.resolution.is_resolved

    first = binding.get_resources()
    repo.add(Resource("/file3"))

    assert binding.resolution.is_resolved
    assert binding.get_resources() == first


def test_uninitialized_binding_cannot_resolve(binding_type, repo):
    binding = ResourceBinding("/file1", binding_type, {"required": "bar"})

    assert not binding.is_initialized
    with pytest.raises(NotInitializedError):
        binding.get_resources()

    binding.initialize(repo)

    assert [r.path for r in binding.get_resources()] == ["/file1"]


def test_initialize_twice_fails(binding_type, repo):
    binding = ResourceBinding.lazy("/file1", binding_type, {"required": "bar"}, repo)

    with pytest.raises(RuntimeError):
        binding.initialize(repo)


# Serialization


def test_restored_binding_equals_original(binding_type):
    original = ResourceBinding("/file*", binding_type, {"required": "bar"})

    restored = binding_from_dict(original.to_dict(), types_by_name({"type": binding_type}))

    assert isinstance(restored, ResourceBinding)
    assert restored == original
    assert restored.uuid == original.uuid
    assert not restored.is_initialized


def test_restored_class_binding_equals_original(binding_type):
    original = ClassBinding("app.Plugin", binding_type, {"required": "bar"}, uuid=uuid.uuid4())

    restored = binding_from_dict(original.to_dict(), types_by_name({"type": binding_type}))

    assert isinstance(restored, ClassBinding)
    assert restored == original
    assert restored.uuid == original.uuid


def test_unknown_kind_fails_to_load(binding_type):
    data = ClassBinding("app.Plugin", binding_type, {"required": "bar"}).to_dict()
    data["kind"] = "nope"

    with pytest.raises(LoadingError):
        binding_from_dict(data, types_by_name({"type": binding_type}))
