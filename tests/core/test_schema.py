"""Tests for binding types and parameters.

Critical Invariants:
- Required parameters never carry defaults
- Names start with a letter
- Parameters are sorted by name, so equal schemas compare equal
"""

import pytest

from bindery import BindingParameter, BindingType, ClassBinding, NoSuchParameterError, ResourceBinding
from bindery.errors import LoadingError


def test_required_parameter_with_default_is_rejected():
    """CRITICAL: required implies no default.

    Why: A default would never be used and hides a schema mistake.
    """
    with pytest.raises(ValueError, match="Required parameters must not have default values."):
        BindingParameter("param", required=True, default="foo")


def test_optional_parameter_keeps_default():
    parameter = BindingParameter("param", default="foo")

    assert parameter.optional
    assert not parameter.required
    assert parameter.default == "foo"


@pytest.mark.parametrize("name", ["", "1param", "_param", "-x"])
def test_parameter_name_must_start_with_letter(name):
    with pytest.raises(ValueError):
        BindingParameter(name)


@pytest.mark.parametrize("name", ["", "1type", "/type"])
def test_type_name_must_start_with_letter(name):
    with pytest.raises(ValueError):
        BindingType(name)


def test_type_name_must_be_string():
    with pytest.raises(TypeError):
        BindingType(42)  # type: ignore[arg-type]


def test_parameters_are_sorted_by_name():
    """Declaration order does not matter for comparison."""
    first = BindingType("type", [BindingParameter("b"), BindingParameter("a")])
    second = BindingType("type", [BindingParameter("a"), BindingParameter("b")])

    assert first.get_parameter_names() == ["a", "b"]
    assert first == second


def test_parameter_values_list_optional_defaults_only():
    binding_type = BindingType(
        "type",
        [
            BindingParameter("required", required=True),
            BindingParameter("optional", default="foo"),
            BindingParameter("nullable"),
        ],
    )

    assert binding_type.get_parameter_values() == {"nullable": None, "optional": "foo"}
    assert binding_type.get_parameter_values(include_required=True) == {
        "nullable": None,
        "optional": "foo",
        "required": None,
    }


def test_get_parameter_value_returns_default():
    binding_type = BindingType("type", [BindingParameter("param", default="foo")])

    assert binding_type.has_parameter("param")
    assert binding_type.get_parameter_value("param") == "foo"


def test_get_unknown_parameter_fails():
    binding_type = BindingType("type")

    assert not binding_type.has_parameter("foo")
    with pytest.raises(NoSuchParameterError, match='The parameter "foo" does not exist on type "type".'):
        binding_type.get_parameter("foo")


def test_required_and_optional_flags():
    only_required = BindingType("a", [BindingParameter("x", required=True)])
    only_optional = BindingType("b", [BindingParameter("x")])
    empty = BindingType("c")

    assert only_required.has_required_parameters()
    assert not only_required.has_optional_parameters()
    assert only_optional.has_optional_parameters()
    assert not only_optional.has_required_parameters()
    assert not empty.has_required_parameters()
    assert not empty.has_optional_parameters()


def test_accepts_any_binding_without_binding_class():
    assert BindingType("type").accepts_binding(ClassBinding)
    assert BindingType("type").accepts_binding(ResourceBinding)


def test_binding_class_restricts_accepted_bindings():
    binding_type = BindingType("type", binding_class=ClassBinding)

    assert binding_type.accepts_binding(ClassBinding)
    assert not binding_type.accepts_binding(ResourceBinding)


def test_type_survives_serialization():
    binding_type = BindingType(
        "type",
        [BindingParameter("a", required=True), BindingParameter("b", default=[1, 2])],
        binding_class=ClassBinding,
    )

    restored = BindingType.from_dict(binding_type.to_dict())

    assert restored == binding_type
    assert restored.binding_class is ClassBinding


def test_unknown_binding_class_fails_to_load():
    data = {"name": "type", "parameters": [], "binding_class": "bindery.nowhere.Missing"}

    with pytest.raises(LoadingError):
        BindingType.from_dict(data)
