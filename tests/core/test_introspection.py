#!/usr/bin/env python3
"""Tests for property discovery and default-visibility metadata."""

from dataclasses import dataclass, fields
from typing import Annotated

import pytest

from jsonview.core.constants import ErrorCode
from jsonview.core.errors import PropertyAccessError
from jsonview.core.introspection import (
    AnnotationMetadata,
    JsonIgnore,
    PropertyDescriptor,
    declared_properties,
    ignored,
    iter_properties,
    json_ignore_properties,
    resolved_annotations,
)
from postponed_models import Account, Dangling, Invite
from sample_models import (
    Animal,
    Customer,
    Dog,
    Empty,
    Mammal,
    Point,
    Session,
    Slotted,
)


def names(obj):
    return [prop.name for prop in iter_properties(obj)]


class TestDeclaredProperties:
    """Tests for declared_properties."""

    def test_own_annotations_only(self):
        assert declared_properties(Animal) == ("legs",)
        assert declared_properties(Mammal) == ("fur",)
        assert declared_properties(Dog) == ("name",)

    def test_class_vars_skipped(self):
        assert "registry" not in declared_properties(Customer)
        assert declared_properties(Customer) == ("name", "address", "email", "password")

    def test_string_class_var_skipped(self):
        class Deferred:
            counter: "ClassVar[int]" = 0
            value: "int" = 1

        assert declared_properties(Deferred) == ("value",)

    def test_slots(self):
        assert declared_properties(Slotted) == ("a", "b")

    def test_single_string_slot(self):
        class One:
            __slots__ = "only"

        assert declared_properties(One) == ("only",)

    def test_plain_class_declares_nothing(self):
        assert declared_properties(Point) == ()
        assert declared_properties(Empty) == ()


class TestIterProperties:
    """Tests for iter_properties."""

    def test_most_derived_level_first(self):
        props = list(iter_properties(Dog()))
        assert [(p.name, p.declaring_type) for p in props] == [
            ("name", Dog),
            ("fur", Mammal),
            ("legs", Animal),
        ]

    def test_redeclared_name_visited_once(self):
        @dataclass
        class Base:
            value: int = 1

        @dataclass
        class Child(Base):
            value: int = 2
            extra: int = 3

        props = list(iter_properties(Child()))
        assert [(p.name, p.declaring_type) for p in props] == [
            ("value", Child),
            ("extra", Child),
        ]

    def test_instance_attributes(self):
        assert names(Point(1, 2)) == ["x", "y"]

    def test_underscore_instance_attributes_skipped(self):
        assert "_cache" not in names(Point(1, 2))

    def test_declared_underscore_names_kept(self):
        @dataclass
        class Record:
            _id: int = 5

        assert names(Record()) == ["_id"]

    def test_instance_extras_follow_runtime_declared(self):
        dog = Dog()
        dog.nickname = "r"
        props = list(iter_properties(dog))
        assert [(p.name, p.declaring_type) for p in props] == [
            ("name", Dog),
            ("nickname", Dog),
            ("fur", Mammal),
            ("legs", Animal),
        ]

    def test_slotted_unset_attribute_still_listed(self):
        assert names(Slotted(1)) == ["a", "b"]

    def test_empty_object(self):
        assert names(Empty()) == []
        assert names(object()) == []


class TestPropertyDescriptor:
    """Tests for PropertyDescriptor."""

    def test_read(self):
        assert PropertyDescriptor("x", Point).read(Point(1, 2)) == 1

    def test_read_failure(self):
        prop = PropertyDescriptor("b", Slotted)
        with pytest.raises(PropertyAccessError) as exc_info:
            prop.read(Slotted(1))

        error = exc_info.value
        assert error.name == "b"
        assert error.declaring_type is Slotted
        assert isinstance(error.cause, AttributeError)
        assert isinstance(error.__cause__, AttributeError)
        assert error.error_code == ErrorCode.ACCESS_ERROR
        assert "Slotted.b" in str(error)

    def test_read_wraps_any_failure(self):
        class Detached:
            a: int = 1
            b: int

            def __getattr__(self, name):
                raise RuntimeError("detached")

        with pytest.raises(PropertyAccessError) as exc_info:
            PropertyDescriptor("b", Detached).read(Detached())
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert "detached" in str(exc_info.value)

    def test_identity(self):
        assert PropertyDescriptor("x", Point) == PropertyDescriptor("x", Point)
        assert PropertyDescriptor("x", Point) != PropertyDescriptor("x", Dog)
        assert len({PropertyDescriptor("x", Point), PropertyDescriptor("x", Point)}) == 1


class TestMarkers:
    """Tests for the default-visibility markers."""

    def test_ignored_field_metadata(self):
        @dataclass
        class Account:
            pin: int = ignored(default=0, metadata={"unit": "digits"})

        (pin,) = fields(Account)
        assert pin.metadata["json_ignore"] is True
        assert pin.metadata["unit"] == "digits"
        assert Account().pin == 0

    def test_json_ignore_properties_decorator(self):
        assert Session.__json_ignore_properties__ == frozenset({"token"})


class TestAnnotationMetadata:
    """Tests for AnnotationMetadata."""

    @pytest.fixture
    def metadata(self):
        return AnnotationMetadata()

    def test_annotated_json_ignore(self, metadata):
        assert metadata.is_hidden_always(PropertyDescriptor("password", Customer))
        assert not metadata.is_hidden_always(PropertyDescriptor("name", Customer))

    def test_json_ignore_false(self, metadata):
        @dataclass
        class Visible:
            shown: Annotated[int, JsonIgnore(False)] = 1

        assert not metadata.is_hidden_always(PropertyDescriptor("shown", Visible))

    def test_ignored_field(self, metadata):
        assert metadata.is_hidden_always(PropertyDescriptor("secret", Session))

    def test_type_list(self, metadata):
        assert metadata.is_hidden_by_type_list(Session, "token")
        assert not metadata.is_hidden_by_type_list(Session, "user")

    def test_type_list_not_inherited(self, metadata):
        @dataclass
        class SubSession(Session):
            token2: str = ""

        assert not metadata.is_hidden_by_type_list(SubSession, "token")
        assert metadata.is_hidden(PropertyDescriptor("token", Session))

    def test_is_hidden_combines_both(self, metadata):
        assert metadata.is_hidden(PropertyDescriptor("token", Session))
        assert metadata.is_hidden(PropertyDescriptor("secret", Session))
        assert not metadata.is_hidden(PropertyDescriptor("user", Session))

    def test_plain_class(self, metadata):
        assert not metadata.is_hidden(PropertyDescriptor("x", Point))


class TestPostponedAnnotations:
    """Classes declared under ``from __future__ import annotations``."""

    def test_annotations_evaluated(self):
        hints = resolved_annotations(Account)
        assert hints["user"] is str
        assert hints["password"].__metadata__ == (JsonIgnore(),)

    def test_class_var_and_init_var_skipped(self):
        assert declared_properties(Account) == ("user", "password")
        assert declared_properties(Invite) == ("email", "code")
        assert names(Invite(seed=7)) == ["email", "code"]

    def test_unresolvable_names_fall_back_to_strings(self):
        assert resolved_annotations(Dangling)["link"] == "Optional[Missing]"
        assert declared_properties(Dangling) == ("name", "link")

    def test_annotated_json_ignore(self):
        metadata = AnnotationMetadata()
        assert metadata.is_hidden_always(PropertyDescriptor("password", Account))
        assert not metadata.is_hidden_always(PropertyDescriptor("user", Account))
