"""Tests for the validator registry."""

import pytest

from judge.elements import Element
from judge.errors import UnknownValidatorError
from judge.registry import ValidatorRegistry, validator
from judge.validation import Validation, closed

BUILTIN_KINDS = [
    "acceptance",
    "confirmation",
    "exclusion",
    "format",
    "inclusion",
    "length",
    "numericality",
    "presence",
    "uniqueness",
]


class TestValidatorRegistry:
    def test_builtins_are_registered(self):
        assert ValidatorRegistry.list_registered() == BUILTIN_KINDS

    def test_resolve_unknown_kind(self):
        with pytest.raises(UnknownValidatorError) as exc_info:
            ValidatorRegistry.resolve("postcode")
        assert exc_info.value.kind == "postcode"
        assert "presence" in exc_info.value.available

    def test_lookup_is_case_sensitive(self):
        assert not ValidatorRegistry.is_registered("Presence")
        with pytest.raises(UnknownValidatorError):
            ValidatorRegistry.resolve("Presence")

    def test_register_custom_kind(self):
        def postcode(element, options, messages) -> Validation:
            return closed([] if len(element.value) == 5 else [messages["invalid"]])

        ValidatorRegistry.register("postcode", postcode)
        fn = ValidatorRegistry.resolve("postcode")
        assert fn(Element(value="1234"), {}, {"invalid": "bad postcode"}).messages == ["bad postcode"]

    def test_last_registration_wins(self):
        def always_valid(element, options, messages) -> Validation:
            return closed([])

        ValidatorRegistry.register("presence", always_valid)
        assert ValidatorRegistry.resolve("presence") is always_valid

    def test_decorator_registers(self):
        @validator("even_length")
        def even_length(element, options, messages) -> Validation:
            return closed([] if len(element.value) % 2 == 0 else ["odd length"])

        assert ValidatorRegistry.resolve("even_length") is even_length

    def test_clear(self):
        ValidatorRegistry.clear()
        assert ValidatorRegistry.list_registered() == []


class TestRegistrySubclass:
    def test_subclass_has_its_own_validators(self):
        class TenantRegistry(ValidatorRegistry):
            pass

        TenantRegistry.register("tenant_only", lambda element, options, messages: closed([]))

        assert TenantRegistry.list_registered() == ["tenant_only"]
        assert not ValidatorRegistry.is_registered("tenant_only")
        assert ValidatorRegistry.list_registered() == BUILTIN_KINDS

    def test_clearing_subclass_leaves_process_registry(self):
        class TenantRegistry(ValidatorRegistry):
            pass

        TenantRegistry.clear()
        assert ValidatorRegistry.list_registered() == BUILTIN_KINDS
