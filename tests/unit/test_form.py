"""Tests for PetForm – editing and validation."""

import pytest

from pet_manager.app import FormError, PetForm


def _filled(name="Rex", category="dog", age="3") -> PetForm:
    return PetForm(name=name, category=category, age=age)


class TestEditing:
    def test_typing_goes_to_active_field(self):
        form = PetForm()
        for ch in "Rex":
            form.type_char(ch)
        form.next_field()
        form.type_char("d")
        assert form.name == "Rex"
        assert form.category == "d"

    def test_erase(self):
        form = _filled()
        form.erase()
        assert form.name == "Re"

    def test_erase_on_empty_field_is_noop(self):
        form = PetForm()
        form.erase()
        assert form.name == ""

    def test_field_navigation_wraps(self):
        form = PetForm()
        form.prev_field()
        assert form.active_field == "age"
        form.next_field()
        assert form.active_field == "name"

    def test_snapshot_is_independent(self):
        form = _filled()
        snap = form.snapshot()
        form.type_char("!")
        assert snap.name == "Rex"


class TestValidation:
    def test_values_are_stripped_and_typed(self):
        assert _filled(name=" Rex ", age=" 3 ").values() == ("Rex", "dog", 3)

    @pytest.mark.parametrize("kwargs,message", [
        ({"name": "  "}, "Name"),
        ({"category": ""}, "Category"),
        ({"age": ""}, "Age"),
        ({"age": "-1"}, "Age"),
        ({"age": "two"}, "Age"),
        ({"age": "1.5"}, "Age"),
    ])
    def test_invalid(self, kwargs, message):
        with pytest.raises(FormError, match=message):
            _filled(**kwargs).values()
