import pytest
from django import forms

from bloodbank.exceptions import IneligibleDonation
from bloodbank.forms import (
    BloodTypeField, CompatibleSearchForm, EmergencyDonationForm, LoginForm,
    RegularDonationForm, SignupForm, TrueFalseField, menu_choice_field,
)
from bloodbank.models import DonationKind, EmergencyDonation, RegularDonation


@pytest.mark.parametrize("raw, expected", [("a", "A"), ("Ab", "AB"), (" o ", "O")])
def test_blood_type_field_normalizes(raw, expected):
    assert BloodTypeField().clean(raw) == expected


@pytest.mark.parametrize("raw", ["", "Z", "A+"])
def test_blood_type_field_rejects(raw):
    with pytest.raises(forms.ValidationError) as excinfo:
        BloodTypeField().clean(raw)
    assert excinfo.value.messages == ["Invalid Blood Type (Blood Type: A, B, AB, O)"]


@pytest.mark.parametrize("raw, expected", [("true", True), ("FALSE", False), (" True ", True)])
def test_true_false_field(raw, expected):
    assert TrueFalseField().clean(raw) is expected


@pytest.mark.parametrize("raw", ["yes", "1", ""])
def test_true_false_field_rejects_other_words(raw):
    with pytest.raises(forms.ValidationError):
        TrueFalseField().clean(raw)


def test_menu_choice_field_messages():
    field = menu_choice_field(["Login", "Create New Account", "Exit"])
    assert field.clean("2") == 2
    with pytest.raises(forms.ValidationError) as excinfo:
        field.clean("x")
    assert excinfo.value.messages == ["Invalid input. Please enter a valid number"]
    with pytest.raises(forms.ValidationError) as excinfo:
        field.clean("4")
    assert excinfo.value.messages == ["Invalid choice. Please try again"]


def test_amount_must_be_positive_number():
    form = RegularDonationForm({"blood_type": "A", "donor_name": "Al", "amount_ml": "0", "age": "30"})
    assert not form.is_valid()
    assert form.errors["amount_ml"] == ["Amount must be positive"]

    form = RegularDonationForm({"blood_type": "A", "donor_name": "Al", "amount_ml": "lots", "age": "30"})
    assert form.errors["amount_ml"] == ["Invalid input. Please enter a numeric value"]


def test_age_may_be_zero_but_not_negative():
    data = {"blood_type": "A", "donor_name": "Al", "amount_ml": "100"}
    assert RegularDonationForm({**data, "age": "0"}).is_valid()
    form = RegularDonationForm({**data, "age": "-1"})
    assert form.errors["age"] == ["Age must be positive"]


def test_fields_are_asked_in_prompt_order():
    assert list(RegularDonationForm().fields) == ["blood_type", "donor_name", "amount_ml", "age"]
    assert list(EmergencyDonationForm().fields) == ["blood_type", "donor_name", "amount_ml", "is_urgent"]


def test_regular_form_saves_into_registry(registry):
    form = RegularDonationForm({"blood_type": "b", "donor_name": "Bea", "amount_ml": "450", "age": "18"})
    assert form.is_valid()
    donation = form.save(registry)
    assert donation == RegularDonation("Bea", "B", 450, 18)
    assert registry.list_by_kind(DonationKind.REGULAR) == [donation]


def test_emergency_form_rejection_propagates(registry):
    form = EmergencyDonationForm(
        {"blood_type": "O", "donor_name": "Oz", "amount_ml": "300", "is_urgent": "false"}
    )
    assert form.is_valid()
    assert form.build_donation() == EmergencyDonation("Oz", "O", 300, False)
    with pytest.raises(IneligibleDonation):
        form.save(registry)
    assert len(registry) == 0


def test_signup_form_flags_duplicates(directory):
    directory.register("alice", "pw")
    form = SignupForm({"username": "alice", "password": "other"}, directory=directory)
    assert not form.is_valid()
    assert form.errors["username"] == ["Username already exists. Please try a different one"]

    form = SignupForm({"username": "bob", "password": "pw2"}, directory=directory)
    assert form.is_valid()
    assert form.save() == "bob"
    assert directory.authenticate("bob", "pw2")


def test_login_form(directory):
    directory.register("alice", "pw")
    assert LoginForm({"username": "alice", "password": "pw"}, directory=directory).is_valid()

    form = LoginForm({"username": "alice", "password": "nope"}, directory=directory)
    assert not form.is_valid()
    assert form.non_field_errors() == ["Account Does Not Exist!"]


def test_compatible_search_form():
    form = CompatibleSearchForm({"blood_type": "ab"})
    assert form.is_valid()
    assert form.cleaned_data["blood_type"] == "AB"
