# bloodbank/forms.py
from django import forms

from .compat import normalize_blood_type
from .exceptions import InvalidBloodType
from .models import BLOOD_TYPES, EmergencyDonation, RegularDonation

NUMERIC_MESSAGES = {
    "invalid": "Invalid input. Please enter a numeric value",
    "required": "Invalid input. Please enter a numeric value",
}


# ---------------- Fields ----------------
class BloodTypeField(forms.ChoiceField):
    """Accepts a, ab, " O " ... and cleans to the canonical upper-case type."""

    default_error_messages = {
        "invalid_choice": "Invalid Blood Type (Blood Type: A, B, AB, O)",
        "required": "Invalid Blood Type (Blood Type: A, B, AB, O)",
    }

    def __init__(self, **kwargs):
        kwargs.setdefault("choices", BLOOD_TYPES)
        super().__init__(**kwargs)

    def to_python(self, value):
        value = super().to_python(value)
        if value in self.empty_values:
            return ""
        try:
            return normalize_blood_type(value)
        except InvalidBloodType:
            raise forms.ValidationError(self.error_messages["invalid_choice"], code="invalid_choice")


class TrueFalseField(forms.Field):
    """Only the words true / false (any case) are accepted."""

    default_error_messages = {
        "invalid": "Invalid input. Please enter true or false",
    }

    def to_python(self, value):
        if isinstance(value, bool):
            return value
        word = (value or "").strip().lower()
        if word == "true":
            return True
        if word == "false":
            return False
        raise forms.ValidationError(self.error_messages["invalid"], code="invalid")


def menu_choice_field(options):
    """
    Integer field for a numbered menu.
    :param options: labels in display order; choice 1 is options[0]
    """
    return forms.IntegerField(
        min_value=1,
        max_value=len(options),
        label="Enter your choice",
        error_messages={
            "invalid": "Invalid input. Please enter a valid number",
            "required": "Invalid input. Please enter a valid number",
            "min_value": "Invalid choice. Please try again",
            "max_value": "Invalid choice. Please try again",
        },
    )


# ==================== Auth forms ====================
class LoginForm(forms.Form):
    username = forms.CharField(label="Enter Donor Username")
    password = forms.CharField(label="Enter Donor Password", strip=False,
                               widget=forms.PasswordInput)

    def __init__(self, *args, directory=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.directory = directory

    def clean(self):
        data = super().clean()
        username = data.get("username")
        password = data.get("password")
        if username is not None and password is not None:
            if not self.directory.authenticate(username, password):
                raise forms.ValidationError("Account Does Not Exist!", code="invalid_login")
        return data

    def get_username(self):
        return self.cleaned_data["username"]


class SignupForm(forms.Form):
    username = forms.CharField(label="Enter New Username", max_length=150)
    password = forms.CharField(label="Enter New Password", strip=False,
                               widget=forms.PasswordInput)

    def __init__(self, *args, directory=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.directory = directory

    # no duplicate usernames
    def clean_username(self):
        username = self.cleaned_data["username"]
        if username in self.directory:
            raise forms.ValidationError(
                "Username already exists. Please try a different one", code="duplicate"
            )
        return username

    def save(self):
        self.directory.register(self.cleaned_data["username"], self.cleaned_data["password"])
        return self.cleaned_data["username"]


# ==================== Domain forms ====================
class DonationForm(forms.Form):
    """Fields shared by both donation kinds, in prompt order."""

    blood_type = BloodTypeField(label="Blood Type")
    donor_name = forms.CharField(label="Donor Name", max_length=120,
                                 error_messages={"required": "Donor name cannot be blank"})
    amount_ml = forms.IntegerField(
        label="Donation Amount (ml)",
        min_value=1,
        error_messages={**NUMERIC_MESSAGES, "min_value": "Amount must be positive"},
    )

    donation_class = None

    def build_donation(self):
        return self.donation_class(**self.cleaned_data)

    def save(self, registry):
        """
        Admit the donation into the registry.
        :raises IneligibleDonation: if the donation breaks an eligibility rule
        """
        return registry.admit(self.build_donation())


class RegularDonationForm(DonationForm):
    age = forms.IntegerField(
        label="Age",
        min_value=0,
        error_messages={**NUMERIC_MESSAGES, "min_value": "Age must be positive"},
    )

    donation_class = RegularDonation


class EmergencyDonationForm(DonationForm):
    is_urgent = TrueFalseField(label="Is Urgent? (true/false)")

    donation_class = EmergencyDonation


class CompatibleSearchForm(forms.Form):
    blood_type = BloodTypeField(label="Blood Type")
