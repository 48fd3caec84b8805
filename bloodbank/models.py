# bloodbank/models.py
from dataclasses import dataclass, field

from django.db import models

# -------------------- Constants --------------------
class BloodType(models.TextChoices):
    A = "A", "A"
    B = "B", "B"
    AB = "AB", "AB"
    O = "O", "O"


BLOOD_TYPES = BloodType.choices

MIN_DONOR_AGE = 18
MAX_DONOR_AGE = 65
REGULAR_MAX_AMOUNT_ML = 470
EMERGENCY_MAX_AMOUNT_ML = 500


class DonationKind(models.TextChoices):
    REGULAR = "REGULAR", "Regular"
    EMERGENCY = "EMERGENCY", "Emergency"


# -------------------- Core domain --------------------
@dataclass(frozen=True)
class RegularDonation:
    donor_name: str
    blood_type: str
    amount_ml: int
    age: int
    kind: str = field(default=DonationKind.REGULAR, init=False)

    def __str__(self):
        return describe(self)


@dataclass(frozen=True)
class EmergencyDonation:
    donor_name: str
    blood_type: str
    amount_ml: int
    is_urgent: bool
    kind: str = field(default=DonationKind.EMERGENCY, init=False)

    def __str__(self):
        return describe(self)


def ineligibility_reasons(donation):
    """
    Return the constraints a donation violates (empty list when eligible).
    """
    reasons = []
    if donation.kind == DonationKind.REGULAR:
        if not MIN_DONOR_AGE <= donation.age <= MAX_DONOR_AGE:
            reasons.append(f"Donor must be between {MIN_DONOR_AGE} and {MAX_DONOR_AGE} years old")
        if donation.amount_ml > REGULAR_MAX_AMOUNT_ML:
            reasons.append(f"Donation amount limit is {REGULAR_MAX_AMOUNT_ML} mL")
    elif donation.kind == DonationKind.EMERGENCY:
        if not donation.is_urgent:
            reasons.append("Emergency donations must be marked urgent")
        if donation.amount_ml > EMERGENCY_MAX_AMOUNT_ML:
            reasons.append(f"Donation amount limit is {EMERGENCY_MAX_AMOUNT_ML} mL")
    else:
        raise TypeError(f"Unknown donation kind: {donation.kind!r}")
    return reasons


def is_eligible(donation) -> bool:
    return not ineligibility_reasons(donation)


def describe(donation) -> str:
    return (
        f"Donor: {donation.donor_name}\n"
        f"Blood Type: {donation.blood_type}\n"
        f"Amount: {donation.amount_ml}ml"
    )
