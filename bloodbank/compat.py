# bloodbank/compat.py

from .exceptions import InvalidBloodType
from .models import BloodType

# Requested (recipient) type -> donor types that can be supplied.
# Only the exact type is listed: ABO cross-compatibility (O as universal
# donor, AB as universal recipient) is not modelled.
DONORS_BY_RECIPIENT = {bt: [bt] for bt in BloodType.values}


def normalize_blood_type(value: str) -> str:
    """
    Return the canonical blood type for user input such as " ab ".
    :raises InvalidBloodType: if the value is not one of A, B, AB, O
    """
    bt = (value or "").strip().upper()
    if bt not in BloodType.values:
        raise InvalidBloodType(value)
    return bt


def is_compatible(donor_type: str, requested_type: str) -> bool:
    return donor_type in DONORS_BY_RECIPIENT.get(requested_type, [])
