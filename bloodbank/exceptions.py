# bloodbank/exceptions.py


class BloodBankError(ValueError):
    """Base class for errors the blood bank core reports to its caller."""


class IneligibleDonation(BloodBankError):
    def __init__(self, donation, reasons):
        self.donation = donation
        self.reasons = list(reasons)
        super().__init__("Donation failed: " + "; ".join(self.reasons))


class InvalidBloodType(BloodBankError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid blood type {value!r}. Blood type (A, B, AB, or O)")


class DuplicateUsername(BloodBankError):
    def __init__(self, username):
        self.username = username
        super().__init__(f"Username {username!r} already exists")
