# bloodbank/registry.py
import logging

from .compat import is_compatible, normalize_blood_type
from .exceptions import IneligibleDonation
from .models import DonationKind, ineligibility_reasons

logger = logging.getLogger(__name__)


class DonationRegistry:
    """
    Append-only in-memory store of accepted donations, one list per kind.

    The only mutating operation is admit(); rejected donations leave the
    registry exactly as it was.
    """

    def __init__(self):
        self._donations = {kind: [] for kind in DonationKind.values}

    def __len__(self):
        return sum(len(items) for items in self._donations.values())

    def _bucket(self, kind):
        # DonationKind() raises ValueError for anything that isn't a known kind
        return self._donations[DonationKind(kind).value]

    def admit(self, donation):
        """
        Store the donation if it is eligible.
        :return: the admitted donation
        :raises IneligibleDonation: with the violated constraints in .reasons
        """
        reasons = ineligibility_reasons(donation)
        if reasons:
            logger.info(
                "Rejected %s donation from %s: %s",
                donation.kind, donation.donor_name, "; ".join(reasons),
            )
            raise IneligibleDonation(donation, reasons)

        self._bucket(donation.kind).append(donation)
        logger.info(
            "Admitted %s donation from %s (%s, %sml)",
            donation.kind, donation.donor_name, donation.blood_type, donation.amount_ml,
        )
        return donation

    def list_by_kind(self, kind):
        return list(self._bucket(kind))

    def count(self, kind):
        return len(self._bucket(kind))

    def find_compatible(self, required_type):
        """
        Donations whose blood type matches required_type (case-insensitive),
        regular ones first, each kind in insertion order.
        :raises InvalidBloodType: before scanning, if required_type is unknown
        """
        requested = normalize_blood_type(required_type)
        matches = []
        for kind in (DonationKind.REGULAR, DonationKind.EMERGENCY):
            matches.extend(
                d for d in self._bucket(kind) if is_compatible(d.blood_type, requested)
            )
        return matches
