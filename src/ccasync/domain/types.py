"""Provider classification enums.

Utility providers own the customer's service accounts; LDC providers are
the same California distribution companies seen from the credential side.
"""

from __future__ import annotations

from enum import StrEnum


class UtilityProvider(StrEnum):
    """Utility providers a customer can hold accounts with."""

    PGE = "PGE"  # Pacific Gas and Electric
    SCE = "SCE"  # Southern California Edison
    SDG_E = "SDG_E"  # San Diego Gas and Electric


class LdcProvider(StrEnum):
    """Local Distribution Companies whose portals we authenticate against."""

    PGE = "PGE"
    SCE = "SCE"
    SDG_E = "SDG_E"
