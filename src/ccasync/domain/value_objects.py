"""Self-validating value objects.

Every type is built through ``create()``, which returns a
:class:`~ccasync.domain.result.Result` instead of raising. Inputs are
trimmed before validation and stored in normalized form.

Identifiers that are case-insensitive in the source systems (emails,
account and meter numbers, names) compare case-insensitively.
"""

from __future__ import annotations

import re
from typing import Any, ClassVar
from uuid import UUID, uuid4

from ccasync.domain.base import ValueObject
from ccasync.domain.result import Result

# The four accepted textual forms of a tenant id: hyphenated, braced
# hyphenated, and 32 bare hex digits. Upper- and lower-case both parse.
_UUID_TEXT = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
    r"|\{[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\}"
    r"|[0-9a-f]{32}",
    re.IGNORECASE,
)

_EMAIL = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+"
)

# (123) 456-7890, 123-456-7890, 123.456.7890, 1234567890, +1 123 456 7890
_US_PHONE = re.compile(r"(\+?1[-.\s]?)?\(?([2-9][0-9]{2})\)?[-.\s]?([2-9][0-9]{2})[-.\s]?([0-9]{4})")

_ZIP_CODE = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")
_ACCOUNT_NUMBER = re.compile(r"[a-zA-Z0-9_-]+")
_METER_NUMBER = re.compile(r"[a-zA-Z0-9]+")

US_STATE_CODES: frozenset[str] = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
        "DC", "AS", "GU", "MP", "PR", "UM", "VI",
    }
)  # fmt: skip

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TenantId(ValueObject):
    """Identity of a tenant (a 128-bit UUID, never the nil UUID)."""

    value: UUID

    @classmethod
    def create(cls, value: UUID | str | None) -> Result[TenantId]:
        """Validate a UUID or parse one of its textual forms.

        Blank or nil input fails with ``TenantId.Empty``; any other
        unparsable text fails with ``TenantId.InvalidFormat``.
        """
        if isinstance(value, UUID):
            if value.int == 0:
                return Result.fail("TenantId.Empty", "Tenant ID cannot be empty.")
            return Result.success(cls(value=value))

        if value is not None and not isinstance(value, str):
            raise TypeError(f"tenant id must be a UUID or str, not {type(value).__name__}")
        if _is_blank(value):
            return Result.fail("TenantId.Empty", "Tenant ID cannot be empty.")

        text = value.strip()
        if not _UUID_TEXT.fullmatch(text):
            return Result.fail("TenantId.InvalidFormat", "Tenant ID must be a valid GUID format.")
        return cls.create(UUID(text.strip("{}")))

    @classmethod
    def new(cls) -> TenantId:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


class CustomerName(ValueObject):
    """A person's name with an optional middle name."""

    first_name: str
    last_name: str
    middle_name: str | None = None

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        middle_name: str | None = None,
    ) -> Result[CustomerName]:
        if _is_blank(first_name):
            return Result.fail("CustomerName.FirstNameEmpty", "First name cannot be empty.")
        if _is_blank(last_name):
            return Result.fail("CustomerName.LastNameEmpty", "Last name cannot be empty.")

        first = first_name.strip()
        last = last_name.strip()
        middle = middle_name.strip() if middle_name is not None else None

        if len(first) > NAME_MAX_LENGTH:
            return Result.fail(
                "CustomerName.FirstNameTooLong",
                f"First name cannot exceed {NAME_MAX_LENGTH} characters.",
            )
        if len(last) > NAME_MAX_LENGTH:
            return Result.fail(
                "CustomerName.LastNameTooLong",
                f"Last name cannot exceed {NAME_MAX_LENGTH} characters.",
            )
        if middle and len(middle) > NAME_MAX_LENGTH:
            return Result.fail(
                "CustomerName.MiddleNameTooLong",
                f"Middle name cannot exceed {NAME_MAX_LENGTH} characters.",
            )

        return Result.success(cls(first_name=first, last_name=last, middle_name=middle))

    @property
    def full_name(self) -> str:
        if not self.middle_name:
            return f"{self.first_name} {self.last_name}"
        return f"{self.first_name} {self.middle_name} {self.last_name}"

    def _equality_components(self) -> tuple[Any, ...]:
        return (
            self.first_name.casefold(),
            self.last_name.casefold(),
            (self.middle_name or "").casefold(),
        )

    def __str__(self) -> str:
        return self.full_name


class EmailAddress(ValueObject):
    value: str

    @classmethod
    def create(cls, value: str) -> Result[EmailAddress]:
        if _is_blank(value):
            return Result.fail("EmailAddress.Empty", "Email address cannot be empty.")

        text = value.strip()
        if len(text) > EMAIL_MAX_LENGTH:
            return Result.fail(
                "EmailAddress.TooLong",
                f"Email address cannot exceed {EMAIL_MAX_LENGTH} characters.",
            )
        if not _EMAIL.fullmatch(text):
            return Result.fail("EmailAddress.Invalid", "Email address format is invalid.")

        return Result.success(cls(value=text))

    def _equality_components(self) -> tuple[Any, ...]:
        return (self.value.casefold(),)

    def __str__(self) -> str:
        return self.value


class PhoneNumber(ValueObject):
    """US phone number, stored as its 10 national digits."""

    value: str

    @classmethod
    def create(cls, value: str) -> Result[PhoneNumber]:
        if _is_blank(value):
            return Result.fail("PhoneNumber.Empty", "Phone number cannot be empty.")

        text = value.strip()
        if not _US_PHONE.fullmatch(text):
            return Result.fail(
                "PhoneNumber.Invalid",
                "Phone number format is invalid. Expected US phone number format.",
            )

        digits = re.sub(r"[^0-9]", "", text)
        if len(digits) == 11 and digits.startswith("1"):
            digits = digits[1:]
        if len(digits) != 10:
            return Result.fail("PhoneNumber.Invalid", "Phone number must contain exactly 10 digits.")

        return Result.success(cls(value=digits))

    def format_display(self) -> str:
        """``(415) 555-0134``"""
        return f"({self.value[:3]}) {self.value[3:6]}-{self.value[6:]}"

    def format_e164(self) -> str:
        """``+14155550134``"""
        return f"+1{self.value}"

    def __str__(self) -> str:
        return self.format_display()


class Address(ValueObject):
    """US postal address. Street and city compare case-insensitively."""

    street: str
    city: str
    state: str
    zip_code: str

    @classmethod
    def create(cls, street: str, city: str, state: str, zip_code: str) -> Result[Address]:
        if _is_blank(street):
            return Result.fail("Address.StreetEmpty", "Street address cannot be empty.")
        if _is_blank(city):
            return Result.fail("Address.CityEmpty", "City cannot be empty.")
        if _is_blank(state):
            return Result.fail("Address.StateEmpty", "State cannot be empty.")

        state_code = state.strip().upper()
        if state_code not in US_STATE_CODES:
            return Result.fail(
                "Address.StateInvalid",
                "State must be a valid 2-letter US state code.",
            )

        if _is_blank(zip_code):
            return Result.fail("Address.ZipCodeEmpty", "ZIP code cannot be empty.")
        zip_text = zip_code.strip()
        if not _ZIP_CODE.fullmatch(zip_text):
            return Result.fail(
                "Address.ZipCodeInvalid",
                "ZIP code must be in format 12345 or 12345-6789.",
            )

        return Result.success(
            cls(street=street.strip(), city=city.strip(), state=state_code, zip_code=zip_text)
        )

    def _equality_components(self) -> tuple[Any, ...]:
        return (self.street.casefold(), self.city.casefold(), self.state, self.zip_code)

    def __str__(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}"


class AccountNumber(ValueObject):
    """Utility account number: 3-50 letters, digits, hyphens or underscores."""

    value: str

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 50

    @classmethod
    def create(cls, value: str) -> Result[AccountNumber]:
        if _is_blank(value):
            return Result.fail("AccountNumber.Empty", "Account number cannot be empty.")

        text = value.strip()
        if not cls.MIN_LENGTH <= len(text) <= cls.MAX_LENGTH:
            return Result.fail(
                "AccountNumber.InvalidLength",
                f"Account number must be between {cls.MIN_LENGTH} and {cls.MAX_LENGTH} characters.",
            )
        if not _ACCOUNT_NUMBER.fullmatch(text):
            return Result.fail(
                "AccountNumber.InvalidFormat",
                "Account number can only contain alphanumeric characters, hyphens, and underscores.",
            )

        return Result.success(cls(value=text))

    def _equality_components(self) -> tuple[Any, ...]:
        return (self.value.casefold(),)

    def __str__(self) -> str:
        return self.value


class MeterNumber(ValueObject):
    """Meter serial: 6-30 alphanumeric characters."""

    value: str

    MIN_LENGTH: ClassVar[int] = 6
    MAX_LENGTH: ClassVar[int] = 30

    @classmethod
    def create(cls, value: str) -> Result[MeterNumber]:
        if _is_blank(value):
            return Result.fail("MeterNumber.Empty", "Meter number cannot be empty.")

        text = value.strip()
        if not cls.MIN_LENGTH <= len(text) <= cls.MAX_LENGTH:
            return Result.fail(
                "MeterNumber.InvalidLength",
                f"Meter number must be between {cls.MIN_LENGTH} and {cls.MAX_LENGTH} characters.",
            )
        if not _METER_NUMBER.fullmatch(text):
            return Result.fail(
                "MeterNumber.InvalidFormat",
                "Meter number can only contain alphanumeric characters.",
            )

        return Result.success(cls(value=text))

    def _equality_components(self) -> tuple[Any, ...]:
        return (self.value.casefold(),)

    def __str__(self) -> str:
        return self.value
