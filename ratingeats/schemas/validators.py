"""Shared field validators for request schemas"""

import re
from typing import Annotated, List

from pydantic import AfterValidator, Field

LETTERS = "A-Za-zÁÉÍÓÚáéíóúÑñÜü"

NAME_RE = re.compile(rf"^[{LETTERS}]+(?: [{LETTERS}]+)*$")
LAST_NAME_RE = re.compile(
    rf"^[{LETTERS}]{{2,30}}(?: (?:de|del|la|las|los|y|e|d')? ?[{LETTERS}]{{2,30}}){{0,2}}$"
)
CUSTOMER_NAME_RE = re.compile(
    rf"^(?!.*\s{{2}})[{LETTERS}]{{2,}}(?:\s+(?:de|del|la|las|los|y|e|d'|[{LETTERS}]{{2,}})){{1,5}}$"
)
USERNAME_RE = re.compile(r"^[a-z0-9]{4,20}$")
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,20}$")
# Venezuelan mobile numbers, e.g. 04121234567 or +58 412-123-4567
PHONE_RE = re.compile(r"^(\+58[\s-]?)?(0?4(1[2-9]|2[0-9]|3[0-9]|4[0-8])[\s-]?[0-9]{3}[\s-]?[0-9]{4})$")
GEO_RE = re.compile(
    r"^[-+]?([1-9]?\d(\.\d+)?|90(\.0+)?),\s*[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)$"
)
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def check_name(value: str) -> str:
    value = value.strip()
    if not NAME_RE.match(value):
        raise ValueError(f"{value} is not a valid name, It must contain only letters.")
    return value


def check_last_name(value: str) -> str:
    value = value.strip()
    if not LAST_NAME_RE.match(value):
        raise ValueError(f"{value} is not a valid last name")
    return value


def check_username(value: str) -> str:
    value = value.strip()
    if not USERNAME_RE.match(value):
        raise ValueError(
            f"Username {value} is not valid. It should contain only lowercase letters "
            "and numbers (4-20 characters)."
        )
    return value


def check_password(value: str) -> str:
    if not PASSWORD_RE.match(value):
        raise ValueError(
            "Password must be 8-20 characters long, include uppercase and lowercase letters, "
            "a number, and a special character."
        )
    return value


def check_phone(value: str) -> str:
    value = value.strip()
    if not PHONE_RE.match(value):
        raise ValueError(f"{value} is not a valid phone number")
    return value


def check_customer_name(value: str) -> str:
    value = value.strip()
    if not CUSTOMER_NAME_RE.match(value):
        raise ValueError(f"{value} is not a valid customer name")
    return value


def check_time(value: str) -> str:
    value = value.strip()
    if not TIME_RE.match(value):
        raise ValueError("Time must use the HH:MM format")
    return value


def check_categories(value: List[str]) -> List[str]:
    cleaned = [c.strip() for c in value]
    if not cleaned or any(not c for c in cleaned):
        raise ValueError("Categories must be non-empty strings and contain no duplicates")
    lowered = [c.lower() for c in cleaned]
    if len(set(lowered)) != len(lowered):
        raise ValueError("Categories must be non-empty strings and contain no duplicates")
    return cleaned


def check_geo_location(value: List[str]) -> List[str]:
    cleaned = [loc.strip() for loc in value]
    if not cleaned or not all(GEO_RE.match(loc) for loc in cleaned):
        raise ValueError(
            'Each geoLocation must be a valid "lat,long" string and there must be at least one location'
        )
    return cleaned


PersonName = Annotated[str, Field(min_length=2, max_length=50), AfterValidator(check_name)]
LastName = Annotated[str, Field(min_length=2, max_length=50), AfterValidator(check_last_name)]
Username = Annotated[str, AfterValidator(check_username)]
Password = Annotated[str, AfterValidator(check_password)]
PhoneNumber = Annotated[str, AfterValidator(check_phone)]
CustomerName = Annotated[str, AfterValidator(check_customer_name)]
TimeOfDay = Annotated[str, AfterValidator(check_time)]
Categories = Annotated[List[str], Field(min_length=1), AfterValidator(check_categories)]
GeoLocation = Annotated[List[str], Field(min_length=1), AfterValidator(check_geo_location)]
