"""Pure validators for the registration fields. No I/O, never raise."""

from __future__ import annotations

import re
from datetime import date

from user_registry.domain.record import FIELD_NAMES, EducationLevel, UserData

REQUIRED_MSG = "Campo requerido"

# Letters (ASCII and Latin-1 accented, excluding × and ÷), single spaces between words
NAME_RE = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ]+(?: [A-Za-zÀ-ÖØ-öø-ÿ]+)*")
CURP_RE = re.compile(r"[A-Z0-9]{18}")
PHONE_RE = re.compile(r"[0-9]{10}")
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NON_DIGIT_RE = re.compile(r"[^0-9]")

EDUCATION_VALUES = frozenset(level.value for level in EducationLevel)


def validate_name(value: str) -> tuple[bool, str]:
    """Return (is_valid, error_message)."""
    v = value.strip()
    if not v:
        return False, REQUIRED_MSG
    if not NAME_RE.fullmatch(v):
        return False, "Solo letras permitidas"
    return True, ""


def validate_curp(value: str) -> tuple[bool, str]:
    """Return (is_valid, error_message). Expects an already upper-cased value."""
    v = value.strip()
    if not v:
        return False, REQUIRED_MSG
    if not CURP_RE.fullmatch(v):
        return False, "CURP debe tener 18 caracteres"
    return True, ""


def validate_phone(value: str) -> tuple[bool, str]:
    """Return (is_valid, error_message). Separators are not tolerated here."""
    if not value:
        return False, REQUIRED_MSG
    if not PHONE_RE.fullmatch(value):
        return False, "Teléfono debe tener 10 dígitos"
    return True, ""


def validate_email(value: str) -> tuple[bool, str]:
    """Return (is_valid, error_message)."""
    v = value.strip()
    if not v:
        return False, REQUIRED_MSG
    if not EMAIL_RE.fullmatch(v):
        return False, "Email inválido (debe tener formato nombre@dominio.com)"
    return True, ""


def validate_required(value: str, message: str = REQUIRED_MSG) -> tuple[bool, str]:
    """Reject only empty/unset values."""
    if not value or not value.strip():
        return False, message
    return True, ""


def validate_birth_date(value: str) -> tuple[bool, str]:
    ok, msg = validate_required(value, "Fecha de nacimiento requerida")
    if not ok:
        return ok, msg
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        return False, "Fecha de nacimiento inválida"
    return True, ""


def validate_education(value: str) -> tuple[bool, str]:
    ok, msg = validate_required(value, "Nivel de educación requerido")
    if not ok:
        return ok, msg
    if value not in EDUCATION_VALUES:
        return False, "Nivel de educación inválido"
    return True, ""


_VALIDATORS = {
    "first_name": validate_name,
    "last_name": validate_name,
    "mother_last_name": validate_name,
    "birth_date": validate_birth_date,
    "curp": validate_curp,
    "phone": validate_phone,
    "email": validate_email,
    "education": validate_education,
}


def validate_field(field_name: str, value: str) -> tuple[bool, str]:
    """Dispatch to the right validator by field name."""
    validator = _VALIDATORS.get(field_name)
    if validator is None:
        return False, f"Unknown field: {field_name}"
    return validator(value)


def validate_user(user: UserData) -> dict[str, str]:
    """field_name -> error for every failing field. Empty dict means valid."""
    errors: dict[str, str] = {}
    for name in FIELD_NAMES:
        ok, msg = validate_field(name, getattr(user, name))
        if not ok:
            errors[name] = msg
    return errors


def normalize_input(field_name: str, value: str) -> str:
    """
    Input policy applied before storing/validating a keystroke:
    CURP is upper-cased and phone keeps digits only.
    """
    if field_name == "curp":
        return value.upper()
    if field_name == "phone":
        return NON_DIGIT_RE.sub("", value)
    return value
