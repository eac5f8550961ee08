# core/form_validator.py
"""
Contact form parsing and validation
"""

from dataclasses import dataclass
from typing import Mapping

from email_validator import validate_email, EmailNotValidError

from core.errors import FormValidationError


@dataclass(frozen=True)
class Submission:
    """A validated contact form submission"""
    full_name: str
    contact_email: str
    request_details: str
    phone_number: str = ''

    @property
    def has_phone(self) -> bool:
        return bool(self.phone_number)


def _required(form: Mapping[str, str], field: str) -> str:
    value = (form.get(field) or '').strip()
    if not value:
        raise FormValidationError(field, 'is required')
    return value


def _email_address(raw: str) -> str:
    try:
        result = validate_email(raw, check_deliverability=False)
    except EmailNotValidError as e:
        raise FormValidationError('email', str(e)) from e
    return result.normalized


def parse_submission(form: Mapping[str, str]) -> Submission:
    """
    Build a Submission from form-encoded fields

    Fields: name (required, single line), email (required, valid address), phone
    (optional, unchecked), message (required).

    Raises:
        FormValidationError: naming the first failing field
    """
    full_name = _required(form, 'name')
    # The name ends up in the Subject header
    if '\r' in full_name or '\n' in full_name:
        raise FormValidationError('name', 'contains a line break')
    contact_email = _email_address(_required(form, 'email'))
    request_details = _required(form, 'message')
    phone_number = (form.get('phone') or '').strip()

    return Submission(
        full_name=full_name,
        contact_email=contact_email,
        request_details=request_details,
        phone_number=phone_number,
    )
