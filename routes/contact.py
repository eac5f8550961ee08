# routes/contact.py
"""
Contact form endpoint: validate the submission, then relay it by email
"""

import logging

from flask import Blueprint, Response, current_app, request

from config.messages import (
    VALIDATION_FAILED_MESSAGE, DELIVERY_FAILED_MESSAGE, THANK_YOU_MESSAGE,
)
from core.errors import FormValidationError, EmailDispatchError
from core.form_validator import parse_submission
from services.email_dispatcher import dispatch_email

contact_bp = Blueprint('contact', __name__)
logger = logging.getLogger(__name__)


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype='text/plain')


@contact_bp.route('/contact', methods=['POST'])
def contact():
    try:
        submission = parse_submission(request.form)
    except FormValidationError as e:
        logger.info(f"Invalid form data received from {request.remote_addr}: {e}")
        return _text(VALIDATION_FAILED_MESSAGE, 400)

    try:
        dispatch_email(current_app.config['SITE_SETTINGS'], submission)
    except EmailDispatchError as e:
        logger.error(f"Email delivery failed: {e}")
        return _text(DELIVERY_FAILED_MESSAGE, 500)

    return _text(THANK_YOU_MESSAGE.format(name=submission.full_name), 200)
