"""REST framework exception handler for engine errors.

Configured through ``REST_FRAMEWORK['EXCEPTION_HANDLER']``. Any
``HospitalError`` becomes a JSON body built from its ``to_dict()`` with the
error kind's HTTP status; everything else goes to DRF's default handler.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import exception_handler

from hospital_backend.core.exceptions import HospitalError, InvariantViolation

logger = logging.getLogger(__name__)


def hospital_exception_handler(exc, context):
    if not isinstance(exc, HospitalError):
        return exception_handler(exc, context)

    if isinstance(exc, InvariantViolation):
        logger.error('Invariant violation surfaced to API: %s', exc.message)

    body = {
        'timestamp': timezone.now().isoformat(),
        'status': exc.http_status,
        'error': HTTPStatus(exc.http_status).phrase,
        **exc.to_dict(),
    }
    request = (context or {}).get('request')
    if request is not None:
        body['path'] = request.path
    return Response(body, status=exc.http_status)
