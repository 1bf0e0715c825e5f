# -*- coding: utf-8 -*-

# Request Validator
# Copyright (C) 2025 Request Validator contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
FastAPI exception handling for rejected requests.

Compiled validators return a RequestValidationError instead of raising it.
Route handlers that want FastAPI to answer for them raise the returned
error, and this handler renders it as a JSON 400 response.

Example:
    >>> app = FastAPI()
    >>> app.add_exception_handler(RequestValidationError, validation_error_handler)
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from request_validator.errors import RequestValidationError


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Render a RequestValidationError as a JSON error response.

    Args:
        request: FastAPI Request object
        exc: Error returned by a compiled validator

    Returns:
        JSONResponse with the error's status (400) and message
    """
    logger.warning(
        "[RequestValidator] {} {} rejected: {}", request.method, request.url.path, exc
    )

    return JSONResponse(
        status_code=exc.status,
        content={
            "error": {
                "message": str(exc),
                "type": "invalid_request_error",
                "field": exc.field,
                "code": exc.status,
            }
        },
    )
