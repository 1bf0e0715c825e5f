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
Errors raised and returned by Request Validator.

Two kinds of failures exist:
- Compile-time errors (InvalidArgumentError, EmptySchemaError) are raised
  from RequestValidator.compile() and point at a broken schema map.
- RequestValidationError describes a rejected request. It is returned by
  the compiled validator (or passed to the middleware continuation),
  never raised by this package.

Example:
    >>> error = create_validation_error("body", [ErrorDescriptor(".name", "should be string")])
    >>> str(error)
    '`body.name` should be string'
    >>> error.status
    400
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from request_validator.schema_engine import ErrorDescriptor


class InvalidArgumentError(TypeError):
    """The schema map (or engine argument) has the wrong type."""


class EmptySchemaError(ValueError):
    """The schema map has no fields."""


class RequestValidationError(Exception):
    """
    A request rejected by a compiled validator.

    Attributes:
        status: HTTP status for the boundary layer (always 400)
        field: Name of the request field that failed
        errors: Descriptors reported for that field, in engine order
    """

    status: int = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Sequence[ErrorDescriptor] = (),
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = tuple(errors)

    @property
    def status_code(self) -> int:
        """Alias of status, matching HTTP framework naming."""
        return self.status


def _path_and_message(error: Any) -> Tuple[str, str]:
    """Read path and message from a descriptor object or mapping."""
    if isinstance(error, Mapping):
        return error.get("path") or "", error["message"]
    return error.path or "", error.message


def create_validation_error(
    field_name: str,
    errors: Sequence[ErrorDescriptor],
) -> RequestValidationError:
    """
    Build the error returned for a failed field.

    Each descriptor becomes "`<field><path>` <message>"; segments are
    joined with ", " in the order given.

    Args:
        field_name: Request field that failed ("body", "query", ...)
        errors: Non-empty descriptors reported by the schema engine
                (ErrorDescriptor objects or {"path", "message"} mappings)

    Returns:
        RequestValidationError with status 400
    """
    message = ", ".join(
        "`{}{}` {}".format(field_name, *_path_and_message(error)) for error in errors
    )
    return RequestValidationError(message, field=field_name, errors=errors)
