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
Request validator compiler.

Turns a mapping of request field names to JSON Schemas into a single
validation callable.

Pipeline (run once per compile() call):
  1. Field validator set - one CompiledSchema per field, in declared order
  2. Validation routine  - flat check of every field, first failing field wins
  3. Invocation adapter  - middleware(request, response, next_) or validate(request)

The declared order of the schema map decides which field is reported
when several fields are invalid.

Example:
    >>> validator = RequestValidator()
    >>> validate = validator.compile(
    ...     {"body": {"type": "object"}, "query": {"type": "string"}},
    ...     middleware=False,
    ... )
    >>> validate({"body": {}, "query": {}})
    RequestValidationError('`query` should be string')
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from loguru import logger

from request_validator.config import MIDDLEWARE_MODE
from request_validator.errors import (
    EmptySchemaError,
    InvalidArgumentError,
    RequestValidationError,
    create_validation_error,
)
from request_validator.schema_engine import ErrorDescriptor, SchemaEngine

FieldValidators = Tuple[Tuple[str, Any], ...]
FieldCheck = Callable[[Any], Optional[Sequence[ErrorDescriptor]]]
ValidationRoutine = Callable[[Any], Optional[RequestValidationError]]


class RequestValidator:
    """
    Compiles per-field JSON Schemas into request validators.

    Any object with a compile(schema) method returning a predicate works as
    the engine: predicate(value) returns a bool and, after a False result,
    predicate.errors holds the descriptors. Predicates that also offer
    check(value) (CompiledSchema does) are called through check().

    Attributes:
        engine: Schema engine used to compile every field schema

    Example:
        >>> validator = RequestValidator({"all_errors": True})
        >>> middleware = validator.compile({"body": {"type": "object"}})
        >>> middleware({"body": {}}, None, print)
        None
    """

    def __init__(self, engine: Union[SchemaEngine, Mapping, Any, None] = None):
        """
        Initializes the validator.

        Args:
            engine: Object with a compile(schema) method, a mapping of
                    SchemaEngine options, or None to use the configured defaults
        """
        if engine is None:
            engine = SchemaEngine()
        elif isinstance(engine, Mapping):
            engine = SchemaEngine(**engine)
        elif not callable(getattr(engine, "compile", None)):
            raise InvalidArgumentError(
                "engine must have a compile() method or be a mapping of engine options"
            )
        self.engine = engine

    def compile(self, schema: Mapping, middleware: Optional[bool] = None) -> Callable:
        """
        Compile a field schema map into a validation callable.

        Args:
            schema: Mapping of request field name to JSON Schema
            middleware: True for middleware(request, response, next_),
                        False for validate(request); default from config

        Returns:
            Validation callable in the selected shape

        Raises:
            InvalidArgumentError: If schema is not a mapping or a field name is not a string
            EmptySchemaError: If schema has no fields
            jsonschema.exceptions.SchemaError: If a field schema is invalid
        """
        validators = self._build_field_validators(schema)
        validate_request = compile_validation_function(validators)

        if middleware is None:
            middleware = MIDDLEWARE_MODE

        logger.debug(
            "[RequestValidator] Compiled validator for fields [{}] (mode={})",
            ", ".join(name for name, _ in validators),
            "middleware" if middleware else "direct",
        )

        if middleware:
            return create_middleware(validate_request)
        return create_validate_function(validate_request)

    def _build_field_validators(self, schema: Mapping) -> FieldValidators:
        """Compile every field schema, preserving the map's order."""
        if not isinstance(schema, Mapping):
            raise InvalidArgumentError("schema must be a mapping")

        if len(schema) == 0:
            raise EmptySchemaError("The schema must have at least 1 property")

        for field_name in schema:
            if not isinstance(field_name, str):
                raise InvalidArgumentError(
                    f"field names must be strings, got {type(field_name).__name__}"
                )

        return tuple(
            (field_name, self.engine.compile(field_schema))
            for field_name, field_schema in schema.items()
        )


def _read_field(request: Any, field_name: str) -> Any:
    """
    Read a field from a mapping or attribute-style request.

    An absent field is read as None, so it is indistinguishable from an
    explicit None: a schema accepting null ({"type": "null"}, {}) accepts
    a request without the field.
    """
    if isinstance(request, Mapping):
        return request.get(field_name)
    return getattr(request, field_name, None)


def _field_check(predicate: Any) -> FieldCheck:
    """
    Adapt a compiled predicate to a check returning None or its errors.

    Predicates with a check() method are used through it, which keeps no
    state between calls. Plain predicates are called and their .errors
    read after a failure.
    """
    check = getattr(predicate, "check", None)
    if callable(check):

        def check_stateless(value: Any) -> Optional[Sequence[ErrorDescriptor]]:
            return check(value) or None

        return check_stateless

    def check_predicate(value: Any) -> Optional[Sequence[ErrorDescriptor]]:
        if predicate(value):
            return None
        return predicate.errors or ()

    return check_predicate


def compile_validation_function(validators: FieldValidators) -> ValidationRoutine:
    """
    Build the validation routine for a fixed field set.

    Args:
        validators: (field name, predicate) pairs in check order

    Returns:
        Function returning None for a valid request or the
        RequestValidationError of the first failing field
    """
    checks = tuple((field_name, _field_check(predicate)) for field_name, predicate in validators)

    def validate_request(request: Any) -> Optional[RequestValidationError]:
        for field_name, check in checks:
            errors = check(_read_field(request, field_name))
            if errors is not None:
                error = create_validation_error(field_name, errors)
                logger.debug("[RequestValidator] Request rejected: {}", error)
                return error
        return None

    return validate_request


def create_middleware(validate_request: ValidationRoutine) -> Callable:
    """Wrap the routine as middleware(request, response, next_)."""

    def middleware(request: Any, response: Any, next_: Callable) -> Any:
        return next_(validate_request(request))

    return middleware


def create_validate_function(validate_request: ValidationRoutine) -> ValidationRoutine:
    """Wrap the routine as validate(request) -> error or None."""

    def validate(request: Any) -> Optional[RequestValidationError]:
        return validate_request(request)

    return validate
