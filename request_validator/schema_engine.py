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
JSON Schema engine for Request Validator.

Compiles JSON Schema definitions into reusable predicates backed by
the jsonschema library and turns jsonschema errors into flat error
descriptors.

Architecture:
- ErrorDescriptor: One violation, located relative to the validated value
- CompiledSchema: Predicate produced for one schema
- SchemaEngine: Compiles schemas with the configured reporting options

Paths use property-access notation relative to the validated value
(".name", "[0]", "['content-type']"), so a field name can be prefixed
directly: "body" + ".name" -> "body.name".

Example:
    >>> engine = SchemaEngine(all_errors=True)
    >>> check_name = engine.compile({"type": "object", "properties": {"name": {"type": "string"}}})
    >>> check_name({"name": 1})
    False
    >>> check_name.errors
    [ErrorDescriptor(path='.name', message='should be string', keyword='type')]
"""

import re
from dataclasses import dataclass
from itertools import islice
from typing import Any, Iterator, List, Optional, Set, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError as JsonSchemaViolation
from jsonschema.validators import validator_for
from loguru import logger

from request_validator.config import ALL_ERRORS, VALIDATE_FORMATS

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Messages for keywords whose wording only depends on the keyword value.
# "{limit}" is replaced with the keyword value.
_KEYWORD_MESSAGES = {
    "minimum": "should be >= {limit}",
    "maximum": "should be <= {limit}",
    "exclusiveMinimum": "should be > {limit}",
    "exclusiveMaximum": "should be < {limit}",
    "multipleOf": "should be multiple of {limit}",
    "minLength": "should NOT be shorter than {limit} characters",
    "maxLength": "should NOT be longer than {limit} characters",
    "minItems": "should NOT have fewer than {limit} items",
    "maxItems": "should NOT have more than {limit} items",
    "minProperties": "should NOT have fewer than {limit} properties",
    "maxProperties": "should NOT have more than {limit} properties",
    "pattern": 'should match pattern "{limit}"',
    "format": 'should match format "{limit}"',
    "enum": "should be equal to one of the allowed values",
    "const": "should be equal to constant",
    "additionalProperties": "should NOT have additional properties",
    "additionalItems": "should NOT have more than {item_count} items",
    "uniqueItems": "should NOT have duplicate items",
    "anyOf": 'should match some schema in "anyOf"',
    "oneOf": 'should match exactly one schema in "oneOf"',
    "not": "should NOT be valid",
    "contains": "should contain a valid item",
}

# Draft 4 marks exclusive limits with a boolean next to minimum/maximum
_DRAFT4_EXCLUSIVE = {
    "minimum": "exclusiveMinimum",
    "maximum": "exclusiveMaximum",
}


@dataclass(frozen=True)
class ErrorDescriptor:
    """
    A single schema violation.

    Attributes:
        path: Location of the violation relative to the validated value
              ("" when the value itself is invalid)
        message: Human-readable description ("should be string")
        keyword: JSON Schema keyword that failed, None for a false schema
    """

    path: str
    message: str
    keyword: Optional[str] = None


def _js_number(value: Any) -> Any:
    """Render integral floats without a trailing ".0" (5.0 -> 5)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_data_path(path) -> str:
    """
    Build a property-access path from jsonschema path segments.

    Args:
        path: Iterable of keys (str) and indexes (int)

    Returns:
        Path string such as ".items[0].name" or "['content-type']"
    """
    parts = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif _IDENTIFIER.match(segment):
            parts.append(f".{segment}")
        else:
            escaped = segment.replace("\\", "\\\\").replace("'", "\\'")
            parts.append(f"['{escaped}']")
    return "".join(parts)


def _missing_properties(error: JsonSchemaViolation) -> List[str]:
    """Names listed by a failed "required" keyword that the object lacks."""
    if not isinstance(error.validator_value, list):
        return []
    return [name for name in error.validator_value if name not in error.instance]


def _describe_message(error: JsonSchemaViolation) -> str:
    """Word a jsonschema error in short "should ..." form."""
    keyword = error.validator

    if keyword is None:
        return "boolean schema is false"

    if keyword == "type":
        types = error.validator_value
        if isinstance(types, list):
            types = ",".join(types)
        return f"should be {types}"

    if keyword == "required":
        # jsonschema yields one error per missing property, in declaration order
        missing = _missing_properties(error)
        if missing:
            return f"should have required property {missing[0]!r}"
        return error.message

    if keyword in _DRAFT4_EXCLUSIVE and error.schema.get(_DRAFT4_EXCLUSIVE[keyword]) is True:
        template = _KEYWORD_MESSAGES[_DRAFT4_EXCLUSIVE[keyword]]
    else:
        template = _KEYWORD_MESSAGES.get(keyword)
    if template is None:
        return error.message

    item_count = None
    if keyword == "additionalItems" and isinstance(error.schema.get("items"), list):
        item_count = len(error.schema["items"])
    return template.format(limit=_js_number(error.validator_value), item_count=item_count)


def describe_error(error: JsonSchemaViolation) -> ErrorDescriptor:
    """Convert a jsonschema ValidationError into an ErrorDescriptor."""
    return ErrorDescriptor(
        path=format_data_path(error.absolute_path),
        message=_describe_message(error),
        keyword=error.validator,
    )


def _describe_all(
    error: JsonSchemaViolation,
    reported: Set[Tuple[int, Tuple]],
) -> Iterator[ErrorDescriptor]:
    """
    Describe an error together with the errors behind it.

    Branch errors of anyOf/oneOf come before the combinator's own message.
    A failed "required" keyword is reported once, one descriptor per
    missing property.
    """
    for branch_error in error.context or ():
        yield from _describe_all(branch_error, reported)

    if error.validator != "required" or not _missing_properties(error):
        yield describe_error(error)
        return

    location = (id(error.schema), tuple(error.absolute_path))
    if location in reported:
        return
    reported.add(location)

    path = format_data_path(error.absolute_path)
    for name in _missing_properties(error):
        yield ErrorDescriptor(path, f"should have required property {name!r}", "required")


class CompiledSchema:
    """
    Predicate compiled from one JSON Schema.

    check() is stateless and safe to share between threads.
    Calling the object directly mirrors the classic predicate contract:
    it returns a bool and keeps the descriptors on .errors until the next call.

    Attributes:
        schema: Source schema
        errors: Descriptors from the last failed call, None after a successful one
    """

    def __init__(self, validator, all_errors: bool):
        self._validator = validator
        self._all_errors = all_errors
        self.schema = validator.schema
        self.errors: Optional[List[ErrorDescriptor]] = None

    def check(self, value: Any) -> List[ErrorDescriptor]:
        """
        Validate a value.

        Args:
            value: Value to validate

        Returns:
            Violations in engine order; empty list when the value is valid
        """
        violations = self._validator.iter_errors(value)
        if not self._all_errors:
            return [describe_error(error) for error in islice(violations, 1)]

        reported: Set[Tuple[int, Tuple]] = set()
        return [
            descriptor
            for error in violations
            for descriptor in _describe_all(error, reported)
        ]

    def __call__(self, value: Any) -> bool:
        errors = self.check(value)
        self.errors = errors or None
        return not errors


class SchemaEngine:
    """
    Compiles JSON Schemas into CompiledSchema predicates.

    The draft is picked from the schema's "$schema" keyword,
    falling back to default_draft (Draft 7).

    Attributes:
        all_errors: Report every violation instead of the first one
        validate_formats: Check the "format" keyword
        default_draft: jsonschema validator class used when "$schema" is absent

    Example:
        >>> engine = SchemaEngine()
        >>> is_text = engine.compile({"type": "string"})
        >>> is_text("abc")
        True
    """

    def __init__(
        self,
        all_errors: bool = ALL_ERRORS,
        validate_formats: bool = VALIDATE_FORMATS,
        default_draft: Optional[type] = None,
    ):
        self.all_errors = all_errors
        self.validate_formats = validate_formats
        self.default_draft = default_draft or Draft7Validator

    def compile(self, schema: Any) -> CompiledSchema:
        """
        Compile a schema into a predicate.

        Args:
            schema: JSON Schema (mapping or boolean)

        Returns:
            CompiledSchema bound to this engine's options

        Raises:
            jsonschema.exceptions.SchemaError: If the schema itself is invalid
        """
        validator_cls = validator_for(schema, default=self.default_draft)
        validator_cls.check_schema(schema)

        format_checker = validator_cls.FORMAT_CHECKER if self.validate_formats else None
        validator = validator_cls(schema, format_checker=format_checker)

        logger.debug(
            "[SchemaEngine] Compiled schema with {} (all_errors={})",
            validator_cls.__name__,
            self.all_errors,
        )
        return CompiledSchema(validator, self.all_errors)
