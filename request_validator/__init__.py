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
Request Validator - compiled JSON Schema checks for request fields.

This package compiles a mapping of request field names (body, query,
headers, ...) to JSON Schemas into one validation callable, usable as
middleware or as a plain function.

Modules:
    - config: Configuration and defaults
    - schema_engine: jsonschema-backed schema compiler and error descriptors
    - errors: Compile-time errors and the request validation error
    - compiler: RequestValidator and the invocation adapters
    - exceptions: FastAPI exception handler
"""

# Version is imported from config.py, the single source of truth
from request_validator.config import APP_VERSION as __version__

# Main components for convenient import
from request_validator.compiler import RequestValidator
from request_validator.schema_engine import CompiledSchema, ErrorDescriptor, SchemaEngine

# Errors
from request_validator.errors import (
    EmptySchemaError,
    InvalidArgumentError,
    RequestValidationError,
    create_validation_error,
)

# Exceptions
from request_validator.exceptions import validation_error_handler

__all__ = [
    # Version
    "__version__",

    # Main classes
    "RequestValidator",
    "SchemaEngine",
    "CompiledSchema",
    "ErrorDescriptor",

    # Errors
    "InvalidArgumentError",
    "EmptySchemaError",
    "RequestValidationError",
    "create_validation_error",

    # Exceptions
    "validation_error_handler",
]
