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
Request Validator Configuration.

Centralized storage for all settings and defaults.
Loads environment variables and provides typed access to them.
"""

import os
import sys

from dotenv import load_dotenv
from loguru import logger

# Load environment variables
load_dotenv()


def _env_flag(var_name: str, default: str) -> bool:
    """Read a boolean environment variable ("true", "1" or "yes" enable it)."""
    return os.getenv(var_name, default).lower() in ("true", "1", "yes")


# ==================================================================================================
# Schema Engine Settings
# ==================================================================================================

# Report every violation found inside a field instead of stopping at the first one.
# The compiled routine still stops at the first failing field.
# Default: false
ALL_ERRORS: bool = _env_flag("VALIDATOR_ALL_ERRORS", "false")

# Check the JSON Schema "format" keyword (email, date-time, ipv4, ...).
# Formats whose checker dependencies are not installed are accepted as-is.
# Default: true
VALIDATE_FORMATS: bool = _env_flag("VALIDATOR_VALIDATE_FORMATS", "true")

# ==================================================================================================
# Compiler Settings
# ==================================================================================================

# Shape of the callable returned by RequestValidator.compile():
#   true  - middleware(request, response, next_)
#   false - validate(request) -> error or None
# Can be overridden per call: compile(schema, middleware=False)
MIDDLEWARE_MODE: bool = _env_flag("VALIDATOR_MIDDLEWARE_MODE", "true")

# ==================================================================================================
# Logging Settings
# ==================================================================================================

# Log level for the application
# Available levels: TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL
# Default: INFO
# Set to DEBUG to see compiled field sets and rejected requests
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ==================================================================================================
# Application Version
# ==================================================================================================

APP_VERSION: str = "1.0.0"
APP_TITLE: str = "Request Validator"


def configure_logging(level: str = None) -> int:
    """
    Replace loguru's default sink with a stderr sink at the configured level.

    Args:
        level: loguru level name (default LOG_LEVEL)

    Returns:
        Id of the added sink, usable with logger.remove()
    """
    logger.remove()
    return logger.add(sys.stderr, level=(level or LOG_LEVEL).upper())
