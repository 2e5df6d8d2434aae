# analytics_reporting/core/config.py
"""Environment-driven configuration for the report data source."""

import os
import re
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from analytics_reporting.core.exceptions import ConfigurationError

load_dotenv()

APPLICATION_ID = os.environ.get("APPLICATION_ID", "Unknown")

# Name of the connection string the HTTP surface reads from
REPORTING_CONNECTION_NAME = os.getenv("REPORTING_CONNECTION_NAME", "analytics")

DEFAULT_DATABASE_NAME = "analytics"


def connection_string_variable(connection_string_name: str) -> str:
    """Environment variable holding the named connection string, e.g. analytics -> ANALYTICS_CONNECTION_STRING."""
    normalized = re.sub(r"[^A-Za-z0-9]", "_", connection_string_name).upper()
    return f"{normalized}_CONNECTION_STRING"


def get_connection_string(connection_string_name: str) -> str:
    """Resolve a connection string by name."""
    if not connection_string_name:
        raise ConfigurationError("Connection string name must not be empty")

    variable = connection_string_variable(connection_string_name)
    connection_string = os.getenv(variable)
    if not connection_string:
        raise ConfigurationError(
            f"Connection string '{connection_string_name}' is not configured (set {variable})"
        )
    return connection_string


def get_database_name(connection_string: str) -> str:
    """Database to read from: MONGO_DATABASE, else the path of the URI, else the default."""
    override: Optional[str] = os.getenv("MONGO_DATABASE")
    if override:
        return override

    path = urlparse(connection_string).path.lstrip("/")
    return path or DEFAULT_DATABASE_NAME


def get_uuid_representation() -> str:
    """
    How the client decodes BSON binary identifiers.

    Sitecore xDB analytics data is written by the .NET driver as subtype 3
    GUIDs and needs MONGO_UUID_REPRESENTATION=csharpLegacy to come back as
    UUIDs. With the default "standard" those values arrive as raw binaries,
    which the channel reconciler decodes itself.
    """
    return os.getenv("MONGO_UUID_REPRESENTATION", "standard")
