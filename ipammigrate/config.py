"""Configuration models for a migration run."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from ipammigrate.hierarchy.ordering import OrderingStrategy

DEFAULT_ENDPOINT = "http://localhost/api"
DEFAULT_APP_ID = "default"
DEFAULT_USERNAME = "Admin"


class DatabaseConfig(BaseModel):
    """Connection settings for the legacy MySQL database."""

    host: str = ""
    user: str = "phpipam"
    password: str = ""
    name: str = "phpipam"
    port: int = 3306


class PHPIPAMConfig(BaseModel):
    """Connection settings for the new phpIPAM API.

    Unset fields fall back to the PHPIPAM_* environment variables.
    """

    endpoint: str = Field(default_factory=lambda: os.getenv("PHPIPAM_ENDPOINT_ADDR") or DEFAULT_ENDPOINT)
    app_id: str = Field(default_factory=lambda: os.getenv("PHPIPAM_APP_ID") or DEFAULT_APP_ID)
    username: str = Field(default_factory=lambda: os.getenv("PHPIPAM_USER_NAME") or DEFAULT_USERNAME)
    password: str = Field(default_factory=lambda: os.getenv("PHPIPAM_PASSWORD", ""))
    verify_ssl: bool = True


class MigrationConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    phpipam: PHPIPAMConfig = Field(default_factory=PHPIPAMConfig)
    # "Customers" is section 1 on a default phpIPAM installation.
    section_id: int = 1
    strategy: OrderingStrategy = OrderingStrategy.LEXICOGRAPHIC
