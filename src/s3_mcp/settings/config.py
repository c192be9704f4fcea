"""
S3 MCP server configuration.

This module provides configuration management for the server,
including the S3 connection (region, endpoint, credentials) and the
bucket access restrictions.
"""

import json
from pathlib import Path
from typing import Any, Callable, Optional, Union

import boto3
import yaml
from botocore.config import Config
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3_mcp.storage.config import S3AccessConfig


class S3Settings(BaseSettings):
    """
    Complete S3 MCP server configuration.

    Read once at startup (from the environment or a file) and never
    modified afterwards.

    SECURITY: Credentials are protected and will not be exposed in
    string representations, logging, or serialization by default.

    Environment variables:
        AWS_REGION - Region of the buckets (default: us-east-1)
        S3_BUCKETS - Comma-separated allow-list (empty = all buckets)
        S3_MAX_BUCKETS - Maximum buckets in a listing (default: 5)
        AWS_ENDPOINT - Alternate endpoint, e.g. a MinIO server
        AWS_S3_FORCE_PATH_STYLE - "true" for path-style addressing
        AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY - Explicit credentials

    Example:
        ```python
        settings = S3Settings()  # from the environment

        settings = S3Settings(
            region="eu-central-1",
            buckets="reports,invoices",
            endpoint_url="http://localhost:9000",
            force_path_style=True,
        )

        client = settings.create_client()
        access = settings.to_access_config()
        ```
    """

    model_config = SettingsConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    region: str = Field(
        default="us-east-1",
        validation_alias="AWS_REGION",
        description="AWS region where the buckets are located",
    )
    buckets: str = Field(
        default="",
        validation_alias="S3_BUCKETS",
        description="Comma-separated list of allowed bucket names",
    )
    max_buckets: int = Field(
        default=5,
        ge=0,
        validation_alias="S3_MAX_BUCKETS",
        description="Maximum number of buckets returned by list-buckets",
    )
    endpoint_url: Optional[str] = Field(
        default=None,
        validation_alias="AWS_ENDPOINT",
        description="Custom S3 endpoint (MinIO and other S3-compatible stores)",
    )
    force_path_style: bool = Field(
        default=False,
        validation_alias="AWS_S3_FORCE_PATH_STYLE",
        description="Use path-style bucket addressing",
    )
    access_key_id: Optional[SecretStr] = Field(
        default=None,
        validation_alias="AWS_ACCESS_KEY_ID",
        description="Access key (used only together with the secret key)",
    )
    secret_access_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias="AWS_SECRET_ACCESS_KEY",
        description="Secret key (used only together with the access key)",
    )

    @field_validator("buckets", mode="before")
    @classmethod
    def join_buckets(cls, v):
        """Accept a list of bucket names as well as a comma-separated string."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(b) for b in v)
        return v

    @field_validator("force_path_style", mode="before")
    @classmethod
    def parse_path_style(cls, v):
        """Only the literal string "true" enables path-style addressing."""
        if isinstance(v, str):
            return v.strip().lower() == "true"
        return v

    @field_validator("endpoint_url", mode="before")
    @classmethod
    def normalize_endpoint(cls, v):
        """Treat an empty endpoint as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def allowed_buckets(self) -> list[str]:
        """Parsed allow-list."""
        return list(S3AccessConfig(allowed_buckets=self.buckets).allowed_buckets)

    @property
    def has_credentials(self) -> bool:
        """Whether an explicit credential pair is configured."""
        return bool(
            self.access_key_id
            and self.access_key_id.get_secret_value()
            and self.secret_access_key
            and self.secret_access_key.get_secret_value()
        )

    def to_access_config(self) -> S3AccessConfig:
        """Build the bucket access policy."""
        return S3AccessConfig(
            allowed_buckets=self.buckets,
            max_buckets=self.max_buckets,
        )

    def client_kwargs(self) -> dict[str, Any]:
        """
        Build keyword arguments for ``boto3.client("s3", ...)``.

        Credentials are only passed when both halves are set; otherwise
        boto3 resolves credentials through its default chain.
        """
        config_kwargs: dict[str, Any] = {"signature_version": "s3v4"}
        if self.force_path_style:
            config_kwargs["s3"] = {"addressing_style": "path"}

        kwargs: dict[str, Any] = {
            "region_name": self.region,
            "config": Config(**config_kwargs),
        }
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        if self.has_credentials:
            kwargs["aws_access_key_id"] = self.access_key_id.get_secret_value()
            kwargs["aws_secret_access_key"] = self.secret_access_key.get_secret_value()
        return kwargs

    def create_client(self, client_factory: Optional[Callable[..., Any]] = None) -> Any:
        """
        Create the S3 client.

        Args:
            client_factory: Callable with the signature of boto3.client

        Returns:
            S3 client
        """
        factory = client_factory or boto3.client
        return factory("s3", **self.client_kwargs())

    def __repr__(self) -> str:
        """Safe representation that hides credentials."""
        credentials = "'***'" if self.has_credentials else "None"
        return (
            f"S3Settings(region={self.region!r}, buckets={self.buckets!r}, "
            f"max_buckets={self.max_buckets}, endpoint_url={self.endpoint_url!r}, "
            f"credentials={credentials})"
        )

    def __str__(self) -> str:
        """Safe string representation."""
        return (
            f"S3Settings(region={self.region}, "
            f"buckets={len(self.allowed_buckets) or 'all'})"
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "S3Settings":
        """
        Load configuration from a YAML or JSON file.

        File format (YAML):
            ```yaml
            region: eu-central-1
            buckets: [reports, invoices]
            max_buckets: 10
            endpoint_url: http://localhost:9000
            force_path_style: true
            access_key_id: minioadmin
            secret_access_key: minioadmin
            ```

        Values from the file take precedence over the environment.

        Args:
            path: Path to configuration file

        Returns:
            Loaded S3Settings instance

        Raises:
            FileNotFoundError: If the config file doesn't exist
        """
        path = Path(path).expanduser().resolve()

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text()

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif path.suffix == ".json":
            data = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> "S3Settings":
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary (field names)

        Returns:
            S3Settings instance
        """
        # Pass values under their env aliases so they outrank the environment
        aliases = {
            name: field.validation_alias for name, field in cls.model_fields.items()
        }
        return cls(**{aliases.get(key) or key: value for key, value in data.items()})

    def to_dict(self, include_secrets: bool = False) -> dict[str, Any]:
        """
        Export configuration to a dictionary.

        Args:
            include_secrets: If True, include the secret key (DANGER!)

        Returns:
            Dictionary representation
        """
        data: dict[str, Any] = {
            "region": self.region,
            "buckets": self.allowed_buckets,
            "max_buckets": self.max_buckets,
            "force_path_style": self.force_path_style,
        }
        if self.endpoint_url:
            data["endpoint_url"] = self.endpoint_url
        if self.has_credentials:
            data["access_key_id"] = self.access_key_id.get_secret_value()
            data["secret_access_key"] = (
                self.secret_access_key.get_secret_value() if include_secrets else "***"
            )
        return data
