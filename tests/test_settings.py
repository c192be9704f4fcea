"""Tests for settings."""

import json

import pytest
import yaml

from s3_mcp.settings import S3Settings

ENV_VARS = (
    "AWS_REGION",
    "S3_BUCKETS",
    "S3_MAX_BUCKETS",
    "AWS_ENDPOINT",
    "AWS_S3_FORCE_PATH_STYLE",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove S3-related variables from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestS3Settings:
    """Tests for S3Settings."""

    def test_defaults(self):
        """Test default configuration values."""
        settings = S3Settings()
        assert settings.region == "us-east-1"
        assert settings.buckets == ""
        assert settings.max_buckets == 5
        assert settings.endpoint_url is None
        assert settings.force_path_style is False
        assert settings.has_credentials is False

    def test_from_env(self, monkeypatch):
        """Test loading from environment variables."""
        monkeypatch.setenv("AWS_REGION", "eu-central-1")
        monkeypatch.setenv("S3_BUCKETS", "reports, invoices,")
        monkeypatch.setenv("S3_MAX_BUCKETS", "10")
        monkeypatch.setenv("AWS_ENDPOINT", "http://localhost:9000")
        monkeypatch.setenv("AWS_S3_FORCE_PATH_STYLE", "true")

        settings = S3Settings()
        assert settings.region == "eu-central-1"
        assert settings.allowed_buckets == ["reports", "invoices"]
        assert settings.max_buckets == 10
        assert settings.endpoint_url == "http://localhost:9000"
        assert settings.force_path_style is True

    def test_path_style_requires_literal_true(self, monkeypatch):
        """Test that only "true" enables path-style addressing."""
        monkeypatch.setenv("AWS_S3_FORCE_PATH_STYLE", "1")
        assert S3Settings().force_path_style is False

        monkeypatch.setenv("AWS_S3_FORCE_PATH_STYLE", "TRUE")
        assert S3Settings().force_path_style is True

    def test_invalid_max_buckets(self, monkeypatch):
        """Test that a non-numeric max bucket count is rejected."""
        monkeypatch.setenv("S3_MAX_BUCKETS", "many")
        with pytest.raises(ValueError):
            S3Settings()

    def test_to_access_config(self):
        """Test building the access policy."""
        access = S3Settings(buckets="a,b", max_buckets=3).to_access_config()
        assert access.allowed_buckets == ("a", "b")
        assert access.max_buckets == 3

    def test_bucket_list(self):
        """Test passing the allow-list as a list."""
        settings = S3Settings(buckets=["reports", "invoices"])
        assert settings.allowed_buckets == ["reports", "invoices"]

    def test_settings_are_frozen(self):
        """Test that settings cannot be changed after loading."""
        settings = S3Settings()
        with pytest.raises(Exception):
            settings.region = "ap-south-1"

    def test_client_kwargs_minimal(self):
        """Test client arguments without endpoint or credentials."""
        kwargs = S3Settings().client_kwargs()
        assert kwargs["region_name"] == "us-east-1"
        assert "endpoint_url" not in kwargs
        assert "aws_access_key_id" not in kwargs
        assert kwargs["config"].signature_version == "s3v4"

    def test_client_kwargs_minio(self, monkeypatch):
        """Test client arguments for a MinIO-style setup."""
        monkeypatch.setenv("AWS_ENDPOINT", "http://localhost:9000")
        monkeypatch.setenv("AWS_S3_FORCE_PATH_STYLE", "true")
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "minioadmin")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "miniosecret")

        kwargs = S3Settings().client_kwargs()
        assert kwargs["endpoint_url"] == "http://localhost:9000"
        assert kwargs["aws_access_key_id"] == "minioadmin"
        assert kwargs["aws_secret_access_key"] == "miniosecret"
        assert kwargs["config"].s3 == {"addressing_style": "path"}

    def test_partial_credentials_ignored(self, monkeypatch):
        """Test that credentials are only used as a complete pair."""
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAEXAMPLE")

        settings = S3Settings()
        assert settings.has_credentials is False
        assert "aws_access_key_id" not in settings.client_kwargs()

    def test_create_client_uses_factory(self):
        """Test that create_client passes the client arguments through."""
        calls = []

        def factory(service, **kwargs):
            calls.append((service, kwargs))
            return "client"

        assert S3Settings(region="eu-west-1").create_client(factory) == "client"
        assert calls[0][0] == "s3"
        assert calls[0][1]["region_name"] == "eu-west-1"

    def test_repr_hides_secrets(self):
        """Test that secrets don't appear in representations."""
        settings = S3Settings(access_key_id="AKIAEXAMPLE", secret_access_key="topsecret")

        assert "topsecret" not in repr(settings)
        assert "topsecret" not in str(settings)
        assert "***" in repr(settings)
        assert settings.to_dict()["secret_access_key"] == "***"
        assert settings.to_dict(include_secrets=True)["secret_access_key"] == "topsecret"

    def test_from_yaml_file(self, tmp_path):
        """Test loading from a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.dump(
                {
                    "region": "eu-north-1",
                    "buckets": ["reports"],
                    "max_buckets": 2,
                    "endpoint_url": "http://minio:9000",
                    "force_path_style": True,
                }
            )
        )

        settings = S3Settings.from_file(path)
        assert settings.region == "eu-north-1"
        assert settings.allowed_buckets == ["reports"]
        assert settings.max_buckets == 2
        assert settings.force_path_style is True

    def test_from_json_file(self, tmp_path):
        """Test loading from a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"buckets": "a,b", "max_buckets": 1}))

        settings = S3Settings.from_file(path)
        assert settings.allowed_buckets == ["a", "b"]
        assert settings.max_buckets == 1

    def test_from_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            S3Settings.from_file(tmp_path / "missing.yaml")
