"""
Settings and configuration for the S3 MCP server.

Example:
    ```python
    from s3_mcp.settings import S3Settings

    # Load from the environment (AWS_REGION, S3_BUCKETS, ...)
    settings = S3Settings()

    # Or from a file
    settings = S3Settings.from_file("~/.s3-mcp/config.yaml")

    client = settings.create_client()
    access = settings.to_access_config()
    ```
"""

from s3_mcp.settings.config import S3Settings

__all__ = [
    "S3Settings",
]
