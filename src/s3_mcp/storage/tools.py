"""
Unified LLM storage tools interface.

Provides a high-level interface for LLMs to browse object storage
through tool calling (MCP tool format).
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from s3_mcp.storage.exceptions import StorageError
from s3_mcp.storage.resource import DEFAULT_MAX_KEYS, S3Resource

logger = logging.getLogger(__name__)

BINARY_PREVIEW_CHARS = 100


@dataclass
class ToolResult:
    """
    Result of a tool call.

    Attributes:
        content: Content blocks (always text blocks)
        is_error: Whether the call failed
    """

    content: list[dict[str, Any]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text_result(cls, text: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}])

    @classmethod
    def error_result(cls, message: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": message}], is_error=True)

    @property
    def text(self) -> str:
        return "".join(block.get("text", "") for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"content": self.content}
        if self.is_error:
            data["isError"] = True
        return data


class ListObjectsArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bucket: str
    prefix: Optional[str] = None
    max_keys: Optional[int] = Field(default=None, alias="maxKeys", ge=1)


class GetObjectArgs(BaseModel):
    bucket: str
    key: str


class LLMStorageTools:
    """
    Unified object storage interface for LLM tool calling.

    Exposes three read-only operations (list-buckets, list-objects,
    get-object). Every call returns a ToolResult; failures are reported
    as error results with a message starting with "Error" instead of
    being raised.

    Usage:
        tools = LLMStorageTools(S3Resource(client, config))

        # Get tool schemas for the LLM
        schemas = tools.get_tool_schemas()

        # Execute a tool call
        result = await tools.execute_tool(
            tool_name="get-object",
            arguments={"bucket": "reports", "key": "summary.md"},
        )
    """

    def __init__(self, resource: S3Resource):
        """
        Initialize LLM storage tools.

        Args:
            resource: Restricted S3 resource shared by all tools
        """
        self.resource = resource

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """
        Get the schemas for all available tools.

        Returns:
            List of tool schemas (name, description, inputSchema)
        """
        return [
            {
                "name": "list-buckets",
                "description": "List available S3 buckets",
                "inputSchema": {
                    "type": "object",
                    "properties": {},
                },
            },
            {
                "name": "list-objects",
                "description": "List objects in an S3 bucket",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "bucket": {
                            "type": "string",
                            "description": "Name of the S3 bucket",
                        },
                        "prefix": {
                            "type": "string",
                            "description": "Prefix to filter objects (like a folder path)",
                        },
                        "maxKeys": {
                            "type": "integer",
                            "description": "Maximum number of objects to return",
                        },
                    },
                    "required": ["bucket"],
                },
            },
            {
                "name": "get-object",
                "description": "Retrieve an object from an S3 bucket",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "bucket": {
                            "type": "string",
                            "description": "Name of the S3 bucket",
                        },
                        "key": {
                            "type": "string",
                            "description": "Key (path) of the object to retrieve",
                        },
                    },
                    "required": ["bucket", "key"],
                },
            },
        ]

    async def execute_tool(
        self, tool_name: str, arguments: Optional[dict[str, Any]] = None
    ) -> ToolResult:
        """
        Execute a tool call from an LLM.

        Args:
            tool_name: Name of the tool to execute
            arguments: Tool arguments (from the LLM tool call)

        Returns:
            Tool execution result

        Raises:
            ValueError: If tool name is unknown
        """
        arguments = arguments or {}

        if tool_name == "list-buckets":
            return await self._list_buckets()
        elif tool_name == "list-objects":
            return await self._list_objects(arguments)
        elif tool_name == "get-object":
            return await self._get_object(arguments)
        else:
            raise ValueError(f"Unknown tool: {tool_name}")

    async def _list_buckets(self) -> ToolResult:
        """List buckets tool implementation."""
        try:
            buckets = await self.resource.list_buckets()
            return ToolResult.text_result(
                json.dumps([b.to_json_dict() for b in buckets], indent=2)
            )
        except StorageError as e:
            logger.warning(f"LLM list-buckets failed: {e}")
            return ToolResult.error_result(f"Error listing buckets: {e}")
        except Exception as e:
            logger.error(f"LLM list-buckets unexpected error: {e}")
            return ToolResult.error_result(f"Error listing buckets: {e}")

    async def _list_objects(self, arguments: dict[str, Any]) -> ToolResult:
        """List objects tool implementation."""
        bucket = arguments.get("bucket")
        try:
            args = ListObjectsArgs.model_validate(arguments)
            objects = await self.resource.list_objects(
                args.bucket,
                prefix=args.prefix or "",
                max_keys=args.max_keys or DEFAULT_MAX_KEYS,
            )
            return ToolResult.text_result(
                json.dumps([o.to_json_dict() for o in objects], indent=2)
            )
        except (StorageError, ValidationError) as e:
            logger.warning(f"LLM list-objects failed: {e}")
            return ToolResult.error_result(
                f"Error listing objects in bucket {bucket}: {e}"
            )
        except Exception as e:
            logger.error(f"LLM list-objects unexpected error: {e}")
            return ToolResult.error_result(
                f"Error listing objects in bucket {bucket}: {e}"
            )

    async def _get_object(self, arguments: dict[str, Any]) -> ToolResult:
        """Get object tool implementation."""
        bucket = arguments.get("bucket")
        key = arguments.get("key")
        try:
            args = GetObjectArgs.model_validate(arguments)
            payload = await self.resource.get_object(args.bucket, args.key)
        except (StorageError, ValidationError) as e:
            logger.warning(f"LLM get-object failed: {e}")
            return ToolResult.error_result(
                f"Error getting object {key} from bucket {bucket}: {e}"
            )
        except Exception as e:
            logger.error(f"LLM get-object unexpected error: {e}")
            return ToolResult.error_result(
                f"Error getting object {key} from bucket {bucket}: {e}"
            )

        if payload.is_text:
            return ToolResult.text_result(payload.text)

        preview = base64.b64encode(payload.binary).decode("ascii")[:BINARY_PREVIEW_CHARS]
        return ToolResult.text_result(
            f"Binary content ({payload.content_type}): base64 data is {preview}..."
        )

    def get_summary(self) -> dict[str, Any]:
        """
        Get a summary of the storage access configuration.

        Returns:
            Dict with configuration summary
        """
        return {
            "allowed_buckets": list(self.resource.config.allowed_buckets),
            "restricted": self.resource.config.is_restricted,
            "max_buckets": self.resource.config.max_buckets,
            "tools": [schema["name"] for schema in self.get_tool_schemas()],
        }
