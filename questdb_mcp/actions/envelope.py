"""Builders for the response envelope every action handler returns."""

import json
from typing import Any, Optional

ToolResponse = dict[str, Any]


def text_response(text: str, structured: Optional[dict[str, Any]] = None) -> ToolResponse:
    response: ToolResponse = {"content": [{"type": "text", "text": text}]}
    if structured is not None:
        response["structuredContent"] = structured
    return response


def json_response(payload: Any, structured: Optional[dict[str, Any]] = None) -> ToolResponse:
    return text_response(json.dumps(payload, indent=2, default=str), structured)


def error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


def error_response(message: str) -> ToolResponse:
    return {
        "content": [{"type": "text", "text": f"Error: {message}"}],
        "isError": True,
    }


def is_error(response: ToolResponse) -> bool:
    return bool(response.get("isError"))


def response_text(response: ToolResponse) -> str:
    return "\n".join(item["text"] for item in response["content"] if item.get("type") == "text")
