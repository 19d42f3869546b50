"""
Standard API response helpers.

Provides consistent response formatting for success and error cases.

Example:
    from common.utils import success_response, list_response

    @router.get("/notifications")
    async def get_notifications(user: dict = Depends(require_auth)):
        items = await notification_service.get_notifications(user["user_id"])
        return list_response([n.model_dump(mode="json") for n in items])
"""

from typing import Any, Optional, Dict

from pydantic import BaseModel


def to_jsonable(data: Any) -> Any:
    """Dump pydantic records (alone or in lists/dicts) into JSON-ready values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a standard success response.

    Args:
        data: The response data (records, dict, list, or any serializable type)
        message: Optional success message

    Returns:
        Dictionary with success=True and optional data/message
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = to_jsonable(data)

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
    errors: Optional[list] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "COURSE_NOT_FOUND")
        details: Additional error details
        errors: List of specific errors (for validation errors)

    Returns:
        Dictionary with success=False and error info
    """
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    if errors:
        error["errors"] = errors

    return {"success": False, "error": error}


def list_response(
    items: list,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a simple list response.

    Args:
        items: List of items
        message: Optional success message

    Returns:
        Dictionary with success=True and items list
    """
    response: Dict[str, Any] = {
        "success": True,
        "data": to_jsonable(items),
        "count": len(items),
    }

    if message:
        response["message"] = message

    return response
