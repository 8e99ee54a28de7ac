from rest_framework import status
from rest_framework.response import Response


def api_success(data=None, message=None, meta=None, status_code=status.HTTP_200_OK, **extra):
    """
    Small helper to standardize success responses across the apps.
    Always returns: {"success": true, "message"?, "data"?, "meta"?, **extra}
    """
    body = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    body.update(extra)
    return Response(body, status=status_code)


def page_meta(page) -> dict:
    """Pagination metadata for a workspace.queries.Page."""
    return {
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "totalPages": page.total_pages,
    }
