"""
Shared success response helpers.
"""
from rest_framework import status as http_status
from rest_framework.response import Response


def success_response(data=None, message: str = None, status: int = http_status.HTTP_200_OK, **extra) -> Response:
    """Wrap a payload in the success envelope."""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    body.update(extra)
    return Response(body, status=status)


def paginated_response(items, total: int, page: int, limit: int, message: str = None) -> Response:
    """Success envelope with page/limit pagination metadata."""
    pages = (total + limit - 1) // limit if limit else 0
    return success_response(
        data=items,
        message=message,
        pagination={
            'total': total,
            'page': page,
            'limit': limit,
            'pages': pages,
        },
    )


def parse_pagination(params, default_limit: int = 10, max_limit: int = 100) -> tuple:
    """Read page/limit query params, falling back to sane defaults."""
    try:
        page = max(int(params.get('page', 1)), 1)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(params.get('limit', default_limit))
    except (TypeError, ValueError):
        limit = default_limit
    limit = min(max(limit, 1), max_limit)
    return page, limit
