from starlette.middleware.base import BaseHTTPMiddleware

from .observability import correlation_context

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        with correlation_context(request.headers.get(REQUEST_ID_HEADER)) as correlation_id:
            request.state.correlation_id = correlation_id
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
