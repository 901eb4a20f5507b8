from shared.api.middleware.request_context_middleware import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
