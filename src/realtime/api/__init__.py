from realtime.api.websocket import router

__all__ = ["router"]
