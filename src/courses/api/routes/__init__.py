from courses.api.routes.availability import router as availability_router
from courses.api.routes.courses import router as courses_router

__all__ = ["courses_router", "availability_router"]
