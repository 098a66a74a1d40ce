# app/routers/__init__.py

from .status.status_router import router as status_router

from .workflow.quote_router import router as quote_router


__all__ = [
"status_router",

"quote_router",

]
