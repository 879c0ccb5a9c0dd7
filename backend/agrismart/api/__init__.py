from agrismart.api.routes import router

__all__ = ["router"]
