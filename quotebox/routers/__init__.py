from quotebox.routers.quotes import router as quotes_router

__all__ = ['quotes_router']
