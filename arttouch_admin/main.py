from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
import logging

from arttouch_admin.config import get_settings
from arttouch_admin.routers import admin_dashboard, categories, orders, products

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

app = FastAPI(title="Art Touch Admin")


@app.on_event("startup")
def on_startup():
    # create_all only sees tables whose model modules have been imported
    from arttouch_admin.database import Base, engine
    import arttouch_admin.models.category  # noqa: F401
    import arttouch_admin.models.product  # noqa: F401
    import arttouch_admin.models.user  # noqa: F401
    import arttouch_admin.models.order  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logging.getLogger(__name__).info("Database schema ready")


# StaticFiles will not mount a missing directory
settings.MEDIA_ROOT.mkdir(parents=True, exist_ok=True)

# Serve uploaded product images
app.mount(settings.MEDIA_URL, StaticFiles(directory=str(settings.MEDIA_ROOT)), name="media")

# CORS configuration for the admin frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(admin_dashboard.router, prefix="/api/admin", tags=["admin-dashboard"])
app.include_router(products.router, prefix="/api/admin/products", tags=["admin-products"])
app.include_router(categories.router, prefix="/api/admin/categories", tags=["admin-categories"])
app.include_router(orders.router, prefix="/api/admin/orders", tags=["admin-orders"])


# --- Entry point for local runs ---
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("arttouch_admin.main:app", host="0.0.0.0", port=settings.PORT, reload=False)
