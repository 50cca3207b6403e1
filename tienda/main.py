import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from tienda.config.settings import settings
from tienda.config.database import Base, engine
from tienda.core.exceptions import setup_exception_handlers
from tienda.core.middleware import setup_middleware
from tienda.api.v1.router import api_router
from tienda.shared.database import models  # noqa: F401  registra las tablas en Base

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🚀 {settings.app_name} starting (v{settings.version})")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"📦 Upload backend: {settings.upload_backend}")
    Base.metadata.create_all(bind=engine)

    yield

    # Shutdown
    logger.info(f"🛑 {settings.app_name} shutting down")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Tienda en línea y panel administrativo: catálogo, ventas, slides e importador",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router)

# Archivos subidos con el backend local
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads"
)

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name}",
        "version": settings.version,
        "status": "running",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "api": "/api/v1"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tienda.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
