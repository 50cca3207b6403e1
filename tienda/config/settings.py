from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # App Info
    app_name: str = "Tienda API"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str

    # CORS
    allowed_origins: List[str] = ["http://localhost:3000"]

    # Tasa de cambio (BCV vía DolarApi)
    exchange_rate_url: str = "https://ve.dolarapi.com/v1/dolares/oficial"
    exchange_rate_ttl_seconds: int = 3600  # 1 hora
    exchange_rate_timeout_seconds: float = 10.0
    fallback_exchange_rate: float = 50.0

    # Scraper
    scraper_timeout_seconds: float = 15.0

    # File Upload
    upload_backend: str = Field(
        default="local",
        description="Destino de las subidas: 'local' o 'cloudinary'"
    )
    upload_dir: str = "static/uploads"
    upload_url_prefix: str = "/uploads"
    max_local_image_size: int = 5 * 1024 * 1024  # 5MB
    max_image_size: int = 10 * 1024 * 1024  # 10MB
    max_video_size: int = 60 * 1024 * 1024  # 60MB

    # External Services
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = "daian-store"

    # WhatsApp (checkout)
    whatsapp_phone: str = "584164974877"
    store_contact_name: str = "Daian"

    # Importación de productos
    placeholder_image_url: str = "https://via.placeholder.com/400x500?text=Sin+Imagen"
    import_default_price: float = 10.0
    import_default_stock: int = 10

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
