import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./rent.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    STORAGE_BACKEND = data.get("STORAGE_BACKEND", "local")
    STORAGE_LOCAL_ROOT = data.get("STORAGE_LOCAL_ROOT", os.path.join(ROOT_PATH, "storage"))
    STORAGE_BASE_URL = data.get("STORAGE_BASE_URL", "http://localhost:8000/files")
    S3_BUCKET = data.get("S3_BUCKET", "rent-documents")
    S3_REGION = data.get("S3_REGION", None)
    S3_ENDPOINT_URL = data.get("S3_ENDPOINT_URL", None)
    STORAGE_TIMEOUT_SECONDS = float(data.get("STORAGE_TIMEOUT_SECONDS", 10))
    PRESIGNED_URL_TTL_SECONDS = int(data.get("PRESIGNED_URL_TTL_SECONDS", 900))
    RECURRING_INVOICE_COUNT = int(data.get("RECURRING_INVOICE_COUNT", 11))
    ENABLE_OVERDUE_SCANNER = bool(data.get("ENABLE_OVERDUE_SCANNER", False))
    OVERDUE_SCAN_INTERVAL_SECONDS = int(data.get("OVERDUE_SCAN_INTERVAL_SECONDS", 3600))
