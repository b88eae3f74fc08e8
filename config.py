# config.py
import os
from dotenv import load_dotenv
from paths import data_file

# Load environment variables from .env
load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{data_file('carmart.db')}")

# API
PORT = int(os.getenv("PORT", "5000"))
API_PREFIX = os.getenv("API_PREFIX", "api").strip("/")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Authentication
JWT_SECRET = os.getenv("JWT_SECRET", "carmart-development-secret")
JWT_EXPIRE = os.getenv("JWT_EXPIRE", "1h")
JWT_ALGORITHM = "HS256"
AUTH_USERNAME = os.getenv("AUTH_USERNAME", "saadshd")
AUTH_PASSWORD = os.getenv("AUTH_PASSWORD", "saadshd")

# Listing and uploads
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "3"))
MAX_IMAGE_SIZE_KB = int(os.getenv("MAX_IMAGE_SIZE_KB", "500"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
