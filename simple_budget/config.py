import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./simple_budget.db")
APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
# libpq sslmode for non-SQLite databases; production encrypts unless told otherwise
DATABASE_SSLMODE = os.getenv("DATABASE_SSLMODE", "require" if APP_ENV == "production" else "")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


def is_production() -> bool:
    return APP_ENV == "production"
