# app/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()  # Carga las variables de entorno

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./finanzas.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

SECRET_KEY = os.getenv("SECRET_KEY", "cambia-esta-clave")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Primer mes seleccionable en los filtros de período (YYYY-MM)
PERIOD_EPOCH = os.getenv("PERIOD_EPOCH", "2025-01")
PERIOD_LOCALE = os.getenv("PERIOD_LOCALE", "es")

# "sql" usa la base propia, "postgrest" un backend hospedado (Supabase)
TRANSACTION_STORE = os.getenv("TRANSACTION_STORE", "sql")
POSTGREST_URL = os.getenv("POSTGREST_URL")
POSTGREST_API_KEY = os.getenv("POSTGREST_API_KEY")
POSTGREST_TIMEOUT = float(os.getenv("POSTGREST_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
