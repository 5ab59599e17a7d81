import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./jobportal.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# ✅ Trash lifecycle
TRASH_RETENTION_DAYS = int(os.getenv("TRASH_RETENTION_DAYS", "5"))
ADMIN_USER_ID = os.getenv("ADMIN_USER_ID", "admin")

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5000",
    ).split(",")
    if origin.strip()
]

# ✅ Client
JOBPORTAL_API_URL = os.getenv("JOBPORTAL_API_URL", "http://localhost:5000")
CLIENT_STATE_DIR = os.getenv("CLIENT_STATE_DIR", ".jobportal")
