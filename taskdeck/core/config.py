from os import getenv

class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./taskdeck.db")
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "15"))  # expire au bout de 15 minutes
    JWT_REFRESH_EXPIRE_MIN = int(getenv("JWT_REFRESH_EXPIRE_MIN", "43200"))  # expire au bout d'1 mois

    # 0 = lundi ... 6 = dimanche
    WEEK_STARTS_ON = int(getenv("WEEK_STARTS_ON", "6"))
    UPCOMING_DAYS = int(getenv("UPCOMING_DAYS", "7"))
    NOTIFICATIONS_LIMIT = int(getenv("NOTIFICATIONS_LIMIT", "50"))
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

settings = Settings()
