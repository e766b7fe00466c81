from decouple import config, Csv

class Settings:
    # Database Configuration
    DATABASE_URL: str = config("DATABASE_URL", default="sqlite:///./courier.db")

    # Security Configuration
    SECRET_KEY: str = config("SECRET_KEY", default="your-secret-key-here-change-in-production")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = config("ACCESS_TOKEN_EXPIRE_MINUTES", default=30, cast=int)

    # CORS Configuration
    CORS_ORIGINS: list = config(
        "CORS_ORIGINS",
        default="http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173",
        cast=Csv()
    )

    # Order Configuration
    ORDER_NUMBER_PREFIX: str = config("ORDER_NUMBER_PREFIX", default="LBC")
    DEFAULT_PAGE_SIZE: int = config("DEFAULT_PAGE_SIZE", default=50, cast=int)
    MAX_PAGE_SIZE: int = config("MAX_PAGE_SIZE", default=200, cast=int)
    INSURANCE_RATE: str = config("INSURANCE_RATE", default="0.10")

    # Rate Limiting (0 disables the limiter)
    RATE_LIMIT_CALLS: int = config("RATE_LIMIT_CALLS", default=100, cast=int)
    RATE_LIMIT_PERIOD: int = config("RATE_LIMIT_PERIOD", default=60, cast=int)

    # Environment
    ENVIRONMENT: str = config("ENVIRONMENT", default="development")
    DEBUG: bool = config("DEBUG", default=True, cast=bool)

    # Logging
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")

settings = Settings()
