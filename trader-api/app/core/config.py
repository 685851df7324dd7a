from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET: str = "CHANGE_ME"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Economy
    STARTING_MONEY: int = 50000
    PRICE_UPDATE_INTERVAL_HOURS: int = 3
    SCHEDULER_ENABLED: bool = True

settings = Settings()
