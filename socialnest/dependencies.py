from socialnest.config import Settings


def get_settings() -> Settings:
    return Settings()
