from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    LOGGING_DIR: str = ""
    SLACK_DEBUG: bool = False

    APP_TOKEN: str = Field(min_length=1)
    BOT_TOKEN: str = Field(min_length=1)
    VERBOSITY: int = Field(default=0, ge=0)
    ARCHIVE_THRESHOLD: int = Field(ge=0)


    class Config:
        env_prefix = "AUTO_ARCHIVER_"
        env_file = ".env"
        extra = "ignore"
        frozen = True
