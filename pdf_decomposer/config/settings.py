from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    log_level is read here for the host application, which applies it with
    Log.configure(settings.log_level). The decomposer itself never configures
    logging.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    pdf_password: str | None = None

    tmp_dir: str | None = None
