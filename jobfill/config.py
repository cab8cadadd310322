from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"

    # Autofill
    uncertain_confidence_threshold: float = 0.7  # below this the shell highlights the field
    enable_site_adapters: bool = True  # False forces the generic detector on every page

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "JOBFILL_"}


settings = Settings()
