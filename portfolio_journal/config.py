from pydantic_settings import BaseSettings, SettingsConfigDict

from portfolio_journal.schemas import DataSource


class Settings(BaseSettings):
    default_data_source: DataSource = "mock"
    request_timeout_seconds: float = 10.0
    page_size: int = 5
    log_level: str = "INFO"
    log_format: str = "json"
    log_include_stack: bool = False
    log_redact_fields: str = "authorization,apikey,x-finnhub-token,token,password,admin_password"

    # Market data (Finnhub)
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    finnhub_api_key: str = ""

    # Holdings database (Supabase PostgREST)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_portfolio_table: str = "portfolio"

    # Management dialog password. Compared in the open, see access_gate.py.
    admin_password: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="JOURNAL_")


settings = Settings()
