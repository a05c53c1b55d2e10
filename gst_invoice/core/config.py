from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from the process + optionally from a local .env file
    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_invoice", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # PDF generation webhook (n8n automation)
    INVOICE_WEBHOOK_URL: str = Field(default="", validation_alias=AliasChoices("INVOICE_WEBHOOK_URL", "invoice_webhook_url"))
    INVOICE_WEBHOOK_TIMEOUT: float = Field(
        default=30.0,
        validation_alias=AliasChoices("INVOICE_WEBHOOK_TIMEOUT", "invoice_webhook_timeout"),
    )

    # Record store (Supabase PostgREST)
    SUPABASE_URL: str = Field(default="", validation_alias=AliasChoices("SUPABASE_URL", "supabase_url"))
    SUPABASE_ANON_KEY: str = Field(default="", validation_alias=AliasChoices("SUPABASE_ANON_KEY", "supabase_anon_key"))
    RECORD_FETCH_LIMIT: int = Field(default=100, validation_alias=AliasChoices("RECORD_FETCH_LIMIT", "record_fetch_limit"))

    # GST
    DEFAULT_GST_RATE: float = Field(default=18.0, validation_alias=AliasChoices("DEFAULT_GST_RATE", "default_gst_rate"))

    # Seller profile (local JSON file)
    SELLER_PROFILE_PATH: str = Field(
        default="seller_profile.json",
        validation_alias=AliasChoices("SELLER_PROFILE_PATH", "seller_profile_path"),
    )


settings = Settings()
