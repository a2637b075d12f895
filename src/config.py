"""SDK configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "order-risk-sdk"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:8080"
    create_order_path: str = "/api/create"
    submit_order_path: str = "/api/submit"
    update_order_path: str = "/api/update"
    cancel_order_path: str = "/api/cancel"
    request_timeout_seconds: float = 10.0

    # Merchant identity and the shared secret used to sign requests
    shop_domain: str = "merchant.example.com"
    auth_token: str = "order-risk-auth-token-dev-only"

    listener_host: str = "127.0.0.1"
    listener_port: int = 8090
    listener_path: str = "/notifications"
    listener_drain_timeout_seconds: float = 5.0
    listener_startup_timeout_seconds: float = 5.0

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}


settings = Settings()
