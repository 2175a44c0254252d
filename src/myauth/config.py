from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # SQLAlchemy async URL, e.g. sqlite+aiosqlite:///./myauth.db
    host: str = "127.0.0.1"
    port: int = 8787
    debug: bool = False
    cors_origins: list[str] = []
    # Emails granted the admin role when they sign in (compared case-insensitively)
    admin_emails: list[str] = ["admin@myauth.com", "admin@example.com", "admin@localhost"]
    bootstrap_admin_email: str = "admin@myauth.com"  # Created when no admin exists yet
    session_ttl_days: int = 7
    demo_email: str = "demo@example.com"  # Signed in by the demo /callback route
    maintenance_on_request: bool = True  # Sweep sessions and bootstrap admin after each response

    model_config = {
        "env_file": [".env"],
        "env_prefix": "MYAUTH_",
        "extra": "ignore",
    }
