from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Bypasses RLS; used for role lookups

    # Admin access
    admin_roles: str = "admin,superadmin"  # values of user_roles.role allowed to manage workshops

    # Workshop defaults
    group_code_length: int = 6
    group_code_max_attempts: int = 5
    bulk_group_limit: int = 100
    default_task_points: int = 10
    default_task_timer_minutes: int = 30

    # Realtime
    realtime_heartbeat_seconds: float = 30.0
    realtime_queue_size: int = 100  # pending change signals per socket before new ones are dropped

    # App
    app_name: str = "workshop-admin-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_admin_roles_list(self) -> List[str]:
        return [r.strip() for r in self.admin_roles.split(",") if r.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
