from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    app_env: str
    library_path: str
    use_sample_data: bool
    notifications_enabled: bool
    notification_hour: int
    notification_minute: int
    log_level: str

    @staticmethod
    def from_env() -> "Settings":
        def _b(name: str, default: str) -> bool:
            return os.getenv(name, default).strip() in ("1", "true", "True", "yes", "YES")

        def _i(name: str, default: str) -> int:
            return int(os.getenv(name, default).strip())

        return Settings(
            app_env=os.getenv("APP_ENV", "dev").strip(),
            library_path=os.getenv("LIBRARY_PATH", "").strip(),
            use_sample_data=_b("USE_SAMPLE_DATA", "1"),
            notifications_enabled=_b("NOTIFICATIONS_ENABLED", "1"),
            notification_hour=_i("NOTIFICATION_HOUR", "9"),
            notification_minute=_i("NOTIFICATION_MINUTE", "0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )
