# services/api/settings.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict, Field
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    # Storage settings
    # Default to local JSON files; override via .env (STORAGE_BACKEND=sqlite|pg|supabase)
    storage_backend: str = "json"
    data_dir: str = "data"
    db_url: str = "sqlite:///data/potholes.db"

    # ===== Supabase (hosted Postgres data API) =====
    # Example in .env:
    # SUPABASE_URL=https://<project>.supabase.co
    # SUPABASE_KEY=<anon or service key>
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_timeout_s: float = 15.0

    # CORS settings
    allowed_origins: str = "http://localhost:5173,http://localhost:8080,http://localhost:3000"

    # ---- Repair lifecycle ----

    # Entering "scheduled" stamps scheduled_repair_date this many days out
    scheduled_repair_lead_days: int = 7

    # ---- Pothole list snapshot ----

    # Seconds a fetched pothole list is served before hitting storage again.
    # 0 disables the snapshot.
    snapshot_ttl_s: float = 15.0

    # Load the demo dataset at startup when the store is empty
    seed_demo_data: bool = False

    # Max rows written into a single export (CSV/GeoJSON/Excel)
    max_export_rows: int = 5000

    log_level: str = Field(default="INFO", description="Root logging level")

    model_config = ConfigDict(
        # Always load .env from the same folder as this settings.py
        env_file=str(Path(__file__).resolve().parent / ".env"),
        extra="ignore",
    )

    def get_origins_list(self) -> List[str]:
        """Parse comma-separated origins into a list."""
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


_settings_instance: Optional[Settings] = None

def get_settings() -> Settings:
    """Singleton pattern for settings."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
