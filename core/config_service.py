from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError


class ProviderSettings(BaseModel):
    binance_base_url: str = "https://api.binance.com"
    coingecko_base_url: str = "https://api.coingecko.com"
    lcx_base_url: str = "https://exchange-api.lcx.com"
    lcx_api_version: str = "1.1.0"


class HttpSettings(BaseModel):
    timeout_seconds: float = Field(10, gt=0)
    max_retries: int = Field(2, ge=0, description="extra attempts against the primary provider")
    backoff_seconds: float = Field(1.0, ge=0)
    user_agent: str = "copilot-marketdata/0.1 (+https://github.com/copilot-marketdata)"
    max_workers: int = Field(8, ge=1)


class FallbackSettings(BaseModel):
    quote_suffixes: list[str] = ["USDT", "BUSD", "USDC", "FDUSD", "TUSD", "USD", "EUR", "BTC", "ETH", "BNB"]
    use_static_symbols: bool = Field(True, description="serve the built-in symbol list when exchange info fails")


class AppSettings(BaseModel):
    log_level: str = "INFO"
    log_path: Optional[str] = Field("logs/marketdata.log", description="null logs to the console only")


class Config(BaseModel):
    app: AppSettings = AppSettings()
    providers: ProviderSettings = ProviderSettings()
    http: HttpSettings = HttpSettings()
    fallback: FallbackSettings = FallbackSettings()


class ConfigService:
    def __init__(self, default_path: Path = Path("config/config.yaml")) -> None:
        self.default_path = default_path
        self.config = Config()
        self.last_loaded: Optional[Path] = None

    def load(self, path: Optional[Path] = None) -> Config:
        path = path or self.default_path
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        try:
            self.config = Config(**data)
            self.last_loaded = path
            return self.config
        except ValidationError as exc:
            raise ValueError(f"Config validation error: {exc}") from exc

    def load_or_default(self, path: Optional[Path] = None) -> Config:
        try:
            return self.load(path)
        except FileNotFoundError:
            return self.config

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or self.default_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(self.config.model_dump(), fh, allow_unicode=True)
        self.last_loaded = path
        return path

    def active_config_name(self) -> str:
        return self.last_loaded.name if self.last_loaded else self.default_path.name
