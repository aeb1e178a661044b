"""Configuration management for rent-ledger."""

from dataclasses import dataclass, field
from pathlib import Path

from rent_ledger.exceptions import ConfigurationError
from rent_ledger.store import InMemoryLedgerStore, JsonFileLedgerStore, LedgerStore, PostgresLedgerStore

STORE_BACKENDS = ("memory", "json", "postgres")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "rent_ledger"
    user: str = "postgres"
    password: str = "postgres"
    table: str = "rent_ledger"
    ledger_key: str = "default"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StoreConfig:
    """Ledger store selection."""

    backend: str = "json"
    json_path: Path = field(default_factory=lambda: Path("ledger.json"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for rent-ledger."""

    store: StoreConfig = field(default_factory=StoreConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    collector_id: str = "collector1"
    credentials_file: Path | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        store = StoreConfig(
            backend=os.getenv("RENT_LEDGER_STORE", "json").lower(),
            json_path=Path(os.getenv("RENT_LEDGER_PATH", "ledger.json")),
            pretty_json=os.getenv("RENT_LEDGER_PRETTY_JSON", "false").lower() == "true",
        )

        try:
            port = int(os.getenv("POSTGRES_PORT", "5432"))
        except ValueError as exc:
            raise ConfigurationError(f"POSTGRES_PORT must be an integer: {exc}") from exc

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=port,
            database=os.getenv("POSTGRES_DB", "rent_ledger"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            table=os.getenv("RENT_LEDGER_TABLE", "rent_ledger"),
            ledger_key=os.getenv("RENT_LEDGER_KEY", "default"),
        )

        credentials_file = os.getenv("RENT_LEDGER_CREDENTIALS")

        return cls(
            store=store,
            postgres=postgres,
            collector_id=os.getenv("RENT_LEDGER_COLLECTOR_ID", "collector1"),
            credentials_file=Path(credentials_file) if credentials_file else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def build_store(config: LedgerConfig) -> LedgerStore:
    """Instantiate the ledger store selected by ``config.store.backend``."""
    backend = config.store.backend
    if backend == "memory":
        return InMemoryLedgerStore()
    if backend == "json":
        return JsonFileLedgerStore(config.store.json_path, pretty=config.store.pretty_json)
    if backend == "postgres":
        return PostgresLedgerStore(
            config.postgres.connection_string,
            table=config.postgres.table,
            ledger_key=config.postgres.ledger_key,
        )
    raise ConfigurationError(
        f"Unknown store backend {backend!r}; expected one of {', '.join(STORE_BACKENDS)}"
    )
