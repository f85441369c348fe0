"""Configuration management for pix-bank."""

from dataclasses import dataclass, field
from pathlib import Path

from pix_bank.exceptions import ConfigurationError


@dataclass
class PersistenceConfig:
    """Snapshot file configuration."""

    state_file: Path = field(default_factory=lambda: Path("pix_bank_state.json"))
    pretty_json: bool = False
    enabled: bool = True


@dataclass
class OverdraftConfig:
    """Range for the overdraft limit granted to special accounts.

    The limit is a whole value drawn uniformly from ``[minimum, maximum)``.
    """

    minimum: int = 300
    maximum: int = 1000

    def __post_init__(self) -> None:
        if self.minimum < 0 or self.minimum >= self.maximum:
            raise ConfigurationError(
                f"Invalid overdraft range [{self.minimum}, {self.maximum})"
            )


@dataclass
class BankConfig:
    """Main configuration for pix-bank."""

    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    overdraft: OverdraftConfig = field(default_factory=OverdraftConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "BankConfig":
        """Create config from environment variables."""
        import os

        persistence = PersistenceConfig(
            state_file=Path(os.getenv("PIX_BANK_STATE_FILE", "pix_bank_state.json")),
            pretty_json=os.getenv("PIX_BANK_PRETTY_JSON", "false").lower() == "true",
            enabled=os.getenv("PIX_BANK_PERSIST", "true").lower() != "false",
        )

        overdraft = OverdraftConfig(
            minimum=_int_env("PIX_BANK_OVERDRAFT_MIN", 300),
            maximum=_int_env("PIX_BANK_OVERDRAFT_MAX", 1000),
        )

        seed_str = os.getenv("PIX_BANK_SEED")

        return cls(
            persistence=persistence,
            overdraft=overdraft,
            seed=_parse_int("PIX_BANK_SEED", seed_str) if seed_str else None,
            log_level=os.getenv("PIX_BANK_LOG_LEVEL", "INFO"),
            log_format=os.getenv("PIX_BANK_LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: int) -> int:
    import os

    raw = os.getenv(name)
    if raw is None:
        return default
    return _parse_int(name, raw)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
