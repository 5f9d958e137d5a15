"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from finledger.infrastructure.logging.logger import get_app_logger


PLAID_ENVIRONMENTS = ("sandbox", "production")
TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class FinLedgerSettings:
    """Settings for the aggregator, the assistant and the data source.

    Attributes:
        plaid_client_id: Plaid client id, empty when not configured.
        plaid_secret: Plaid secret, empty when not configured.
        plaid_env: Plaid environment (sandbox or production).
        plaid_timeout_seconds: Timeout applied to each Plaid call.
        plaid_page_size: Transactions requested per sync page.
        gemini_api_key: Gemini API key, empty when not configured.
        gemini_model: Gemini model name.
        assistant_streaming: Stream assistant replies.
        assistant_history_limit: Maximum turns forwarded to the assistant.
        use_demo_data: Initial data-source mode.
    """

    plaid_client_id: str = ""
    plaid_secret: str = ""
    plaid_env: str = "sandbox"
    plaid_timeout_seconds: float = 30.0
    plaid_page_size: int = 500
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    assistant_streaming: bool = True
    assistant_history_limit: int = 20
    use_demo_data: bool = True

    @property
    def is_aggregator_configured(self) -> bool:
        return bool(self.plaid_client_id and self.plaid_secret)

    @property
    def is_assistant_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @classmethod
    def from_env(cls) -> "FinLedgerSettings":
        """Build settings from environment variables.

        Values from a ``.env`` file are loaded first. Invalid values fall back
        to their defaults with a warning.

        Returns:
            FinLedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        defaults = cls()

        plaid_env = os.getenv("PLAID_ENV", defaults.plaid_env).strip().lower()
        if plaid_env not in PLAID_ENVIRONMENTS:
            logger.warning(
                f"Unknown PLAID_ENV {plaid_env!r}; using {defaults.plaid_env}"
            )
            plaid_env = defaults.plaid_env

        return cls(
            plaid_client_id=os.getenv("PLAID_CLIENT_ID", "").strip(),
            plaid_secret=os.getenv("PLAID_SECRET", "").strip(),
            plaid_env=plaid_env,
            plaid_timeout_seconds=cls._read_number(
                "PLAID_TIMEOUT_SECONDS",
                defaults.plaid_timeout_seconds,
                float,
                logger,
            ),
            plaid_page_size=cls._read_number(
                "PLAID_PAGE_SIZE",
                defaults.plaid_page_size,
                int,
                logger,
            ),
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            gemini_model=(
                os.getenv("GEMINI_MODEL", "").strip() or defaults.gemini_model
            ),
            assistant_streaming=cls._read_flag(
                "ASSISTANT_STREAMING",
                defaults.assistant_streaming,
                logger,
            ),
            assistant_history_limit=cls._read_number(
                "ASSISTANT_HISTORY_LIMIT",
                defaults.assistant_history_limit,
                int,
                logger,
            ),
            use_demo_data=cls._read_flag(
                "USE_DEMO_DATA",
                defaults.use_demo_data,
                logger,
            ),
        )

    @staticmethod
    def _read_flag(name: str, default: bool, logger) -> bool:
        """Parse a boolean environment variable.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            bool: Parsed flag.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        value = raw.strip().lower()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean for {name}: {raw!r}")
        return default

    @staticmethod
    def _read_number(name: str, default, cast, logger):
        """Parse a positive numeric environment variable.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            cast: Numeric type to convert to.
            logger: Logger used for warnings.

        Returns:
            Parsed value, or ``default``.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = cast(raw.strip())
        except ValueError:
            logger.warning(f"Invalid number for {name}: {raw!r}")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive, got {raw!r}")
            return default
        return value


__all__ = ["FinLedgerSettings"]
