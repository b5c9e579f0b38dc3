# config.py
import os
from dataclasses import dataclass

from quote.errors import ConfigurationError

CONCEPT_PROD_URL = "https://cls.conceptlogistics.com/Webservices/ConceptLogisticsRateRequest.php"
CONCEPT_TEST_URL = "https://ads.fmcloud.fm/Webservices/ConceptLogisticsRateRequestTEST.php"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Carrier credentials (no fallbacks: unset means unconfigured)
    CONCEPT_USERNAME = os.getenv("CONCEPT_USERNAME", "")
    CONCEPT_PASSWORD = os.getenv("CONCEPT_PASSWORD", "")
    CONCEPT_AUTH_TOKEN = os.getenv("CONCEPT_AUTH_TOKEN", "")
    CONCEPT_USE_TEST_API = _env_flag("CONCEPT_USE_TEST_API", False)
    CONCEPT_API_URL = os.getenv("CONCEPT_API_URL", "")
    CARRIER_TIMEOUT_SECONDS = float(os.getenv("CARRIER_TIMEOUT_SECONDS", "30"))
    # Quote behaviour
    VALIDATE_ZIP_CODES = _env_flag("VALIDATE_ZIP_CODES", True)
    DEFAULT_MARKUP = float(os.getenv("DEFAULT_MARKUP", "50.00"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def config_as_dict(config_class: type[Config] = Config) -> dict:
    """Uppercase attributes of a config class, the way Flask's ``from_object`` reads them."""
    return {
        key: getattr(config_class, key)
        for key in dir(config_class)
        if key.isupper()
    }


@dataclass(frozen=True)
class CarrierSettings:
    """Everything needed to reach the carrier rate API.

    Built once from application config and handed to the quote handler;
    construction fails with :class:`ConfigurationError` when a credential
    is missing or the timeout is not a positive number of seconds.
    """

    endpoint: str
    username: str
    password: str
    auth_token: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        missing = [
            name
            for name, value in (
                ("endpoint", self.endpoint),
                ("username", self.username),
                ("password", self.password),
                ("auth_token", self.auth_token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing)
        if not self.timeout > 0:
            raise ConfigurationError(["timeout"])

    @classmethod
    def from_mapping(cls, config) -> "CarrierSettings":
        endpoint = config.get("CONCEPT_API_URL") or (
            CONCEPT_TEST_URL if config.get("CONCEPT_USE_TEST_API") else CONCEPT_PROD_URL
        )
        timeout = config.get("CARRIER_TIMEOUT_SECONDS")
        if timeout is None or timeout == "":
            timeout = DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(["timeout"])
        return cls(
            endpoint=endpoint,
            username=config.get("CONCEPT_USERNAME") or "",
            password=config.get("CONCEPT_PASSWORD") or "",
            auth_token=config.get("CONCEPT_AUTH_TOKEN") or "",
            timeout=timeout,
        )

    def __repr__(self) -> str:
        # Keep credential values out of logs and tracebacks.
        return f"CarrierSettings(endpoint={self.endpoint!r}, timeout={self.timeout!r})"
