from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_forces_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    executor_base_url: str = ""
    executor_api_key: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    debug_logging: bool = False


class SettingsVM:
    """Keeps app settings UI state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig(debug_logging=env_forces_debug())
        self.on_save = on_save

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def executor_base_url(self) -> str:
        return self.config.executor_base_url

    @executor_base_url.setter
    def executor_base_url(self, value: Any) -> None:
        self.config = replace(self.config, executor_base_url=self._coerce_str(value))

    @property
    def executor_api_key(self) -> str:
        return self.config.executor_api_key

    @executor_api_key.setter
    def executor_api_key(self, value: Any) -> None:
        self.config = replace(self.config, executor_api_key=self._coerce_str(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: Any) -> None:
        coerced = self._coerce_int("request_timeout_s", value, minimum=1)
        self.config = replace(self.config, request_timeout_s=coerced)

    @property
    def retries(self) -> int:
        return self.config.retries

    @retries.setter
    def retries(self, value: Any) -> None:
        self.config = replace(self.config, retries=self._coerce_int("retries", value, minimum=0))

    @property
    def debug_logging(self) -> bool:
        return self.config.debug_logging

    @debug_logging.setter
    def debug_logging(self, value: Any) -> None:
        self.config = replace(self.config, debug_logging=self._coerce_bool(value))

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        url = self.executor_base_url
        if url and not url.startswith(("http://", "https://")):
            return False
        return self.request_timeout_s > 0 and self.retries >= 0

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        allowed = set(SettingsConfig.__annotations__)
        unknown = sorted(key for key in payload if key not in allowed)
        if unknown:
            raise ValueError(f"Unknown settings keys: {', '.join(unknown)}")
        for key, value in payload.items():
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self.config)

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings are invalid; check the executor URL and timeouts.")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_str(value: Any) -> str:
        return "" if value is None else str(value).strip()

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: int) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer") from exc
        if number < minimum:
            raise ValueError(f"{name} must be >= {minimum}")
        return number

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
