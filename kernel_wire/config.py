# SPDX-License-Identifier: Apache-2.0
"""Environment-driven configuration for kernel-wire validators."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass(frozen=True)
class ValidatorConfig:
    """Configuration for validation behavior."""

    strict_channels: bool = False
    log_extension_fields: bool = True
    schema_base_url: str = "https://kernel-wire.dev/schemas"

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Create configuration from environment variables."""
        return cls(
            strict_channels=_env_flag("KERNEL_WIRE_STRICT_CHANNELS", "false"),
            log_extension_fields=_env_flag("KERNEL_WIRE_LOG_EXTENSION_FIELDS", "true"),
            schema_base_url=os.environ.get(
                "KERNEL_WIRE_SCHEMA_BASE_URL", "https://kernel-wire.dev/schemas"
            ).rstrip("/"),
        )


# Global config instance
CONFIG = ValidatorConfig.from_env()


__all__ = ["ValidatorConfig", "CONFIG"]
