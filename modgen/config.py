"""modgen configuration.

Centralised, typed defaults for the values baked into every generated
project (SDK and plugin versions, signing behaviour).  Settings use a
Pydantic v2 model so they can be validated at construction time and
read from a JSON file or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class GeneratorSettings(BaseModel):
    """Defaults applied to a generation when the caller does not override them.

    Instances are typically created once by the CLI entry point (optionally
    from the environment) and handed to the config builder.
    """

    sdk_version: str = Field(
        default="8.1.20", description="Ignition SDK version used for compileOnly dependencies"
    )
    required_ignition_version: str = Field(
        default="8.1.11", description="Minimum Ignition version the module declares"
    )
    module_plugin_version: str = Field(
        default="0.4.0", description="Version of the io.ia.sdk.modl Gradle plugin"
    )
    gradle_version: str = Field(
        default="7.5.1", description="Gradle version written to the wrapper properties"
    )
    skip_module_signing: bool = Field(
        default=True,
        description="Generate a project that builds unsigned modules out of the box",
    )
    debug_plugin_config: bool = Field(
        default=False, description="Resolve Gradle plugins from mavenLocal() first"
    )
    module_description: str = Field(
        default="A short sentence describing what it does, but not much longer than this.",
        description="Description written to the module descriptor",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "GeneratorSettings":
        """Load settings from a JSON file such as one written by ``model_dump_json``."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, base: "GeneratorSettings | None" = None) -> "GeneratorSettings":
        """Build settings from environment variables.

        Variables that are set override the matching fields of *base*, or of
        the defaults when no *base* is given.

        Recognised variables (all optional):
            MODGEN_SDK_VERSION, MODGEN_REQUIRED_IGNITION_VERSION,
            MODGEN_MODULE_PLUGIN_VERSION, MODGEN_GRADLE_VERSION,
            MODGEN_SKIP_MODULE_SIGNING, MODGEN_DEBUG_PLUGIN_CONFIG.
        """
        kwargs: dict[str, Any] = {}
        for field_name in (
            "sdk_version",
            "required_ignition_version",
            "module_plugin_version",
            "gradle_version",
        ):
            value = os.environ.get(f"MODGEN_{field_name.upper()}")
            if value:
                kwargs[field_name] = value

        for flag in ("skip_module_signing", "debug_plugin_config"):
            value = os.environ.get(f"MODGEN_{flag.upper()}")
            if value:
                kwargs[flag] = _parse_bool(value)

        if base is not None:
            return base.model_copy(update=kwargs)
        return cls(**kwargs)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
