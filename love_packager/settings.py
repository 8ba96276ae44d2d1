"""Resolution of packager inputs from arguments, environment and ``.env`` files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

from dotenv import dotenv_values

from .engine.budget import DEFAULT_MEMORY_BYTES
from .errors import ConfigurationError


@dataclass(frozen=True)
class SettingSpec:
    name: str
    env_var: str
    description: str = ""
    default: Optional[str] = None


INPUT_PATH = SettingSpec(
    name="input_path",
    env_var="LOVE_PACKAGER_INPUT",
    description="Game directory or .love archive to package.",
)
OUTPUT_DIR = SettingSpec(
    name="output_dir",
    env_var="LOVE_PACKAGER_OUTPUT",
    description="Directory receiving game.data, manifest.json and create_paths.js.",
    default="build",
)
MEMORY_BYTES = SettingSpec(
    name="memory_bytes",
    env_var="LOVE_PACKAGER_MEMORY",
    description="Memory budget in bytes the packaged assets must fit in.",
    default=str(DEFAULT_MEMORY_BYTES),
)

SETTINGS: tuple[SettingSpec, ...] = (INPUT_PATH, OUTPUT_DIR, MEMORY_BYTES)


class SettingResolver(Protocol):
    name: str

    def resolve(self, spec: SettingSpec) -> Optional[str]:  # pragma: no cover - interface
        ...

    def describe(self) -> dict[str, object]:  # pragma: no cover - optional hook
        return {}


class ExplicitResolver:
    """Values passed directly by the caller (CLI arguments or keywords)."""

    name = "explicit"

    def __init__(self, values: Mapping[str, Optional[object]]) -> None:
        self._values = {key: str(value) for key, value in values.items() if value is not None}

    def resolve(self, spec: SettingSpec) -> Optional[str]:
        return self._values.get(spec.name)

    def describe(self) -> dict[str, object]:
        return {"type": "explicit", "keys": sorted(self._values)}


class EnvResolver:
    """Resolve settings from process environment variables."""

    name = "env"

    def resolve(self, spec: SettingSpec) -> Optional[str]:
        value = os.getenv(spec.env_var)
        return value if value else None

    def describe(self) -> dict[str, object]:
        return {"type": "env"}


class DotEnvResolver:
    """Resolve settings from a ``.env`` file without touching ``os.environ``."""

    name = "dotenv"

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._values: Optional[Dict[str, Optional[str]]] = None

    def resolve(self, spec: SettingSpec) -> Optional[str]:
        if self._values is None:
            self._values = dotenv_values(self.path) if self.path.exists() else {}
        value = self._values.get(spec.env_var)
        return value if value else None

    def describe(self) -> dict[str, object]:
        return {"type": "dotenv", "path": str(self.path), "exists": self.path.exists()}


class DefaultResolver:
    name = "default"

    def resolve(self, spec: SettingSpec) -> Optional[str]:
        return spec.default

    def describe(self) -> dict[str, object]:
        return {"type": "default"}


@dataclass(frozen=True)
class SettingAttempt:
    resolver: str
    success: bool
    details: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class SettingResolution:
    name: str
    value: Optional[str]
    source: Optional[str]
    attempts: List[SettingAttempt]


@dataclass(frozen=True)
class PackagerSettings:
    """Inputs handed to the packaging engine."""

    input_path: Path
    output_dir: Path
    memory_bytes: int
    sources: Dict[str, Optional[str]] = field(default_factory=dict)


def build_resolvers(
    explicit: Optional[Mapping[str, Optional[object]]] = None,
    *,
    env_file: Optional[Path] = None,
) -> List[SettingResolver]:
    """Return resolvers in priority order: explicit, env, ``.env`` file, defaults."""

    resolvers: List[SettingResolver] = [ExplicitResolver(explicit or {}), EnvResolver()]
    if env_file is not None:
        resolvers.append(DotEnvResolver(env_file))
    resolvers.append(DefaultResolver())
    return resolvers


def resolve_setting(spec: SettingSpec, resolvers: List[SettingResolver]) -> SettingResolution:
    attempts: List[SettingAttempt] = []
    for resolver in resolvers:
        value = resolver.resolve(spec)
        attempts.append(SettingAttempt(resolver=resolver.name, success=value is not None, details=resolver.describe()))
        if value is not None:
            return SettingResolution(name=spec.name, value=value, source=resolver.name, attempts=attempts)
    return SettingResolution(name=spec.name, value=None, source=None, attempts=attempts)


def resolve_settings(
    *,
    input_path: Optional[str | Path] = None,
    output_dir: Optional[str | Path] = None,
    memory_bytes: Optional[int | str] = None,
    env_file: Optional[Path] = None,
    workspace_root: Optional[Path] = None,
) -> PackagerSettings:
    """Resolve the packager inputs; relative paths are anchored at ``workspace_root``."""

    workspace = Path(workspace_root).resolve() if workspace_root else Path.cwd()
    resolvers = build_resolvers(
        {
            INPUT_PATH.name: input_path,
            OUTPUT_DIR.name: output_dir,
            MEMORY_BYTES.name: memory_bytes,
        },
        env_file=env_file,
    )
    resolved = {spec.name: resolve_setting(spec, resolvers) for spec in SETTINGS}

    raw_input = resolved[INPUT_PATH.name].value
    if raw_input is None:
        raise ConfigurationError(
            f"No input path given; pass one explicitly or set {INPUT_PATH.env_var}"
        )

    return PackagerSettings(
        input_path=_resolve_path(raw_input, workspace),
        output_dir=_resolve_path(resolved[OUTPUT_DIR.name].value or "build", workspace),
        memory_bytes=parse_memory(resolved[MEMORY_BYTES.name].value),
        sources={name: resolution.source for name, resolution in resolved.items()},
    )


def describe_settings(
    explicit: Optional[Mapping[str, Optional[object]]] = None,
    *,
    env_file: Optional[Path] = None,
) -> list[dict[str, object]]:
    resolvers = build_resolvers(explicit, env_file=env_file)
    payload: list[dict[str, object]] = []
    for spec in SETTINGS:
        info = resolve_setting(spec, resolvers)
        payload.append(
            {
                "name": spec.name,
                "env_var": spec.env_var,
                "description": spec.description,
                "present": info.value is not None,
                "value": info.value,
                "source": info.source,
                "attempts": [
                    {"resolver": attempt.resolver, "success": attempt.success, "details": attempt.details}
                    for attempt in info.attempts
                ],
            }
        )
    return payload


def parse_memory(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_MEMORY_BYTES
    try:
        memory = int(str(value).strip())
    except ValueError as exc:
        raise ConfigurationError(f"Memory budget must be an integer number of bytes (got '{value}')") from exc
    if memory < 0:
        raise ConfigurationError(f"Memory budget must not be negative (got {memory})")
    return memory


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()
