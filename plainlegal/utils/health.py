"""Lightweight health check for the analysis pipeline.

No generation calls are made: the goal is a fast readiness signal for CI /
deploy scripts (imports resolve, prompts load, the selected provider has a key).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from plainlegal.utils.config import AppConfig


@dataclass
class HealthStatus:
    component: str
    ok: bool
    detail: str

    def as_dict(self) -> Dict[str, Any]:
        return {"component": self.component, "ok": self.ok, "detail": self.detail}


def _check_import(module: str) -> HealthStatus:
    try:
        __import__(module)
        return HealthStatus(module, True, "import ok")
    except Exception as e:  # pragma: no cover - diagnostic path
        return HealthStatus(module, False, f"import failed: {e}")


CORE_IMPORTS = [
    "httpx",
    "dotenv",
    "google.generativeai",
]


def _check_prompts() -> HealthStatus:
    try:
        from plainlegal.analysis.prompts import load_templates
        templates = load_templates()
        return HealthStatus("prompts", True, f"{len(templates)} prompt pairs loaded")
    except Exception as e:  # pragma: no cover - diagnostic path
        return HealthStatus("prompts", False, f"prompt load failed: {e}")


def _check_provider(config: AppConfig) -> HealthStatus:
    keys = {"openrouter": config.openrouter_api_key, "gemini": config.google_api_key}
    if config.provider not in keys:
        return HealthStatus("provider", False, f"unknown provider '{config.provider}'")
    if not keys[config.provider]:
        return HealthStatus("provider", False, f"{config.provider}: API key not set (analysis will return fallbacks)")
    return HealthStatus("provider", True, f"{config.provider} configured ({config.model})")


def run_health_check(config: Optional[AppConfig] = None) -> Dict[str, Any]:
    config = config or AppConfig.from_env()
    results: List[HealthStatus] = [_check_import(mod) for mod in CORE_IMPORTS]
    results.append(_check_prompts())
    results.append(_check_provider(config))
    return {
        "ok": all(r.ok for r in results),
        "components": [r.as_dict() for r in results],
    }


if __name__ == "__main__":  # Manual invocation helper
    import json, sys
    report = run_health_check()
    print(json.dumps(report, indent=2))
    sys.exit(0 if report["ok"] else 1)
