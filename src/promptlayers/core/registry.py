"""
promptlayers - Template Registry.

Maps template id -> template instance.

ARCHITECTURE:
- Templates are registered at app startup, before any build for that id
- get() never raises; the facade turns a miss into TemplateNotFoundError
- One lock guards all reads and writes (last writer wins)
- Usage counts are tracked per id on every successful get()

Usage:
    from promptlayers.core.registry import get_template_manager

    manager = get_template_manager()
    manager.register(MyTemplate())
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Literal

from promptlayers.core.errors import TemplateConflictError
from promptlayers.core.templates import ContextTemplate, StandardTemplate, TemplateInfo

logger = logging.getLogger(__name__)

Complexity = Literal["low", "medium", "high"]

# Recommendation scoring weights
SCENARIO_SCORE = 10
MODE_SCORE = 8
COMPLEXITY_SCORE = 3
MAX_USAGE_SCORE = 5
COMPLEXITY_LEVELS = {"low": 1, "medium": 2, "high": 3}


@dataclass
class TemplateRecommendation:
    """A scored recommendation from TemplateManager.recommend()."""

    template: ContextTemplate
    score: float
    reason: str


@dataclass
class TemplateValidation:
    """Result of TemplateManager.validate_templates()."""

    valid: list[str] = field(default_factory=list)
    invalid: dict[str, list[str]] = field(default_factory=dict)  # id -> errors


@dataclass
class TemplateUsage:
    template_id: str
    name: str
    usage_count: int
    percentage: float


@dataclass
class UsageReport:
    """Usage summary across all registered templates."""

    total_templates: int
    total_usage: int
    average_usage: float
    most_used: str | None
    least_used: str | None
    details: list[TemplateUsage] = field(default_factory=list)  # Most used first
    recommendations: list[str] = field(default_factory=list)


class TemplateManager:
    """
    Named storage of ContextTemplate instances keyed by id.

    Overwrite semantics are the default: registering a new instance under
    an existing id replaces the old one. Pass allow_overwrite=False to
    reject that instead. Re-registering the very same instance is always
    a no-op.
    """

    def __init__(self, allow_overwrite: bool = True):
        self.allow_overwrite = allow_overwrite
        self._templates: dict[str, ContextTemplate] = {}
        self._usage: dict[str, int] = {}
        self._lock = threading.RLock()

    # =========================================================================
    # Core API
    # =========================================================================

    def register(self, template: ContextTemplate) -> None:
        """Store template under template.id."""
        template_id = template.id
        with self._lock:
            existing = self._templates.get(template_id)
            if existing is template:
                return
            if existing is not None:
                if not self.allow_overwrite:
                    raise TemplateConflictError(template_id)
                logger.warning(
                    f"Template '{template_id}' replaced "
                    f"({type(existing).__name__} -> {type(template).__name__})"
                )
            self._templates[template_id] = template
        logger.info(f"Template '{template_id}' registered")

    def get(self, template_id: str) -> ContextTemplate | None:
        with self._lock:
            template = self._templates.get(template_id)
            if template is None:
                logger.debug(f"Template '{template_id}' not registered")
                return None
            self._usage[template_id] = self._usage.get(template_id, 0) + 1
            return template

    def has(self, template_id: str) -> bool:
        with self._lock:
            return template_id in self._templates

    def list(self) -> list[TemplateInfo]:
        """Metadata snapshot of all templates, in registration order."""
        with self._lock:
            templates = list(self._templates.values())
        return [template.info() for template in templates]

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._templates)

    def unregister(self, template_id: str) -> bool:
        """Remove a template. Returns True if it existed."""
        with self._lock:
            if template_id not in self._templates:
                return False
            del self._templates[template_id]
            self._usage.pop(template_id, None)
        logger.info(f"Template '{template_id}' unregistered")
        return True

    def clear(self) -> None:
        """Drop every template and usage count (test isolation)."""
        with self._lock:
            self._templates.clear()
            self._usage.clear()

    # =========================================================================
    # Discovery & Stats
    # =========================================================================

    def find_by_scenario(self, scenario: str) -> list[ContextTemplate]:
        """Templates that declare the given scenario tag."""
        with self._lock:
            templates = list(self._templates.values())
        return [t for t in templates if scenario in t.scenarios]

    def available_scenarios(self) -> list[str]:
        with self._lock:
            templates = list(self._templates.values())
        return sorted({s for t in templates for s in t.scenarios})

    def find_by_mode(self, mode: str) -> list[ContextTemplate]:
        """Templates that declare the given mode in supported_modes."""
        with self._lock:
            templates = list(self._templates.values())
        return [t for t in templates if mode in t.supported_modes]

    def available_modes(self) -> list[str]:
        with self._lock:
            templates = list(self._templates.values())
        return sorted({m for t in templates for m in t.supported_modes})

    def recommend(
        self,
        scenario: str | None = None,
        mode: str | None = None,
        complexity: Complexity | None = None,
        limit: int = 5,
    ) -> list[TemplateRecommendation]:
        """
        Score every template against the requested context.

        Scoring:
        - scenario match: +10
        - mode match: +8
        - prior usage: +usage/10, capped at +5
        - complexity within one level of the target: +3

        Only templates scoring above zero are returned, best first.
        """
        with self._lock:
            candidates = [(t, self._usage.get(t.id, 0)) for t in self._templates.values()]

        scored: list[TemplateRecommendation] = []
        for template, usage_count in candidates:
            score = 0.0
            reasons: list[str] = []

            if scenario and scenario in template.scenarios:
                score += SCENARIO_SCORE
                reasons.append(f"supports scenario '{scenario}'")
            if mode and mode in template.supported_modes:
                score += MODE_SCORE
                reasons.append(f"supports mode '{mode}'")
            if usage_count > 0:
                score += min(usage_count / 10, MAX_USAGE_SCORE)
                reasons.append(f"used {usage_count} times")
            if complexity:
                target = COMPLEXITY_LEVELS[complexity]
                if abs(_template_complexity(template) - target) <= 1:
                    score += COMPLEXITY_SCORE
                    reasons.append(f"matches {complexity} complexity")

            if score > 0:
                scored.append(TemplateRecommendation(template, score, ", ".join(reasons)))

        # sorted() is stable, so ties keep registration order
        return sorted(scored, key=lambda r: r.score, reverse=True)[:limit]

    def validate_templates(self) -> TemplateValidation:
        """Check every template has metadata and builds from empty input."""
        with self._lock:
            items = list(self._templates.items())

        result = TemplateValidation()
        for template_id, template in items:
            errors: list[str] = []
            if not (template.name or "").strip():
                errors.append("name is empty")
            if not (template.description or "").strip():
                errors.append("description is empty")
            try:
                layers = template.build(None)
                if not isinstance(layers, list):
                    errors.append(f"build() returned {type(layers).__name__}, expected list")
            except Exception as e:
                errors.append(f"build() failed on empty input: {e}")

            if errors:
                result.invalid[template_id] = errors
            else:
                result.valid.append(template_id)
        return result

    def usage_stats(self) -> dict[str, int]:
        """Successful get() count per registered id (0 if never used)."""
        with self._lock:
            return {tid: self._usage.get(tid, 0) for tid in self._templates}

    def most_popular(self, limit: int = 5) -> list[tuple[ContextTemplate, int]]:
        """(template, usage count) pairs, most used first."""
        with self._lock:
            pairs = [(t, self._usage.get(t.id, 0)) for t in self._templates.values()]
        return sorted(pairs, key=lambda pair: pair[1], reverse=True)[:limit]

    def usage_report(self) -> UsageReport:
        with self._lock:
            templates = list(self._templates.values())
            usage = {t.id: self._usage.get(t.id, 0) for t in templates}

        total_usage = sum(usage.values())
        average = round(total_usage / len(templates), 2) if templates else 0.0

        details = sorted(
            (
                TemplateUsage(
                    template_id=t.id,
                    name=t.name,
                    usage_count=usage[t.id],
                    percentage=(usage[t.id] / total_usage * 100) if total_usage else 0.0,
                )
                for t in templates
            ),
            key=lambda d: d.usage_count,
            reverse=True,
        )

        recommendations: list[str] = []
        if not templates:
            recommendations.append("Register a template to get started")
        elif total_usage == 0:
            recommendations.append("Templates are registered but never used; check the integration")
        else:
            if average < 5:
                recommendations.append("Template usage is low; consider revisiting template design")
            unused = [d for d in details if d.usage_count == 0]
            if unused:
                recommendations.append(f"{len(unused)} unused templates; consider removing or improving them")

        used = [d for d in details if d.usage_count > 0]
        return UsageReport(
            total_templates=len(templates),
            total_usage=total_usage,
            average_usage=average,
            most_used=used[0].template_id if used else None,
            least_used=used[-1].template_id if used else None,
            details=details,
            recommendations=recommendations,
        )

    def reset_usage_stats(self) -> None:
        with self._lock:
            self._usage.clear()
        logger.info("Template usage statistics reset")

    def export_config(self) -> dict[str, Any]:
        """JSON-ready snapshot: templates, usage, and scenario/mode indexes."""
        infos = self.list()
        scenarios: dict[str, list[str]] = {}
        modes: dict[str, list[str]] = {}
        for info in infos:
            for scenario in info.scenarios:
                scenarios.setdefault(scenario, []).append(info.id)
            for mode in info.supported_modes:
                modes.setdefault(mode, []).append(info.id)
        return {
            "templates": [info.model_dump() for info in infos],
            "usage": self.usage_stats(),
            "scenarios": scenarios,
            "modes": modes,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        with self._lock:
            return template_id in self._templates


def _template_complexity(template: ContextTemplate) -> int:
    """Rough 1-3 complexity from description length and breadth of tags."""
    complexity = 1
    if len(template.description) > 100:
        complexity += 1
    if len(template.scenarios) > 3:
        complexity += 1
    if len(template.supported_modes) > 2:
        complexity += 1
    return min(complexity, 3)


# =============================================================================
# Process-wide Manager
# =============================================================================

_manager: TemplateManager | None = None
_manager_lock = threading.Lock()


def register_default_templates(manager: TemplateManager) -> None:
    """Install the built-in templates."""
    manager.register(StandardTemplate())


def get_template_manager() -> TemplateManager:
    """
    Get the process-wide TemplateManager.

    Created on first use from settings. Built-in templates are installed
    unless PROMPTLAYERS_REGISTER_DEFAULT_TEMPLATES=false.
    """
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                from promptlayers.config import get_settings

                settings = get_settings()
                manager = TemplateManager(allow_overwrite=settings.allow_template_overwrite)
                if settings.register_default_templates:
                    register_default_templates(manager)
                _manager = manager
    return _manager


def reset_template_manager() -> None:
    """Forget the process-wide manager so the next call rebuilds it."""
    global _manager
    with _manager_lock:
        _manager = None
