"""Resolver facade binding a registry and a definition table together."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Union

from canvas_controls.core.config.domains import EngineConfig
from canvas_controls.core.context.models import ControlContext, ElementType
from canvas_controls.core.controls.backend import EditorBackend
from canvas_controls.core.controls.models import ControlRuntime
from canvas_controls.core.controls.registry import ControlRegistry, build_default_registry
from canvas_controls.core.definitions import CANVAS_ELEMENT_DEFINITIONS, get_definition
from canvas_controls.core.definitions.models import ElementDefinition
from canvas_controls.core.rules.models import EffectiveRule, Surface
from canvas_controls.core.utils import span

from .effective import get_effective_rule
from .menu import resolve_menu
from .models import ResolvedControl, ResolvedPanel, ResolvedSurfaces, ToolbarItem
from .panel import resolve_panel
from .toolbar import resolve_toolbar
from .validation import validate_definitions

logger = logging.getLogger(__name__)


class ControlResolver:
    """Resolves all three surfaces against an injected registry.

    The resolver holds no per-call state; every method recomputes from the
    context it is given and may be called in any order.
    """

    def __init__(
        self,
        registry: ControlRegistry,
        definitions: Mapping[ElementType, ElementDefinition] = CANVAS_ELEMENT_DEFINITIONS,
        *,
        validate: bool = True,
    ) -> None:
        self.registry = registry
        self.definitions = definitions
        if validate:
            validate_definitions(definitions, registry)

    def definition_for(self, ctx: ControlContext) -> ElementDefinition:
        return get_definition(ctx.element_type, self.definitions)

    def get_effective_rule(
        self, definition: ElementDefinition, control_id: str, surface: Union[Surface, str]
    ) -> EffectiveRule:
        return get_effective_rule(definition, control_id, surface)

    def resolve_toolbar(
        self, definition: ElementDefinition, ctx: ControlContext, runtime: Optional[ControlRuntime] = None
    ) -> List[ToolbarItem]:
        return resolve_toolbar(definition, ctx, self.registry, runtime)

    def resolve_menu(
        self, definition: ElementDefinition, ctx: ControlContext, runtime: Optional[ControlRuntime] = None
    ) -> List[List[ResolvedControl]]:
        return resolve_menu(definition, ctx, self.registry, runtime)

    def resolve_panel(self, definition: ElementDefinition, ctx: ControlContext) -> List[ResolvedPanel]:
        return resolve_panel(definition, ctx, self.registry)

    def resolve_all(self, ctx: ControlContext, runtime: Optional[ControlRuntime] = None) -> ResolvedSurfaces:
        """Resolve every surface for the context's element type."""
        definition = self.definition_for(ctx)
        with span("resolve.all", element_type=definition.type.value):
            return ResolvedSurfaces(
                toolbar=self.resolve_toolbar(definition, ctx, runtime),
                menu=self.resolve_menu(definition, ctx, runtime),
                panel=self.resolve_panel(definition, ctx),
            )


def create_default_resolver(
    backend: EditorBackend,
    *,
    config: Optional[Mapping] = None,
    repo_root: Optional[Path] = None,
) -> ControlResolver:
    """Resolver over the default registry and definition table.

    ``engine.validateDefinitionsOnLoad`` decides whether the composition
    check runs up front.
    """
    settings = EngineConfig(repo_root, config=config)
    validate = settings.validate_definitions_on_load
    logger.debug("Creating default resolver (validate=%s)", validate)
    return ControlResolver(build_default_registry(backend), CANVAS_ELEMENT_DEFINITIONS, validate=validate)


__all__ = ["ControlResolver", "create_default_resolver"]
