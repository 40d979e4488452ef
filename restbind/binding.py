"""
Resource Binding

Aggregates every resource definition that shares a URI path into one
binding: methods, response codes, warnings, state-transition links,
resource parameters and media types. Transition template properties are
derived from the aggregated state (see ``restbind.transitions``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .config import BindingConfig
from .declarations import (
    DEFAULT_MARKER,
    BindingMetadata,
    ResourceDefinition,
    ResourceMethod,
    ResourceParameter,
    ResponseCode,
    StateTransition,
)
from .faults import BindingPathMismatchFault

logger = logging.getLogger("restbind.binding")


def _normalize(value: Optional[str]) -> Optional[str]:
    """Collapse the default marker to None."""
    if value is None or value == DEFAULT_MARKER:
        return None
    return value


class ResourceBinding:
    """
    All resource definitions bound to one URI path.

    Created once per path with the first contributing definition; later
    contributors are merged in with the ``add_*`` methods. Read accessors
    return snapshots, so callers can never change the binding through them.

    Args:
        declaration: Source declaration the binding was discovered from
        path: URI path template (e.g., "/persons/{pid}")
        definition: First contributing resource definition
        metadata: Declared binding metadata, or None when not declared

    Example:
        binding = ResourceBinding(decl, "/persons/{pid}", person_def, metadata)
        binding.add_method(ResourceMethod("GET", "readPerson", ("application/json",)))
        props = binding.transition_template_properties()
    """

    def __init__(
        self,
        declaration: Any,
        path: str,
        definition: ResourceDefinition,
        metadata: Optional[BindingMetadata] = None,
    ):
        self.declaration = declaration
        self._path = path
        self._definitions: List[ResourceDefinition] = [definition]
        self._methods: List[ResourceMethod] = []
        self._status_codes: Set[ResponseCode] = set()
        self._warnings: Set[ResponseCode] = set()
        self._links: Set[StateTransition] = set()
        self._resource_parameters: Dict[Tuple[str, str], ResourceParameter] = {}

        if metadata is None:
            self._namespace = None
            self._project_id = None
            self._states: Tuple[str, ...] = ()
        else:
            self._namespace = _normalize(metadata.namespace)
            self._project_id = _normalize(metadata.project_id)
            self._states = tuple(sorted(set(metadata.states)))

        logger.debug(
            "Created binding for %s (definition=%s, states=%s)",
            path, definition.qualified_name, list(self._states),
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def namespace(self) -> Optional[str]:
        return self._namespace

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id

    @property
    def states(self) -> Tuple[str, ...]:
        """State names in sorted order."""
        return self._states

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    @property
    def definitions(self) -> Tuple[ResourceDefinition, ...]:
        return tuple(self._definitions)

    def add_definition_conditionally(self, definition: ResourceDefinition) -> bool:
        """
        Add a definition unless one with the same qualified name is bound.

        Returns:
            True if the definition was added
        """
        for existing in self._definitions:
            if existing.qualified_name == definition.qualified_name:
                logger.debug(
                    "Definition %s already bound to %s",
                    definition.qualified_name, self._path,
                )
                return False

        self._definitions.append(definition)
        return True

    # ------------------------------------------------------------------
    # Aggregated collections
    # ------------------------------------------------------------------

    @property
    def methods(self) -> Tuple[ResourceMethod, ...]:
        return tuple(self._methods)

    def add_method(self, method: ResourceMethod) -> None:
        self._methods.append(method)

    def add_methods(self, methods: Iterable[ResourceMethod]) -> None:
        self._methods.extend(methods)

    @property
    def status_codes(self) -> FrozenSet[ResponseCode]:
        return frozenset(self._status_codes)

    def add_status_code(self, code: ResponseCode) -> bool:
        return self._add_to(self._status_codes, code)

    @property
    def warnings(self) -> FrozenSet[ResponseCode]:
        return frozenset(self._warnings)

    def add_warning(self, warning: ResponseCode) -> bool:
        return self._add_to(self._warnings, warning)

    @property
    def links(self) -> Tuple[StateTransition, ...]:
        """State transitions in sorted order."""
        return tuple(sorted(self._links))

    def add_link(self, link: StateTransition) -> bool:
        return self._add_to(self._links, link)

    @property
    def resource_parameters(self) -> Tuple[ResourceParameter, ...]:
        """Resource parameters ordered by (name, type name)."""
        return tuple(
            self._resource_parameters[key]
            for key in sorted(self._resource_parameters)
        )

    def add_resource_parameter(self, parameter: ResourceParameter) -> bool:
        """
        Add a parameter unless one with the same name and type name exists.

        The first parameter recorded for a (name, type name) pair wins.
        """
        key = parameter.sort_key
        if key in self._resource_parameters:
            return False
        self._resource_parameters[key] = parameter
        return True

    def add_resource_parameters(self, parameters: Iterable[ResourceParameter]) -> None:
        for parameter in parameters:
            self.add_resource_parameter(parameter)

    @staticmethod
    def _add_to(target: set, item: Any) -> bool:
        if item in target:
            return False
        target.add(item)
        return True

    # ------------------------------------------------------------------
    # Media types
    # ------------------------------------------------------------------

    @property
    def produces(self) -> Tuple[str, ...]:
        """Sorted union of the media types produced by all methods."""
        produces: Set[str] = set()
        for method in self._methods:
            produces.update(method.produces)
        return tuple(sorted(produces))

    @property
    def consumes(self) -> Tuple[str, ...]:
        """Sorted union of the media types consumed by all methods."""
        consumes: Set[str] = set()
        for method in self._methods:
            consumes.update(method.consumes)
        return tuple(sorted(consumes))

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def transition_template_properties(
        self,
        config: Optional[BindingConfig] = None,
    ) -> Dict[str, str]:
        """Flat per-state template properties, see ``restbind.transitions``."""
        from .transitions import derive_transition_template_properties
        return derive_transition_template_properties(self, config)

    def merge(self, other: ResourceBinding) -> None:
        """
        Fold another binding for the same path into this one.

        Identity (namespace, project id, states) of this binding is kept.

        Raises:
            BindingPathMismatchFault: If the other binding has a different path
        """
        if other.path != self._path:
            raise BindingPathMismatchFault(self._path, other.path)

        for definition in other._definitions:
            self.add_definition_conditionally(definition)
        self._methods.extend(other._methods)
        self._status_codes.update(other._status_codes)
        self._warnings.update(other._warnings)
        self._links.update(other._links)
        self.add_resource_parameters(other.resource_parameters)

        logger.debug("Merged binding into %s (%d definitions)", self._path, len(self._definitions))

    def describe(self) -> Dict[str, Any]:
        """Plain-data summary of the binding."""
        return {
            "path": self._path,
            "namespace": self._namespace,
            "project_id": self._project_id,
            "states": list(self._states),
            "definitions": [d.qualified_name for d in self._definitions],
            "methods": [f"{m.http_method} {m.handler_name}" for m in self._methods],
            "status_codes": sorted(c.code for c in self._status_codes),
            "warnings": sorted(c.code for c in self._warnings),
            "links": [f"{link.rel}->{link.state}" for link in self.links],
            "parameters": [p.name for p in self.resource_parameters],
            "produces": list(self.produces),
            "consumes": list(self.consumes),
        }

    def __repr__(self) -> str:
        return (
            f"ResourceBinding(path={self._path!r}, "
            f"definitions={len(self._definitions)}, states={list(self._states)})"
        )
