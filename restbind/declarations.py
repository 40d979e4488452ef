"""
Resource Declarations

Input descriptors supplied by the host discovery layer: resource
definitions, their methods and parameters, response codes and state
transitions. The binding layer only reads them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


#: Sentinel meaning "not set" in declared binding metadata and overrides.
DEFAULT_MARKER = "##default"


class ParameterSource(str, Enum):
    """Where a request parameter is read from."""
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"
    FORM = "form"
    MATRIX = "matrix"
    BODY = "body"
    CONTEXT = "context"


@dataclass(frozen=True)
class TransitionOverride:
    """
    Transition-specific settings declared on a parameter.

    Attributes:
        optional: Whether the parameter may be left out of the transition
        name: Template variable name, or DEFAULT_MARKER to keep the
            parameter's own name
    """
    optional: bool = False
    name: str = DEFAULT_MARKER

    @property
    def variable_name(self) -> Optional[str]:
        if self.name == DEFAULT_MARKER:
            return None
        return self.name


@dataclass(frozen=True)
class ResourceParameter:
    """
    A request parameter accepted by a resource method.

    Attributes:
        name: Parameter name as it appears in the request
        type_name: Declared type name (e.g., "java.lang.String", "int")
        source: Where the parameter is read from
        transition: Optional transition override settings
    """
    name: str
    type_name: str
    source: ParameterSource = ParameterSource.QUERY
    transition: Optional[TransitionOverride] = field(default=None, compare=False)

    @property
    def is_path_param(self) -> bool:
        return self.source == ParameterSource.PATH

    @property
    def is_query_param(self) -> bool:
        return self.source == ParameterSource.QUERY

    @property
    def sort_key(self) -> Tuple[str, str]:
        return (self.name, self.type_name)

    def transition_override(self) -> Optional[TransitionOverride]:
        """Look up the transition override declared on this parameter."""
        return self.transition


@dataclass(frozen=True)
class ResourceMethod:
    """
    One HTTP operation of a resource definition.

    Attributes:
        http_method: GET, POST, etc.
        handler_name: Name of the handler that implements the operation
        produces: Media types the operation can return
        consumes: Media types the operation accepts
    """
    http_method: str
    handler_name: str
    produces: Tuple[str, ...] = ()
    consumes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResourceDefinition:
    """
    A declared API resource type contributing operations to a path.

    Identity is the qualified name; two definitions with the same
    qualified name are the same definition.
    """
    qualified_name: str
    path: Optional[str] = None
    name: Optional[str] = None

    @property
    def simple_name(self) -> str:
        return self.name or self.qualified_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ResponseCode:
    """A documented response status code and the condition it signals."""
    code: int
    condition: str = ""


@dataclass(frozen=True, order=True)
class StateTransition:
    """
    A hypermedia link to another application state.

    Ordered by (rel, state, description).
    """
    rel: str
    state: str
    description: str = ""


@dataclass(frozen=True)
class BindingMetadata:
    """
    Binding metadata declared on a resource definition.

    Attributes:
        namespace: Namespace of the binding, or DEFAULT_MARKER
        project_id: Project identifier, or DEFAULT_MARKER
        states: Names of the states this path transitions into
    """
    namespace: str = DEFAULT_MARKER
    project_id: str = DEFAULT_MARKER
    states: Tuple[str, ...] = ()
