"""
restbind - Resource binding aggregation for REST API documentation.

Merges every resource definition sharing a URI path into a single
ResourceBinding and derives per-state transition template properties
for the documentation/code generators.

Example:
    from restbind import BindingRegistry, BindingMetadata, ResourceDefinition

    registry = BindingRegistry()
    binding = registry.bind(
        "/persons/{pid}",
        ResourceDefinition("org.example.rs.PersonRSDefinition"),
        BindingMetadata(namespace="http://example.org/rs", states=("person",)),
    )
    properties = binding.transition_template_properties()
"""

__version__ = "0.1.0"

from .declarations import (
    DEFAULT_MARKER,
    BindingMetadata,
    ParameterSource,
    ResourceDefinition,
    ResourceMethod,
    ResourceParameter,
    ResponseCode,
    StateTransition,
    TransitionOverride,
)
from .config import BindingConfig, ConfigLoader
from .binding import ResourceBinding
from .transitions import (
    TransitionTemplate,
    TransitionVariable,
    derive_transition_template_properties,
    format_properties,
    transition_templates,
)
from .registry import BindingRegistry
from .rendering import LinkTemplateRenderer
from .faults import (
    Fault,
    FaultDomain,
    Severity,
    ConfigInvalidFault,
    BindingPathMismatchFault,
    BindingConflictFault,
    UnknownStateFault,
    TemplateRenderFault,
)

__all__ = [
    "__version__",
    # Declarations
    "DEFAULT_MARKER",
    "BindingMetadata",
    "ParameterSource",
    "ResourceDefinition",
    "ResourceMethod",
    "ResourceParameter",
    "ResponseCode",
    "StateTransition",
    "TransitionOverride",
    # Config
    "BindingConfig",
    "ConfigLoader",
    # Binding
    "ResourceBinding",
    "BindingRegistry",
    # Transitions
    "TransitionTemplate",
    "TransitionVariable",
    "derive_transition_template_properties",
    "format_properties",
    "transition_templates",
    # Rendering
    "LinkTemplateRenderer",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigInvalidFault",
    "BindingPathMismatchFault",
    "BindingConflictFault",
    "UnknownStateFault",
    "TemplateRenderFault",
]
