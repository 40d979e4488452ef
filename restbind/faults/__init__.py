"""
restbind faults - Typed fault signals raised by the binding layer.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain taxonomy
- Severity: Severity levels
- Domain faults for config, binding aggregation and link rendering
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    BindingFault,
    BindingPathMismatchFault,
    BindingConflictFault,
    RenderFault,
    UnknownStateFault,
    TemplateRenderFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultDomain",
    "Severity",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "BindingFault",
    "BindingPathMismatchFault",
    "BindingConflictFault",
    "RenderFault",
    "UnknownStateFault",
    "TemplateRenderFault",
]
