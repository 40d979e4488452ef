"""
restbind faults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- BINDING faults
- RENDER faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# BINDING Faults
# ============================================================================

class BindingFault(Fault):
    """Base class for resource binding faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.BINDING,
            severity=severity,
            metadata=metadata,
        )


class BindingPathMismatchFault(BindingFault):
    """Two bindings for different paths were merged."""

    def __init__(self, path: str, other_path: str):
        super().__init__(
            code="BINDING_PATH_MISMATCH",
            message=f"Cannot merge binding for '{other_path}' into binding for '{path}'",
            metadata={"path": path, "other_path": other_path},
        )


class BindingConflictFault(BindingFault):
    """Definitions sharing a path declare conflicting binding metadata."""

    def __init__(self, path: str, field: str, existing: Any, declared: Any):
        super().__init__(
            code="BINDING_CONFLICT",
            message=(
                f"Path '{path}' is bound with {field}={existing!r} "
                f"but a definition declares {field}={declared!r}"
            ),
            metadata={"path": path, "field": field, "existing": existing, "declared": declared},
        )


# ============================================================================
# RENDER Faults
# ============================================================================

class RenderFault(Fault):
    """Base class for link template rendering faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.RENDER,
            severity=severity,
            metadata=metadata,
        )


class UnknownStateFault(RenderFault):
    """No transition template properties exist for a state."""

    def __init__(self, state: str, **kwargs):
        super().__init__(
            code="UNKNOWN_STATE",
            message=f"No transition template properties for state '{state}'",
            metadata={"state": state, **kwargs.get("metadata", {})},
        )


class TemplateRenderFault(RenderFault):
    """The link template failed to compile or render."""

    def __init__(self, state: str, reason: str):
        super().__init__(
            code="TEMPLATE_RENDER_FAILED",
            message=f"Failed to render link template for state '{state}': {reason}",
            metadata={"state": state, "reason": reason},
        )
