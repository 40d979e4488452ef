"""
Binding Registry

Keeps one ResourceBinding per distinct path while the host discovery
layer reports resource definitions.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from .binding import ResourceBinding, _normalize
from .config import BindingConfig
from .declarations import BindingMetadata, ResourceDefinition
from .faults import BindingConflictFault

logger = logging.getLogger("restbind.registry")


class BindingRegistry:
    """
    Path-keyed collection of resource bindings.

    Example:
        registry = BindingRegistry()
        binding = registry.bind("/persons/{pid}", person_def, metadata)
        registry.bind("/persons/{pid}", person_ext_def)   # same binding
    """

    def __init__(self, config: Optional[BindingConfig] = None):
        self.config = config or BindingConfig()
        self._bindings: Dict[str, ResourceBinding] = {}

    def bind(
        self,
        path: str,
        definition: ResourceDefinition,
        metadata: Optional[BindingMetadata] = None,
        declaration: Any = None,
    ) -> ResourceBinding:
        """
        Bind a definition to a path, creating the binding on first sight.

        Raises:
            BindingConflictFault: If strict_namespaces is set and the
                binding has a namespace and the metadata declares another one.
                A binding created without a namespace keeps it absent.
        """
        binding = self._bindings.get(path)
        if binding is None:
            binding = ResourceBinding(
                declaration if declaration is not None else definition,
                path,
                definition,
                metadata,
            )
            self._bindings[path] = binding
            logger.debug("Registered binding for %s", path)
            return binding

        if metadata is not None and self.config.strict_namespaces and binding.namespace is not None:
            declared = _normalize(metadata.namespace)
            if declared is not None and declared != binding.namespace:
                raise BindingConflictFault(path, "namespace", binding.namespace, declared)

        binding.add_definition_conditionally(definition)
        return binding

    def get(self, path: str) -> Optional[ResourceBinding]:
        return self._bindings.get(path)

    def paths(self) -> List[str]:
        return sorted(self._bindings)

    def transition_template_properties(self) -> Dict[str, Dict[str, str]]:
        """Transition template properties of every binding, keyed by path."""
        return {
            path: self._bindings[path].transition_template_properties(self.config)
            for path in self.paths()
        }

    def __contains__(self, path: str) -> bool:
        return path in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[ResourceBinding]:
        for path in self.paths():
            yield self._bindings[path]
