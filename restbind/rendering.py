"""
Link Template Rendering

Renders a transition link (an RFC 6570 URI template such as
``/persons/{pid}{?lang,access}``) from transition template properties
using a sandboxed Jinja2 environment.
"""

import logging
from typing import Dict, Mapping, Optional

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from .config import BindingConfig
from .faults import TemplateRenderFault, UnknownStateFault

logger = logging.getLogger("restbind.rendering")


class LinkTemplateRenderer:
    """
    Render transition links for states from flat template properties.

    The template sees ``state``, ``path``, ``namespace``, ``query_params``
    and ``variables`` (parameter name -> variable name).

    Args:
        config: Binding config carrying the link template
        template: Template source overriding ``config.link_template``
    """

    def __init__(
        self,
        config: Optional[BindingConfig] = None,
        template: Optional[str] = None,
    ):
        self.config = config or BindingConfig()
        self.source = template if template is not None else self.config.link_template
        self.env = SandboxedEnvironment(
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )
        self._template = None

    def context_for(self, properties: Mapping[str, str], state: str) -> Dict[str, object]:
        """
        Collect the render context of one state.

        Raises:
            UnknownStateFault: If the properties hold nothing for the state
        """
        prefix = f"{state}."
        if f"{prefix}path" not in properties:
            raise UnknownStateFault(state)

        # keys of states nested under this one, e.g. "a.x" under "a"
        nested = [
            key[:-len(".path")] + "."
            for key in properties
            if key.endswith(".path") and key.startswith(prefix) and key != f"{prefix}path"
        ]

        variables: Dict[str, str] = {}
        suffix = ".variableName"
        for key, value in properties.items():
            if not (key.startswith(prefix) and key.endswith(suffix)):
                continue
            if any(key.startswith(other) for other in nested):
                continue
            variables[key[len(prefix):-len(suffix)]] = value

        return {
            "state": state,
            "path": properties[f"{prefix}path"],
            "namespace": properties.get(f"{prefix}namespace", self.config.missing_namespace),
            "query_params": properties.get(f"{prefix}queryParams", ""),
            "variables": variables,
        }

    def render(self, properties: Mapping[str, str], state: str) -> str:
        """
        Render the link template of a state.

        Raises:
            UnknownStateFault: If the properties hold nothing for the state
            TemplateRenderFault: If the template fails to compile or render
        """
        context = self.context_for(properties, state)
        try:
            if self._template is None:
                self._template = self.env.from_string(self.source)
            return self._template.render(**context)
        except TemplateError as exc:
            logger.debug("Link template failed for %s: %s", state, exc)
            raise TemplateRenderFault(state, str(exc)) from exc

    def render_all(self, properties: Mapping[str, str]) -> Dict[str, str]:
        """Render the link of every state present in the properties."""
        states = sorted(
            key[:-len(".path")] for key in properties if key.endswith(".path")
        )
        return {state: self.render(properties, state) for state in states}
