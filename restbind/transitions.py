"""
Transition Template Derivation

Derives, for every state a binding transitions into, the properties needed
to build the URI/query template of that transition:

    <state>.<param>.optional      "true" / "false"
    <state>.<param>.variableName  template variable name
    <state>.queryParams           comma-joined query parameter names
    <state>.path                  binding path template
    <state>.namespace             binding namespace

Only path and query parameters take part; everything else is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .config import BindingConfig

if TYPE_CHECKING:
    from .binding import ResourceBinding


@dataclass(frozen=True)
class TransitionVariable:
    """A path or query parameter as it appears in a transition template."""
    parameter: str
    variable_name: str
    optional: bool = False
    query: bool = False


@dataclass(frozen=True)
class TransitionTemplate:
    """Structured form of the template properties of one state."""
    state: str
    path: str
    namespace: str
    variables: Tuple[TransitionVariable, ...] = field(default_factory=tuple)

    @property
    def query_params(self) -> Tuple[str, ...]:
        return tuple(v.parameter for v in self.variables if v.query)

    def to_properties(self) -> Dict[str, str]:
        properties: Dict[str, str] = {}
        for variable in self.variables:
            prefix = f"{self.state}.{variable.parameter}"
            properties[f"{prefix}.optional"] = "true" if variable.optional else "false"
            properties[f"{prefix}.variableName"] = variable.variable_name

        properties[f"{self.state}.queryParams"] = ",".join(self.query_params)
        properties[f"{self.state}.path"] = self.path
        properties[f"{self.state}.namespace"] = self.namespace
        return properties


def transition_templates(
    binding: ResourceBinding,
    config: Optional[BindingConfig] = None,
) -> List[TransitionTemplate]:
    """
    Build one TransitionTemplate per state, in sorted state order.

    Parameters keep the binding's (name, type name) order.
    """
    config = config or BindingConfig()
    namespace = binding.namespace if binding.namespace is not None else config.missing_namespace

    variables: List[TransitionVariable] = []
    for parameter in binding.resource_parameters:
        if not (parameter.is_path_param or parameter.is_query_param):
            continue

        optional = False
        variable_name = parameter.name
        override = parameter.transition_override()
        if override is not None:
            optional = override.optional
            if override.variable_name is not None:
                variable_name = override.variable_name

        variables.append(TransitionVariable(
            parameter=parameter.name,
            variable_name=variable_name,
            optional=optional,
            query=parameter.is_query_param,
        ))

    return [
        TransitionTemplate(
            state=state,
            path=binding.path,
            namespace=namespace,
            variables=tuple(variables),
        )
        for state in binding.states
    ]


def derive_transition_template_properties(
    binding: ResourceBinding,
    config: Optional[BindingConfig] = None,
) -> Dict[str, str]:
    """
    Flatten the transition templates of a binding into string properties.

    A binding without states yields an empty mapping.
    """
    properties: Dict[str, str] = {}
    for template in transition_templates(binding, config):
        properties.update(template.to_properties())
    return properties


# ─── .properties serialisation ───────────────────────────────────────────────

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def _escape(text: str, is_key: bool) -> str:
    out = []
    for index, char in enumerate(text):
        if char == " " and (is_key or index == 0):
            out.append("\\ ")
        elif char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) > 0x7e:
            # \uXXXX per UTF-16 code unit, as java.util.Properties.store writes
            encoded = char.encode("utf-16-be")
            for offset in range(0, len(encoded), 2):
                out.append("\\u%04X" % int.from_bytes(encoded[offset:offset + 2], "big"))
        else:
            out.append(char)
    return "".join(out)


def format_properties(properties: Dict[str, str]) -> str:
    """
    Serialise properties as ``.properties`` text, one ``key=value`` per line.

    Keys are written in sorted order so output is reproducible.
    """
    lines = [
        f"{_escape(key, True)}={_escape(properties[key], False)}"
        for key in sorted(properties)
    ]
    return "\n".join(lines) + ("\n" if lines else "")
