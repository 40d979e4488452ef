"""
Test: Transition template derivation (restbind/transitions.py)

Tests the flat per-state properties, override handling, filtering of
unclassified parameters, the structured template view and .properties
serialisation.
"""

from restbind import (
    BindingConfig,
    BindingMetadata,
    ParameterSource,
    ResourceBinding,
    ResourceParameter,
    TransitionOverride,
    derive_transition_template_properties,
    format_properties,
    transition_templates,
)
from tests.conftest import make_definition, path_param, query_param


def _binding(states=("A", "B"), namespace="urn:ns", params=()):
    binding = ResourceBinding(
        None,
        "/persons/{pid}",
        make_definition(),
        BindingMetadata(namespace=namespace, states=tuple(states)),
    )
    binding.add_resource_parameters(params)
    return binding


# ============================================================================
# Flat properties
# ============================================================================

class TestTransitionTemplateProperties:

    def test_single_query_param_two_states(self):
        props = _binding(params=[query_param("id")]).transition_template_properties()
        for state in ("A", "B"):
            assert props[f"{state}.id.optional"] == "false"
            assert props[f"{state}.id.variableName"] == "id"
            assert props[f"{state}.queryParams"] == "id"
            assert props[f"{state}.path"] == "/persons/{pid}"
            assert props[f"{state}.namespace"] == "urn:ns"
        assert len(props) == 10

    def test_no_states_no_properties(self):
        binding = ResourceBinding(None, "/x", make_definition())
        binding.add_resource_parameter(query_param("id"))
        assert binding.transition_template_properties() == {}

    def test_query_params_comma_joined_in_parameter_order(self):
        props = _binding(states=["A"], params=[
            query_param("lang"),
            path_param("pid"),
            query_param("access"),
        ]).transition_template_properties()
        assert props["A.queryParams"] == "access,lang"

    def test_path_params_not_in_query_list(self):
        props = _binding(states=["A"], params=[path_param("pid")]).transition_template_properties()
        assert props["A.queryParams"] == ""
        assert props["A.pid.optional"] == "false"
        assert props["A.pid.variableName"] == "pid"

    def test_unclassified_parameters_excluded(self):
        props = _binding(states=["A"], params=[
            ResourceParameter("Accept-Language", "java.lang.String", ParameterSource.HEADER),
            ResourceParameter("session", "java.lang.String", ParameterSource.COOKIE),
            query_param("lang"),
        ]).transition_template_properties()
        assert not any("Accept-Language" in key for key in props)
        assert not any("session" in key for key in props)
        assert props["A.queryParams"] == "lang"

    def test_override_optional_and_name(self):
        param = query_param("pid", transition=TransitionOverride(optional=True, name="personId"))
        props = _binding(states=["A"], params=[param]).transition_template_properties()
        assert props["A.pid.optional"] == "true"
        assert props["A.pid.variableName"] == "personId"

    def test_override_default_name_keeps_parameter_name(self):
        param = query_param("pid", transition=TransitionOverride(optional=True))
        props = _binding(states=["A"], params=[param]).transition_template_properties()
        assert props["A.pid.optional"] == "true"
        assert props["A.pid.variableName"] == "pid"

    def test_states_in_sorted_order(self):
        props = _binding(states=["zeta", "alpha"]).transition_template_properties()
        assert list(props) == [
            "alpha.queryParams", "alpha.path", "alpha.namespace",
            "zeta.queryParams", "zeta.path", "zeta.namespace",
        ]

    def test_repeated_calls_identical(self):
        binding = _binding(params=[query_param("b"), path_param("a")])
        first = binding.transition_template_properties()
        second = binding.transition_template_properties()
        assert first == second
        assert list(first) == list(second)

    def test_reflects_later_aggregation(self):
        binding = _binding(states=["A"])
        assert binding.transition_template_properties()["A.queryParams"] == ""
        binding.add_resource_parameter(query_param("q"))
        assert binding.transition_template_properties()["A.queryParams"] == "q"


# ============================================================================
# Missing namespace
# ============================================================================

class TestMissingNamespace:

    def test_empty_string_by_default(self):
        props = _binding(states=["A"], namespace="##default").transition_template_properties()
        assert props["A.namespace"] == ""

    def test_configured_placeholder(self):
        binding = _binding(states=["A"], namespace="##default")
        props = derive_transition_template_properties(binding, BindingConfig(missing_namespace="none"))
        assert props["A.namespace"] == "none"


# ============================================================================
# Structured templates
# ============================================================================

class TestTransitionTemplates:

    def test_one_template_per_state(self):
        templates = transition_templates(_binding(params=[query_param("lang"), path_param("pid")]))
        assert [t.state for t in templates] == ["A", "B"]
        template = templates[0]
        assert template.path == "/persons/{pid}"
        assert template.query_params == ("lang",)
        assert [v.parameter for v in template.variables] == ["lang", "pid"]

    def test_to_properties_matches_flat_derivation(self):
        binding = _binding(params=[query_param("lang")])
        merged = {}
        for template in transition_templates(binding):
            merged.update(template.to_properties())
        assert merged == binding.transition_template_properties()


# ============================================================================
# .properties serialisation
# ============================================================================

class TestFormatProperties:

    def test_sorted_lines(self):
        text = format_properties({"b.path": "/b", "a.path": "/a"})
        assert text == "a.path=/a\nb.path=/b\n"

    def test_escapes(self):
        text = format_properties({"A.namespace": "http://example.org/rs"})
        assert text == "A.namespace=http\\://example.org/rs\n"

    def test_key_spaces_escaped(self):
        assert format_properties({"a b": " v"}) == "a\\ b=\\ v\n"

    def test_empty(self):
        assert format_properties({}) == ""

    def test_non_ascii_written_as_unicode_escapes(self):
        assert format_properties({"A.namespace": "urn:café"}) == "A.namespace=urn\\:caf\\u00E9\n"

    def test_control_and_astral_characters_escaped(self):
        assert format_properties({"k": "\x01😀"}) == "k=\\u0001\\uD83D\\uDE00\n"
