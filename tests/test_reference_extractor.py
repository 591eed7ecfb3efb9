"""
Unit Tests for the Reference Extractor
"""

import pytest

from solution_deps.domain.models import ComponentType, DependencyFact
from solution_deps.domain.services import (
    ReferenceIndex,
    build_catalog,
    extract_references,
    inferred_id,
)

from conftest import component


@pytest.fixture
def catalog(solution_scan):
    return build_catalog(solution_scan["components"]).components


def targets_of(result, component_id):
    return [f.to_id for f in result.facts if f.from_id == component_id]


class TestReferenceIndex:

    def test_resolves_by_type_and_logical_name(self, catalog):
        index = ReferenceIndex(catalog)
        assert index.resolve(ComponentType.ENTITY, "account") == "ent-account"
        assert index.resolve(ComponentType.FORM, "account") == "form-account"

    def test_resolution_is_case_insensitive(self, catalog):
        index = ReferenceIndex(catalog)
        assert index.resolve(ComponentType.ENTITY, "  Contact ") == "ent-contact"

    def test_unresolved_name_gets_inferred_id(self, catalog):
        index = ReferenceIndex(catalog)
        assert index.resolve(ComponentType.ENTITY, "Lead") == "inferred:entity:lead"
        assert inferred_id(ComponentType.WEB_RESOURCE, "a.js") == "inferred:webresource:a.js"

    def test_first_component_wins_on_collision(self):
        comps = build_catalog([
            component("e1", logicalName="account"),
            component("e2", logicalName="ACCOUNT"),
        ]).components
        assert ReferenceIndex(comps).resolve(ComponentType.ENTITY, "account") == "e1"


class TestExtractReferences:

    def test_form_owner_and_libraries(self, catalog, solution_scan):
        result = extract_references(catalog, solution_scan["payloads"])
        assert targets_of(result, "form-account") == [
            "ent-account",
            "wr-account-js",
            "inferred:webresource:new_/scripts/missing.js",
        ]

    def test_view_entities_from_fetchxml(self, catalog, solution_scan):
        result = extract_references(catalog, solution_scan["payloads"])
        assert targets_of(result, "view-active") == ["ent-account", "ent-contact"]

    def test_workflow_explicit_and_primary_entity(self, catalog, solution_scan):
        result = extract_references(catalog, solution_scan["payloads"])
        assert targets_of(result, "wf-notify") == ["plugin-validate", "ent-account"]

    def test_facts_are_dependency_facts(self, catalog, solution_scan):
        result = extract_references(catalog, solution_scan["payloads"])
        assert all(isinstance(f, DependencyFact) for f in result.facts)
        assert result.warnings == []

    def test_view_returned_type_code(self, catalog):
        result = extract_references(catalog, {"view-active": {"returnedtypecode": "contact"}})
        assert targets_of(result, "view-active") == ["ent-contact"]

    def test_workflow_without_primary_entity(self, catalog):
        result = extract_references(catalog, {"wf-notify": {"primaryentity": "none"}})
        assert result.facts == []

    def test_type_specific_keys_ignored_on_other_types(self, catalog):
        # primaryentity only means something on workflows
        result = extract_references(catalog, {"ent-account": {"primaryentity": "contact"}})
        assert result.facts == []

    def test_no_payloads(self, catalog):
        result = extract_references(catalog, None)
        assert result.facts == []
        assert result.warnings == []

    def test_unknown_component_payload_warns(self, catalog):
        result = extract_references(catalog, {"nope": {"dependsOn": ["ent-account"]}})
        assert result.facts == []
        assert len(result.warnings) == 1
        assert "nope" in result.warnings[0]

    def test_malformed_xml_warns_and_keeps_other_strategies(self, catalog):
        payloads = {
            "form-account": {
                "objecttypecode": "account",
                "formxml": "<form><formLibraries>",
                "dependsOn": ["ent-contact"],
            },
        }
        result = extract_references(catalog, payloads)
        # explicit dependsOn still applies, the form strategy is skipped as a whole
        assert targets_of(result, "form-account") == ["ent-contact"]
        assert len(result.warnings) == 1
        assert "formxml" in result.warnings[0]

    def test_bad_depends_on_warns(self, catalog):
        result = extract_references(catalog, {"ent-account": {"dependsOn": "ent-contact"}})
        assert result.facts == []
        assert len(result.warnings) == 1

    @pytest.mark.parametrize("payloads", [["form-account"], "x", {"form-account": "<form/>"}])
    def test_non_mapping_payloads_rejected(self, catalog, payloads):
        with pytest.raises(TypeError):
            extract_references(catalog, payloads)
