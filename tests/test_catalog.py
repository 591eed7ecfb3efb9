"""
Unit Tests for the Component Catalog and ComponentType resolution
"""

import pytest

from solution_deps.domain.models import ComponentType
from solution_deps.domain.services import build_catalog

from conftest import component


class TestComponentType:

    @pytest.mark.parametrize("raw, expected", [
        ("Entity", ComponentType.ENTITY),
        ("webresource", ComponentType.WEB_RESOURCE),
        ("Web Resource", ComponentType.WEB_RESOURCE),
        ("savedquery", ComponentType.VIEW),
        (24, ComponentType.FORM),
        (60, ComponentType.FORM),
        ("61", ComponentType.WEB_RESOURCE),
        (90, ComponentType.PLUGIN),
        ("Other", ComponentType.OTHER),
    ])
    def test_from_string(self, raw, expected):
        assert ComponentType.from_string(raw) is expected

    @pytest.mark.parametrize("raw", ["Dashboard", 9999, None, True, ""])
    def test_unknown_maps_to_other(self, raw):
        assert ComponentType.from_string(raw) is ComponentType.OTHER

    def test_is_known_distinguishes_explicit_other(self):
        assert ComponentType.is_known("Other")
        assert not ComponentType.is_known("Dashboard")


class TestBuildCatalog:

    def test_preserves_input_order(self):
        catalog = build_catalog([component("c"), component("a"), component("b")])
        assert [c.id for c in catalog.components] == ["c", "a", "b"]
        assert catalog.warnings == []

    def test_normalises_fields(self):
        catalog = build_catalog([
            {"id": "x", "name": "X", "logical_name": "new_x", "type": 61, "is_managed": 1},
        ])
        comp = catalog.components[0]
        assert comp.logical_name == "new_x"
        assert comp.type is ComponentType.WEB_RESOURCE
        assert comp.is_managed is True
        assert comp.not_found is False

    def test_in_solution_flag(self):
        catalog = build_catalog([
            component("a"),
            component("b", inSolution=False),
            {"id": "c", "type": "Entity", "in_solution": 0},
        ])
        assert [c.in_solution for c in catalog.components] == [True, False, False]
        assert catalog.components[1].to_dict()["inSolution"] is False

    def test_name_and_logical_name_default_to_id(self):
        comp = build_catalog([{"id": "abc", "type": "Entity"}]).components[0]
        assert comp.name == "abc"
        assert comp.logical_name == "abc"
        assert comp.is_managed is False

    def test_duplicate_id_later_record_wins(self):
        catalog = build_catalog([
            component("a", name="First"),
            component("b"),
            component("a", name="Second", ctype="Form"),
        ])
        assert [c.id for c in catalog.components] == ["a", "b"]
        assert catalog.components[0].name == "Second"
        assert catalog.components[0].type is ComponentType.FORM
        assert len(catalog.warnings) == 1
        assert "Duplicate" in catalog.warnings[0]

    def test_unknown_type_is_recoverable(self, caplog):
        catalog = build_catalog([component("a", ctype="Dashboard")])
        assert catalog.components[0].type is ComponentType.OTHER
        assert any("Unknown component type" in w for w in catalog.warnings)
        assert "Unknown component type" in caplog.text

    def test_empty_input(self):
        assert len(build_catalog([])) == 0

    @pytest.mark.parametrize("bad", [None, "components", {"id": "a"}, 42])
    def test_non_list_is_fatal(self, bad):
        with pytest.raises(TypeError):
            build_catalog(bad)

    def test_non_mapping_record_is_fatal(self):
        with pytest.raises(TypeError, match="record #1"):
            build_catalog([component("a"), ["b"]])

    @pytest.mark.parametrize("bad_id", [None, 7, ["a"]])
    def test_non_string_id_is_fatal(self, bad_id):
        with pytest.raises(TypeError, match="non-string id"):
            build_catalog([{"id": bad_id, "type": "Entity"}])

    def test_blank_id_is_fatal(self):
        with pytest.raises(ValueError):
            build_catalog([{"id": "  ", "type": "Entity"}])
