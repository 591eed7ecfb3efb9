"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the solution dependency engine.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "cycle"         # Run only cycle tests
    pytest tests/ --quick            # Skip slow tests
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from solution_deps.domain.services import build_catalog, build_graph


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_addoption(parser):
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Helpers
# =============================================================================

def component(cid: str, ctype: str = "Entity", managed: bool = False, **extra) -> Dict[str, Any]:
    record = {
        "id": cid,
        "name": extra.pop("name", cid.upper()),
        "logicalName": extra.pop("logicalName", cid.lower()),
        "type": ctype,
        "isManaged": managed,
    }
    record.update(extra)
    return record


def facts(*pairs: str) -> List[Dict[str, str]]:
    """facts("A>B", "B>C") -> [{"fromId": "A", "toId": "B"}, ...]"""
    out = []
    for pair in pairs:
        source, target = pair.split(">")
        out.append({"fromId": source, "toId": target})
    return out


def make_graph(ids, *pairs):
    catalog = build_catalog([component(cid) for cid in ids])
    return build_graph(catalog.components, facts(*pairs))


# =============================================================================
# Scenario Fixtures
# =============================================================================

@pytest.fixture
def simple_cycle_graph():
    """Scenario A: A -> B -> C -> A."""
    return make_graph("ABC", "A>B", "B>C", "C>A").graph


@pytest.fixture
def missing_reference_build():
    """Scenario B: D -> E where E was never scanned."""
    return make_graph("D", "D>E")


@pytest.fixture
def layered_graph():
    """Scenario C: R3 -> R2 -> R."""
    return make_graph(["R", "R2", "R3"], "R2>R", "R3>R2").graph


@pytest.fixture
def solution_scan() -> Dict[str, Any]:
    """A small but realistic scan: account entity, form with a script, view, workflow."""
    return {
        "components": [
            component("ent-account", "Entity", name="Account", logicalName="account"),
            component("ent-contact", "Entity", name="Contact", logicalName="contact"),
            component("form-account", 24, name="Account Main", logicalName="account"),
            component("wr-account-js", "WebResource", name="account.js", logicalName="new_/scripts/account.js"),
            component("view-active", "View", name="Active Accounts", logicalName="account"),
            component("wf-notify", "Workflow", name="Notify Owner", logicalName="new_notify"),
            component("plugin-validate", "Plugin", name="Validate Account", logicalName="Contoso.Validate", managed=True),
        ],
        "dependencies": [
            {"fromId": "plugin-validate", "toId": "ent-account"},
            {"fromId": "ent-account", "toId": "ent-contact"},
            {"fromId": "ent-contact", "toId": "ent-account"},
        ],
        "payloads": {
            "form-account": {
                "objecttypecode": "account",
                "formxml": (
                    "<form><formLibraries>"
                    "<Library name=\"new_/scripts/account.js\" libraryUniqueId=\"{1}\"/>"
                    "<Library name=\"new_/scripts/missing.js\" libraryUniqueId=\"{2}\"/>"
                    "</formLibraries></form>"
                ),
            },
            "view-active": {
                "fetchxml": (
                    "<fetch><entity name=\"account\">"
                    "<attribute name=\"name\"/>"
                    "<link-entity name=\"contact\" from=\"contactid\" to=\"primarycontactid\"/>"
                    "</entity></fetch>"
                ),
            },
            "wf-notify": {"primaryentity": "account", "dependsOn": ["plugin-validate"]},
        },
    }


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    return tmp_path
