"""
Finding Detector

Turns an AnalysisResult into report findings. Missing references and
circular chains are analysis findings, not errors.

Finding Categories:
    - MISSING_REFERENCE: a dependency on a component outside the scan
    - CIRCULAR_REFERENCE: a closed dependency chain
    - NOT_IN_SOLUTION: an unmanaged component the solution uses but does
      not package; managed ones are left to the managed baseline
    - ORPHANED: a scanned component with no path to a root that is not
      explained by a circular reference

Severity Levels:
    - HIGH: blocks a clean solution import
    - MEDIUM: should be reviewed before release
    - LOW: informational
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

from solution_deps.domain.models import AnalysisResult, Component


class FindingCategory(Enum):
    MISSING_REFERENCE = "MissingReference"
    CIRCULAR_REFERENCE = "CircularReference"
    NOT_IN_SOLUTION = "NotInSolution"
    ORPHANED = "Orphaned"


class FindingSeverity(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def priority(self) -> int:
        """Numeric priority for sorting (higher = more urgent)."""
        return {"HIGH": 3, "MEDIUM": 2, "LOW": 1}[self.value]


@dataclass
class Finding:
    """A single reportable observation about the solution."""
    category: str
    severity: str
    component_ids: List[str]
    title: str
    description: str
    recommendation: str
    evidence: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def priority(self) -> int:
        return FindingSeverity(self.severity).priority


@dataclass
class FindingSummary:
    total: int
    by_severity: Dict[str, int]
    by_category: Dict[str, int]
    readiness_score: int
    import_ready: bool
    blockers: List[str] = field(default_factory=list)
    excluded_managed: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


#: Readiness penalties, matching the solution import report.
MISSING_PENALTY = 30       # per distinct missing component
OUTSIDE_PENALTY = 20       # per unmanaged component not packaged in the solution
CIRCULAR_PENALTY = 15      # per circular chain


def missing_components(result: AnalysisResult) -> List[Component]:
    """Distinct referenced components absent from the scan."""
    return result.graph.virtual_components()


def outside_solution(result: AnalysisResult) -> List[Component]:
    """Scanned, unmanaged components that the solution does not package."""
    return [
        c for c in result.graph.real_components()
        if not c.in_solution and not c.is_managed
    ]


def excluded_managed(result: AnalysisResult) -> List[Component]:
    """Managed components outside the solution; the managed baseline provides them on import."""
    return [
        c for c in result.graph.real_components()
        if not c.in_solution and c.is_managed
    ]


def import_readiness(result: AnalysisResult) -> int:
    """0-100 score; 100 means nothing blocks a clean import."""
    score = (
        100
        - len(missing_components(result)) * MISSING_PENALTY
        - len(outside_solution(result)) * OUTSIDE_PENALTY
        - len(result.chains) * CIRCULAR_PENALTY
    )
    return max(0, score)


def import_blockers(result: AnalysisResult) -> List[str]:
    """Ids of missing, unpackaged or circular components, in graph order."""
    blocking = {c.id for c in missing_components(result)}
    blocking.update(c.id for c in outside_solution(result))
    blocking.update(result.circular_ids)
    return [cid for cid in result.graph if cid in blocking]


class FindingDetector:
    """
    Detects reportable findings in an analysis result.

    Example:
        >>> findings = FindingDetector().detect(result)
        >>> blockers = [f for f in findings if f.severity == "HIGH"]
    """

    def detect(self, result: AnalysisResult) -> List[Finding]:
        findings: List[Finding] = []
        findings.extend(self._missing(result))
        findings.extend(self._circular(result))
        findings.extend(self._outside(result))
        findings.extend(self._orphaned(result))
        findings.sort(key=lambda f: -f.priority)
        return findings

    def summarize(self, result: AnalysisResult, findings: List[Finding]) -> FindingSummary:
        blockers = import_blockers(result)
        return FindingSummary(
            total=len(findings),
            by_severity=dict(Counter(f.severity for f in findings)),
            by_category=dict(Counter(f.category for f in findings)),
            readiness_score=import_readiness(result),
            import_ready=not blockers,
            blockers=blockers,
            excluded_managed=[c.id for c in excluded_managed(result)],
        )

    def _missing(self, result: AnalysisResult) -> List[Finding]:
        graph = result.graph
        findings = []
        for ref in result.missing_references:
            source = graph.components[ref.from_id]
            findings.append(Finding(
                category=FindingCategory.MISSING_REFERENCE.value,
                severity=FindingSeverity.HIGH.value,
                component_ids=[ref.from_id, ref.to_id],
                title=f"Missing dependency of {source.name}",
                description=f"{source.type.value} '{source.name}' depends on '{ref.to_id}', "
                            f"which is not part of the solution.",
                recommendation="Add the referenced component to the solution or remove the reference.",
                evidence={"fromId": ref.from_id, "toId": ref.to_id},
            ))
        return findings

    def _circular(self, result: AnalysisResult) -> List[Finding]:
        findings = []
        for chain in result.chains:
            severity = FindingSeverity.MEDIUM if chain.is_self_loop else FindingSeverity.HIGH
            findings.append(Finding(
                category=FindingCategory.CIRCULAR_REFERENCE.value,
                severity=severity.value,
                component_ids=chain.to_list()[:-1],
                title=f"Circular reference of length {chain.length}",
                description=f"Dependency loop: {chain}",
                recommendation="Break the loop by removing or inverting one of the references.",
                evidence={"chain": chain.to_list()},
            ))
        return findings

    def _outside(self, result: AnalysisResult) -> List[Finding]:
        return [
            Finding(
                category=FindingCategory.NOT_IN_SOLUTION.value,
                severity=FindingSeverity.MEDIUM.value,
                component_ids=[comp.id],
                title=f"{comp.name} is not part of the solution",
                description=f"{comp.type.value} '{comp.name}' is used by the solution but not packaged in it.",
                recommendation="Add the component to the solution or ship it in a managed baseline.",
            )
            for comp in outside_solution(result)
        ]

    def _orphaned(
self, result: AnalysisResult) -> List[Finding]:
        circular = result.circular_ids
        findings = []
        for cid in result.graph:
            comp = result.graph.components[cid]
            if comp.not_found or cid not in result.layers.orphaned or cid in circular:
                continue
            findings.append(Finding(
                category=FindingCategory.ORPHANED.value,
                severity=FindingSeverity.LOW.value,
                component_ids=[cid],
                title=f"Unplaced component {comp.name}",
                description=f"{comp.type.value} '{comp.name}' has no dependency path to a root component.",
                recommendation="Resolve the missing or circular references it depends on.",
            ))
        return findings
