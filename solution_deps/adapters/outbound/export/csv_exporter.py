"""
CSV Result Exporter

One row per component, the flat view of the dependency report.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from solution_deps.domain.models import AnalysisResult

logger = logging.getLogger(__name__)

COLUMNS = [
    "Component ID",
    "Name",
    "Type",
    "Logical Name",
    "Dependencies",
    "Dependent By",
    "Has Circular Ref",
    "Not Found",
    "Layer",
]


class CsvResultExporter:
    """Tabular component export backed by pandas."""

    def to_dataframe(self, result: AnalysisResult) -> pd.DataFrame:
        graph = result.graph
        circular = result.circular_ids
        rows = []
        for cid, comp in graph.components.items():
            layer = result.layers.layer_of.get(cid)
            rows.append({
                "Component ID": cid,
                "Name": comp.name,
                "Type": comp.type.value,
                "Logical Name": comp.logical_name,
                "Dependencies": graph.out_degree(cid),
                "Dependent By": graph.in_degree(cid),
                "Has Circular Ref": "Yes" if cid in circular else "No",
                "Not Found": "Yes" if comp.not_found else "No",
                "Layer": "" if layer is None else layer,
            })
        return pd.DataFrame(rows, columns=COLUMNS)

    def dumps(self, result: AnalysisResult) -> str:
        return self.to_dataframe(result).to_csv(index=False)

    def export(self, result: AnalysisResult, output_path: Union[str, Path]) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        frame = self.to_dataframe(result)
        frame.to_csv(path, index=False)
        logger.info("Exported %d components to %s", len(frame), path)
        return path
