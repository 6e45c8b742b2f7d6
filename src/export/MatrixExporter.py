import json
from dataclasses import dataclass
from typing import Any, Dict

from transform.Matrix import Matrix


@dataclass
class MatrixExporter:

    @staticmethod
    def to_dict(m: Matrix) -> Dict[str, Any]:
        check = m.is_translation()
        return {
            "svg": m.to_svg(),
            "values": m.values,
            "is_identity": m.is_identity(),
            "translation": [check.tx, check.ty] if check else None,
        }

    @staticmethod
    def export(m: Matrix, path: str) -> None:
        """Export as JSON: { "svg": str, "values": [[...], [...], [...]], ... }"""
        data = json.dumps(MatrixExporter.to_dict(m), ensure_ascii=False, indent=4, separators=(",", ":"))
        if path == "-" or path == "stdout":
            print(data)
        else:
            with open(path, "w", encoding="utf-8") as f:
                f.write(data)
