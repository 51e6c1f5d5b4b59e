# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML exporter for generated puzzles.

Writes a result record (crossword, DGA or Tic-Tac-Word) to the YAML
intermediate format consumed by the rendering layer.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from models import CrosswordResult, DGAResult, TicTacResult

PuzzleResult = Union[CrosswordResult, DGAResult, TicTacResult]

PUZZLE_TYPES = {
    CrosswordResult: "crossword",
    DGAResult: "dga",
    TicTacResult: "tictac",
}


class YAMLExportError(Exception):
    """Raised when YAML export fails."""
    pass


class PuzzleYAMLExporter:
    """
    Exports puzzle results to YAML intermediate format.

    Usage:
        exporter = PuzzleYAMLExporter()
        yaml_str = exporter.export(result, title="Week 23")
        exporter.save(result, "output/week23_dga.yaml", title="Week 23")
    """

    def export(
        self,
        result: PuzzleResult,
        title: str = "Vocabulary Puzzle",
        stats: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Export a result to a YAML string.

        Args:
            result: Any engine result record
            title: Puzzle title
            stats: Optional generation statistics

        Returns:
            YAML string representation of the puzzle
        """
        puzzle_type = PUZZLE_TYPES.get(type(result))
        if puzzle_type is None:
            raise YAMLExportError(f"Cannot export {type(result).__name__}")

        data = {
            'metadata': {
                'title': title,
                'date': datetime.now().strftime("%Y-%m-%d"),
                'puzzle_type': puzzle_type,
                'generation_stats': dict(stats or {}),
            },
            'result': result.to_dict(),
        }

        header = "# Vocabulary Puzzle Intermediate Format\n"
        header += "# This file contains all puzzle data in structured YAML\n\n"

        yaml_content = yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
            width=80,
        )

        return header + yaml_content

    def save(
        self,
        result: PuzzleResult,
        path: str,
        title: str = "Vocabulary Puzzle",
        stats: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Save a result to a YAML file.

        Returns:
            Path to saved file
        """
        yaml_content = self.export(result, title=title, stats=stats)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            f.write(yaml_content)

        return str(path)
