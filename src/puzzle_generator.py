#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Vocabulary Puzzle Generator

Generates printable vocabulary puzzles from a classroom word list:
1. Crossword (greedy first-fit placement)
2. DGA deduction puzzle (letter-reveal clues, one solvable elimination path)
3. Tic-Tac-Word (four 3x3 boards of attribute constraints)

Results are validated, then exported as YAML intermediate and/or a text preview.

Usage:
    # With YAML configuration:
    python puzzle_generator.py --config config/week23.yaml

    # With command-line arguments:
    python puzzle_generator.py --type dga --words "apple,apply,apron,berry,beret,below" --seed 7
"""

import logging
import os
import sys
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Optional, Union

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from models import CrosswordResult, DGAResult, TicTacResult, WordEntry
from config import (
    PuzzleConfig, create_argument_parser, load_config, ConfigValidationError
)
from crossword_engine import generate_crossword
from dga_generator import DGAGenerator
from tictac_generator import TicTacGenerator
from search import make_rng
from validator import validate_crossword, validate_dga, validate_tictac, ValidationResult
from word_list_loader import load_word_list, split_entries, WordListImportError
from word_normalizer import normalize_entries
from yaml_exporter import PuzzleYAMLExporter
from logging_config import setup_logging

PuzzleResult = Union[CrosswordResult, DGAResult, TicTacResult]

EXIT_CONFIG_ERROR = 1
EXIT_GENERATION_FAILED = 2


class PuzzleGenerator:
    """
    Runs one puzzle engine for a configuration and keeps its result.

    Workflow:
    1. Load words and clues (inline or from a word list file)
    2. Run the engine for the configured puzzle type
    3. Validate the result
    4. Export YAML intermediate and/or text preview
    """

    def __init__(self, config: PuzzleConfig, setup_log: bool = True):
        """
        Initialize the generator.

        Args:
            config: PuzzleConfig instance with all settings
            setup_log: Configure root logging from config.output
        """
        self.config = config
        self.start_time = time.time()

        self.log_file_path = None
        if setup_log:
            self.log_file_path = setup_logging(
                output_dir=config.output.directory,
                log_level=config.output.log_level,
                log_file_prefix=config.output.log_file_prefix,
                enable_console=config.output.enable_console_logging,
            )
        self.logger = logging.getLogger(__name__)
        self.logger.info(f"Initialized PuzzleGenerator: type={config.puzzle_type}, title={config.title}")
        self.logger.debug(f"Log file: {self.log_file_path}")

        self.rng = make_rng(config.generation.seed)
        self.words: List[str] = []
        self.clues: List[str] = []
        self.validation: Optional[ValidationResult] = None
        self._result: Optional[PuzzleResult] = None
        self._stats: Dict = {}

    def load_words(self):
        """Resolve the word list from the config or its word list file."""
        if self.config.words:
            self.words, self.clues = split_entries(self.config.words, self.config.clues)
        elif self.config.words_file:
            self.words, self.clues = load_word_list(self.config.words_file)
            self.logger.info(f"Loaded {len(self.words)} words from {self.config.words_file}")
        else:
            raise ConfigValidationError("No words given: set puzzle.words or puzzle.words_file")

    def generate(self) -> PuzzleResult:
        """
        Run the configured engine.

        Returns:
            Deep copy of the result record (success may be False)
        """
        self.logger.info("=" * 60)
        self.logger.info("VOCABULARY PUZZLE GENERATOR")
        self.logger.info("=" * 60)

        if not self.words:
            self.load_words()
        self.logger.info(f"   Type: {self.config.puzzle_type}")
        self.logger.info(f"   Words: {len(self.words)}")

        puzzle_type = self.config.puzzle_type
        if puzzle_type == "crossword":
            result = self._generate_crossword()
        elif puzzle_type == "dga":
            result = self._generate_dga()
        elif puzzle_type == "tictac":
            result = self._generate_tictac()
        else:
            raise ConfigValidationError(f"Invalid puzzle type '{puzzle_type}'")

        self._result = result
        self._stats["elapsed_seconds"] = round(time.time() - self.start_time, 3)
        self._log_validation(result)
        return self.get_result()

    def get_result(self) -> Optional[PuzzleResult]:
        """Fresh deep copy of the last result; callers may mutate it freely."""
        return deepcopy(self._result)

    def get_stats(self) -> Dict:
        return dict(self._stats)

    def _entries(self) -> List[WordEntry]:
        return normalize_entries(self.words, self.clues)

    def _generate_crossword(self) -> CrosswordResult:
        entries = self._entries()
        result = generate_crossword(entries, rng=self.rng)
        self._stats.update({
            "placed_words": len(result.placed_words),
            "unused_words": len(result.unused_words),
            "grid_size": result.grid_size,
        })
        self.logger.info(
            f"   - Placed {len(result.placed_words)} of {len(entries)} words "
            f"on a {result.grid_size}x{result.grid_size} grid"
        )
        if result.unused_words:
            self.logger.info(f"   - Unused: {', '.join(result.unused_words)}")
        return result

    def _generate_dga(self) -> DGAResult:
        generator = DGAGenerator(
            rng=self.rng,
            max_attempts=self.config.generation.dga_max_attempts,
            time_limit=self.config.generation.time_limit_seconds,
        )
        result = generator.generate(self.words, clue_count_limit=self.config.dga.clue_count)
        self._stats.update(generator.stats)
        self._stats["ambiguous_clues"] = result.ambiguous_count
        if not result.success:
            self.logger.warning(f"   X {result.message}")
        return result

    def _generate_tictac(self) -> TicTacResult:
        generator = TicTacGenerator(
            rng=self.rng,
            max_grid_attempts=self.config.generation.tictac_max_attempts,
            time_limit=self.config.generation.time_limit_seconds,
        )
        result = generator.generate(
            self.words, self.clues, difficulty=self.config.tictac.difficulty
        )
        self._stats.update(generator.stats)
        self._stats["boards"] = len(result.grids)
        if not result.success:
            self.logger.warning(f"   X {result.message}")
        return result

    def _log_validation(self, result: PuzzleResult):
        """Check the result and log any invariant violations."""
        if isinstance(result, CrosswordResult):
            validation = validate_crossword(result)
        elif not result.success:
            return
        elif isinstance(result, DGAResult):
            validation = validate_dga(result)
        else:
            validation = validate_tictac(result, self._entries())

        self.validation = validation
        if validation.valid:
            self.logger.info("   - Result validated")
        else:
            self.logger.error("   X Result failed validation:")
            for error in validation.errors:
                self.logger.error(f"      - {error}")

    def export(self, output_dir: Optional[str] = None) -> Dict[str, str]:
        """
        Write the last result into the output directory.

        Returns:
            Dict of format name to written file path
        """
        if self._result is None:
            raise RuntimeError("Nothing to export; call generate() first")

        output_dir = Path(output_dir or self.config.output.directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        base_name = self._base_name()
        output_files: Dict[str, str] = {}

        if "yaml" in self.config.output.formats:
            exporter = PuzzleYAMLExporter()
            output_files["yaml"] = exporter.save(
                self._result,
                str(output_dir / f"{base_name}.yaml"),
                title=self.config.title,
                stats=self._stats,
            )

        if "text" in self.config.output.formats:
            text_path = output_dir / f"{base_name}.txt"
            with open(text_path, 'w', encoding='utf-8') as f:
                f.write(f"{self.config.title}\n\n")
                f.write(self._result.to_string(show_solution=False))
                if isinstance(self._result, CrosswordResult):
                    f.write("\n\n" + _clue_listing(self._result))
                f.write("\n\nSOLUTION\n\n")
                f.write(self._result.to_string(show_solution=True))
                f.write("\n")
            output_files["text"] = str(text_path)

        for name, path in output_files.items():
            self.logger.info(f"   {name}: {path}")
        return output_files

    def _base_name(self) -> str:
        slug = "".join(c if c.isalnum() else "_" for c in self.config.title.lower()).strip("_")
        return f"{slug or 'puzzle'}_{self.config.puzzle_type}"


def _clue_listing(result: CrosswordResult) -> str:
    lines = ["ACROSS"]
    lines += [f"{number:>3}. {clue}" for number, clue in result.get_across_clues()]
    lines += ["", "DOWN"]
    lines += [f"{number:>3}. {clue}" for number, clue in result.get_down_clues()]
    return "\n".join(lines)


def _failure_message(result: PuzzleResult) -> str:
    if isinstance(result, CrosswordResult):
        return f"No words could be placed ({len(result.unused_words)} unused)."
    return result.message or "unknown error"


def main():
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args()

    try:
        # Load configuration
        config = load_config(args)

        # Handle dry-run
        if getattr(args, 'dry_run', False):
            print("Configuration valid:")
            print(f"  Type: {config.puzzle_type}")
            print(f"  Title: {config.title}")
            print(f"  Words: {len(config.words) or config.words_file}")
            print(f"  Seed: {config.generation.seed}")
            print(f"  Output Directory: {config.output.directory}")
            return

        generator = PuzzleGenerator(config)
        result = generator.generate()
        generator.export()

        if not result.success:
            print(f"Generation failed: {_failure_message(result)}")
            sys.exit(EXIT_GENERATION_FAILED)
        print(result.to_string(show_solution=True))

    except (ConfigValidationError, WordListImportError) as e:
        print(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)
    except KeyboardInterrupt:
        print("\nGeneration cancelled.")
        sys.exit(0)


if __name__ == "__main__":
    main()
