# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the vocabulary puzzle generator.

Handles loading configuration from YAML files and command-line arguments,
with proper merging and validation.
"""

import argparse
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, List, Dict, Any, Set, Union

import yaml


# Valid configuration values
VALID_PUZZLE_TYPES = ["crossword", "dga", "tictac"]
VALID_DIFFICULTIES = ["easy", "medium", "hard"]
VALID_OUTPUT_FORMATS = ["yaml", "text"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class GenerationConfig:
    """Configuration for the search engines."""
    seed: Optional[Union[int, str]] = None
    time_limit_seconds: Optional[float] = None
    dga_max_attempts: int = 500
    tictac_max_attempts: int = 50


@dataclass
class DGAConfig:
    """Configuration for DGA deduction puzzles."""
    clue_count: int = 10


@dataclass
class TicTacConfig:
    """Configuration for Tic-Tac-Word boards."""
    difficulty: str = "medium"


@dataclass
class OutputConfig:
    """Configuration for output."""
    directory: str = "./output"
    formats: List[str] = field(default_factory=lambda: ["yaml", "text"])
    log_level: str = "INFO"
    log_file_prefix: str = "vocab_puzzles"
    enable_console_logging: bool = True


@dataclass
class PuzzleConfig:
    """Complete configuration for puzzle generation."""
    # Puzzle settings
    puzzle_type: str = "crossword"
    title: str = "Vocabulary Puzzle"
    words: List[Any] = field(default_factory=list)
    clues: List[str] = field(default_factory=list)
    words_file: Optional[str] = None

    # Sub-configurations
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    dga: DGAConfig = field(default_factory=DGAConfig)
    tictac: TicTacConfig = field(default_factory=TicTacConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Settings given explicitly on the command line, e.g. "puzzle_type"
    cli_overrides: Set[str] = field(default_factory=set, repr=False, compare=False)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        if isinstance(self.generation, dict):
            self.generation = GenerationConfig(**self.generation)
        if isinstance(self.dga, dict):
            self.dga = DGAConfig(**self.dga)
        if isinstance(self.tictac, dict):
            self.tictac = TicTacConfig(**self.tictac)
        if isinstance(self.output, dict):
            self.output = OutputConfig(**self.output)

    @classmethod
    def from_yaml(cls, path: str) -> 'PuzzleConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            PuzzleConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        config = cls._from_dict(data)
        # Relative word files resolve against the config file's directory
        if config.words_file and not Path(config.words_file).is_absolute():
            config.words_file = str(path.parent / config.words_file)
        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'PuzzleConfig':
        """Create PuzzleConfig from dictionary."""
        # Handle nested 'puzzle' key
        puzzle_data = data.get('puzzle', {}) or {}

        config = cls(
            puzzle_type=puzzle_data.get('type', cls.puzzle_type),
            title=puzzle_data.get('title', cls.title),
            words=list(puzzle_data.get('words', []) or []),
            clues=list(puzzle_data.get('clues', []) or []),
            words_file=puzzle_data.get('words_file'),
        )

        try:
            if 'generation' in data:
                config.generation = GenerationConfig(**(data['generation'] or {}))
            if 'dga' in data:
                config.dga = DGAConfig(**(data['dga'] or {}))
            if 'tictac' in data:
                config.tictac = TicTacConfig(**(data['tictac'] or {}))
            if 'output' in data:
                config.output = OutputConfig(**(data['output'] or {}))
        except TypeError as e:
            raise ConfigValidationError(f"Unknown configuration key: {e}")

        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'PuzzleConfig':
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            PuzzleConfig instance
        """
        config = cls()

        # Map CLI arguments to config
        if getattr(args, 'type', None):
            config.puzzle_type = args.type
            config.cli_overrides.add("puzzle_type")
        if getattr(args, 'title', None):
            config.title = args.title
            config.cli_overrides.add("title")
        if getattr(args, 'words', None):
            config.words = [w.strip() for w in args.words.split(',') if w.strip()]
        if getattr(args, 'words_file', None):
            config.words_file = args.words_file
        if getattr(args, 'seed', None) is not None:
            config.generation.seed = args.seed
        if getattr(args, 'time_limit', None) is not None:
            config.generation.time_limit_seconds = args.time_limit
        if getattr(args, 'clue_count', None) is not None:
            config.dga.clue_count = args.clue_count
            config.cli_overrides.add("clue_count")
        if getattr(args, 'difficulty', None):
            config.tictac.difficulty = args.difficulty
            config.cli_overrides.add("difficulty")
        if getattr(args, 'output', None):
            config.output.directory = args.output
            config.cli_overrides.add("directory")
        if getattr(args, 'format', None):
            config.output.formats = [f.strip() for f in args.format.split(',') if f.strip()]
            config.cli_overrides.add("formats")
        if getattr(args, 'verbose', False):
            config.output.log_level = "DEBUG"
            config.cli_overrides.add("log_level")

        return config

    @classmethod
    def merge(
        cls,
        yaml_config: 'PuzzleConfig',
        cli_config: 'PuzzleConfig'
    ) -> 'PuzzleConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        Args:
            yaml_config: Configuration loaded from YAML file
            cli_config: Configuration from command-line arguments

        Returns:
            Merged PuzzleConfig instance
        """
        # Start with YAML config as base
        merged = PuzzleConfig(
            puzzle_type=yaml_config.puzzle_type,
            title=yaml_config.title,
            words=list(yaml_config.words),
            clues=list(yaml_config.clues),
            words_file=yaml_config.words_file,
            generation=GenerationConfig(**asdict(yaml_config.generation)),
            dga=DGAConfig(**asdict(yaml_config.dga)),
            tictac=TicTacConfig(**asdict(yaml_config.tictac)),
            output=OutputConfig(**asdict(yaml_config.output)),
        )

        # Override with CLI values given explicitly or differing from the defaults
        default = cls()

        def given(name: str, value: Any, default_value: Any) -> bool:
            return name in cli_config.cli_overrides or value != default_value

        if given("puzzle_type", cli_config.puzzle_type, default.puzzle_type):
            merged.puzzle_type = cli_config.puzzle_type
        if given("title", cli_config.title, default.title):
            merged.title = cli_config.title
        if cli_config.words:
            merged.words = list(cli_config.words)
            merged.clues = list(cli_config.clues)
            merged.words_file = None
        if cli_config.words_file:
            merged.words_file = cli_config.words_file
        if cli_config.generation.seed is not None:
            merged.generation.seed = cli_config.generation.seed
        if cli_config.generation.time_limit_seconds is not None:
            merged.generation.time_limit_seconds = cli_config.generation.time_limit_seconds
        if given("clue_count", cli_config.dga.clue_count, default.dga.clue_count):
            merged.dga.clue_count = cli_config.dga.clue_count
        if given("difficulty", cli_config.tictac.difficulty, default.tictac.difficulty):
            merged.tictac.difficulty = cli_config.tictac.difficulty
        if given("directory", cli_config.output.directory, default.output.directory):
            merged.output.directory = cli_config.output.directory
        if given("formats", cli_config.output.formats, default.output.formats):
            merged.output.formats = cli_config.output.formats
        if given("log_level", cli_config.output.log_level, default.output.log_level):
            merged.output.log_level = cli_config.output.log_level

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.puzzle_type not in VALID_PUZZLE_TYPES:
            errors.append(
                f"Invalid puzzle type '{self.puzzle_type}'. "
                f"Must be one of: {VALID_PUZZLE_TYPES}"
            )

        if not self.words and not self.words_file:
            errors.append("No words given: set puzzle.words or puzzle.words_file")

        if self.tictac.difficulty.lower() not in VALID_DIFFICULTIES:
            errors.append(
                f"Invalid difficulty '{self.tictac.difficulty}'. "
                f"Must be one of: {VALID_DIFFICULTIES}"
            )

        if self.dga.clue_count < 1:
            errors.append("dga.clue_count must be positive")

        if self.generation.dga_max_attempts < 1:
            errors.append("generation.dga_max_attempts must be positive")
        if self.generation.tictac_max_attempts < 1:
            errors.append("generation.tictac_max_attempts must be positive")

        limit = self.generation.time_limit_seconds
        if limit is not None and limit <= 0:
            errors.append("generation.time_limit_seconds must be positive")

        for fmt in self.output.formats:
            if fmt not in VALID_OUTPUT_FORMATS:
                errors.append(
                    f"Invalid output format '{fmt}'. "
                    f"Must be one of: {VALID_OUTPUT_FORMATS}"
                )

        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.output.log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'puzzle': {
                'type': self.puzzle_type,
                'title': self.title,
                'words': list(self.words),
                'clues': list(self.clues),
                'words_file': self.words_file,
            },
            'generation': asdict(self.generation),
            'dga': asdict(self.dga),
            'tictac': asdict(self.tictac),
            'output': asdict(self.output),
        }


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Generate printable vocabulary puzzles from a word list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Crossword from a comma-separated list
  vocab-puzzles --type crossword --words "apple,apron,berry,beret"

  # DGA puzzle from a word file, reproducible
  vocab-puzzles --type dga --words-file week23.txt --seed 7

  # Using YAML configuration (CLI arguments override YAML)
  vocab-puzzles --config puzzle.yaml --difficulty hard
"""
    )

    # Configuration file
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="YAML configuration file"
    )

    # Puzzle settings
    parser.add_argument(
        "--type", "-t",
        choices=VALID_PUZZLE_TYPES,
        help="Puzzle type (default: crossword)"
    )
    parser.add_argument(
        "--title",
        metavar="TEXT",
        help="Puzzle title"
    )
    parser.add_argument(
        "--words", "-w",
        metavar="LIST",
        help="Comma-separated words"
    )
    parser.add_argument(
        "--words-file", "-f",
        metavar="PATH",
        help="Word list file (.yaml or .txt, optional TAB-separated clue)"
    )
    parser.add_argument(
        "--clue-count",
        type=int,
        metavar="INT",
        help="Maximum words in a DGA puzzle (default: 10)"
    )
    parser.add_argument(
        "--difficulty", "-d",
        choices=VALID_DIFFICULTIES,
        help="Tic-Tac-Word difficulty (default: medium)"
    )

    # Search settings
    parser.add_argument(
        "--seed",
        type=int,
        metavar="INT",
        help="Random seed for reproducible output"
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        metavar="SECONDS",
        help="Wall-clock budget for randomized search"
    )

    # Output settings
    parser.add_argument(
        "--output", "-o",
        metavar="PATH",
        help="Output directory"
    )
    parser.add_argument(
        "--format",
        metavar="FORMATS",
        help="Comma-separated output formats (yaml,text)"
    )

    # Other options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config without generating"
    )

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> PuzzleConfig:
    """
    Load configuration from command-line and/or YAML file.

    Args:
        args: Parsed command-line arguments (if None, parses sys.argv)

    Returns:
        Fully resolved PuzzleConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    # Load from YAML if specified
    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = PuzzleConfig.from_yaml(args.config)

    # Load from CLI
    cli_config = PuzzleConfig.from_args(args)

    # Merge configurations
    if yaml_config:
        config = PuzzleConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    # Validate
    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
