# -*- coding: utf-8 -*-
"""
Centralized configuration for Code Diff Highlighter.

This module provides a single configuration dataclass controlling how two
texts are compared (changed-line threshold, pairing policy, size guard) and
how the last compared pair is persisted between runs.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .classifier import SIMILARITY_THRESHOLD

# Environment variable overriding the session directory
CONFIG_DIR_ENV = "CODE_DIFF_HOME"
DEFAULT_CONFIG_DIR = "~/.code_diff_highlighter"
SESSION_FILENAME = "session.json"

# 2000 x 2000 lines
DEFAULT_MAX_ALIGNMENT_CELLS = 4_000_000


@dataclass
class DiffConfig:
    """
    Central configuration for comparisons.

    Attributes:
        similarity_threshold: An added line whose similarity to some removed
            line is strictly greater than this is reported as changed.
        consume_on_match: Controls how removed lines are paired:
            - False (default): a removed line stays available after matching,
              so it may mark several added lines as changed.
            - True: each removed line pairs with at most one added line.
        max_alignment_cells: Upper bound on old_lines * new_lines. The
            alignment table is quadratic, so larger inputs are rejected with
            InputTooLargeError. None disables the guard.
        autosave_delay_seconds: Quiet period before a submitted pair is
            written to the session store.
        storage_path: Session file location. None resolves through
            $CODE_DIFF_HOME, then ~/.code_diff_highlighter.
        auto_compare_on_restore: Whether restoring a saved session with both
            texts present runs a comparison immediately.
    """

    similarity_threshold: float = SIMILARITY_THRESHOLD
    consume_on_match: bool = False
    max_alignment_cells: Optional[int] = DEFAULT_MAX_ALIGNMENT_CELLS
    autosave_delay_seconds: float = 0.5
    storage_path: Optional[Path] = None
    auto_compare_on_restore: bool = True

    @property
    def has_size_guard(self) -> bool:
        """Check if oversized inputs are rejected before alignment."""
        return self.max_alignment_cells is not None

    @property
    def resolved_storage_path(self) -> Path:
        """Session file path after applying environment and home defaults."""
        if self.storage_path is not None:
            return Path(self.storage_path).expanduser()
        config_dir = os.environ.get(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIR
        return Path(config_dir).expanduser() / SESSION_FILENAME

    def exceeds_size_guard(self, old_count: int, new_count: int) -> bool:
        """Check if an old/new line count pair is over the cell budget.

        Args:
            old_count: Number of old lines.
            new_count: Number of new lines.

        Returns:
            False when the guard is disabled or the table fits.
        """
        if not self.has_size_guard:
            return False
        return old_count * new_count > self.max_alignment_cells

    def __post_init__(self):
        """Validate configuration values."""
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(
                f"similarity_threshold must be between 0 and 1, "
                f"got {self.similarity_threshold}"
            )
        if self.max_alignment_cells is not None and self.max_alignment_cells < 1:
            raise ValueError(
                f"max_alignment_cells must be >= 1 or None, got {self.max_alignment_cells}"
            )
        if self.autosave_delay_seconds < 0:
            raise ValueError(
                f"autosave_delay_seconds must be >= 0, got {self.autosave_delay_seconds}"
            )
        if self.storage_path is not None:
            self.storage_path = Path(self.storage_path)

    @classmethod
    def strict_pairing(cls, **overrides) -> "DiffConfig":
        """Create config where each removed line marks at most one changed line.

        Args:
            **overrides: Override any config values.

        Returns:
            DiffConfig with consume_on_match enabled.
        """
        defaults = {"consume_on_match": True}
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def unbounded(cls, **overrides) -> "DiffConfig":
        """Create config without the alignment size guard.

        Args:
            **overrides: Override any config values.

        Returns:
            DiffConfig with max_alignment_cells set to None.
        """
        defaults = {"max_alignment_cells": None}
        defaults.update(overrides)
        return cls(**defaults)
