"""Source formatting pass for generated TypeScript."""

import json
import logging
import os
import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..errors import FormatterUnavailable

logger = logging.getLogger(__name__)


class SourceFormatter(ABC):
    """A pass that reformats generated source text."""

    @abstractmethod
    def format(self, text: str, config: Optional[Dict[str, Any]] = None) -> str:
        """Return ``text`` reformatted.

        Args:
            text: Generated TypeScript source
            config: Formatter-specific options

        Raises:
            FormatterUnavailable: If the formatter cannot run at all
        """
        pass


class PrettierFormatter(SourceFormatter):
    """Formats TypeScript with the prettier command line tool."""

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable or "prettier"

    def resolve_executable(self) -> str:
        """Absolute path to prettier.

        Raises:
            FormatterUnavailable: If prettier is not installed
        """
        path = shutil.which(self.executable)
        if path is None:
            raise FormatterUnavailable(details={"executable": self.executable})
        return path

    def format(self, text: str, config: Optional[Dict[str, Any]] = None) -> str:
        executable = self.resolve_executable()
        command: List[str] = [executable, "--stdin-filepath", "schema.ts", "--parser", "typescript"]

        config_path = None
        if config:
            with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8") as handle:
                json.dump(config, handle)
                config_path = handle.name
            command.extend(["--config", config_path])

        try:
            logger.debug("Running %s", " ".join(command))
            result = subprocess.run(
                command,
                input=text,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            logger.error("prettier failed: %s", e.stderr)
            raise
        finally:
            if config_path:
                os.unlink(config_path)

        return result.stdout
