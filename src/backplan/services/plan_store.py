"""File-backed storage for exported plan documents."""

import json
import logging
from pathlib import Path

from ..scheduling.errors import PlannerError
from ..schemas.plan import PlanDocument, PlanFormatError
from ..utils.filenames import PLAN_SUFFIX, build_plan_filename

logger = logging.getLogger(__name__)


class PlanNotFoundError(PlannerError, FileNotFoundError):
    """Raised when a named plan has no stored document."""


class PlanStore:
    """Save and load plan documents as JSON files in a single directory."""

    def __init__(self, data_dir: Path):
        self.base_path = Path(data_dir)

    def _ensure_dir(self) -> None:
        """Ensure the plan directory exists."""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """Get the path a plan named ``name`` is stored under."""
        return self.base_path / build_plan_filename(name)

    def save(self, name: str, document: PlanDocument) -> Path:
        """Write ``document`` under ``name``, replacing any previous version."""
        self._ensure_dir()
        path = self.path_for(name)
        path.write_text(json.dumps(document.to_data(), indent=2), encoding="utf-8")
        logger.debug(f"Saved plan {name!r} to {path}")
        return path

    def load(self, name: str) -> PlanDocument:
        """Read the plan stored under ``name``.

        Raises:
            PlanNotFoundError: no plan is stored under that name.
            PlanFormatError: the stored file is not a valid plan document.
        """
        path = self.path_for(name)
        if not path.exists():
            raise PlanNotFoundError(f"No plan named {name!r} in {self.base_path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise PlanFormatError(f"Plan file {path} is not valid JSON: {exc}") from exc
        return PlanDocument.from_data(data)

    def list_plans(self) -> list[str]:
        """Return the stored plan slugs in alphabetical order."""
        if not self.base_path.exists():
            return []
        return sorted(path.stem for path in self.base_path.glob(f"*{PLAN_SUFFIX}"))

    def delete(self, name: str) -> bool:
        """Remove the plan stored under ``name``; return False if there was none."""
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        logger.debug(f"Deleted plan {name!r}")
        return True


__all__ = ["PlanStore", "PlanNotFoundError"]
