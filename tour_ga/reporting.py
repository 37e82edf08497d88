import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .errors import InvalidInput


@dataclass(frozen=True)
class EpochRecord:
    epoch: int
    best_distance: float
    average_distance: float


class RunReporter:
    """Append-only per-epoch cost history, kept for external plotting."""

    def __init__(self):
        self._records: List[EpochRecord] = []

    def record(self, epoch: int, best_distance: float, average_distance: float) -> EpochRecord:
        if self._records and epoch <= self._records[-1].epoch:
            raise ValueError(
                f"epoch {epoch} recorded after epoch {self._records[-1].epoch}"
            )
        entry = EpochRecord(epoch, float(best_distance), float(average_distance))
        self._records.append(entry)
        return entry

    def history(self) -> Tuple[EpochRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def to_dicts(self) -> List[Dict]:
        return [asdict(r) for r in self._records]

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dicts(), indent=2))

    @classmethod
    def load(cls, path: Path) -> "RunReporter":
        reporter = cls()
        try:
            for item in json.loads(Path(path).read_text()):
                reporter.record(item["epoch"], item["best_distance"], item["average_distance"])
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise InvalidInput(f"cannot read run history {path}: {exc!r}") from exc
        return reporter
