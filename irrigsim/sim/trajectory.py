from dataclasses import dataclass
from typing import Iterator, List, Sequence, overload

import numpy as np
import pandas as pd

from irrigsim.core.state import StepRecord, ValveState


@dataclass(frozen=True, slots=True)
class TrajectorySummary:
    num_steps: int
    irrigation_hours: float  # h with the valve open
    valve_switches: int
    min_moisture: float  # %
    max_moisture: float  # %
    mean_temperature: float  # °C


class Trajectory(Sequence[StepRecord]):
    """
    Ordered, append-only log of completed simulation steps.

    Owned by the simulation driver, which seals it once the run completes.
    Readers only get immutable StepRecords.
    """

    def __init__(self, step_hours: float):
        self.step_hours = step_hours
        self._records: List[StepRecord] = []
        self._sealed = False

    def append(self, record: StepRecord) -> None:
        if self._sealed:
            raise RuntimeError("Trajectory is sealed; the run has completed.")
        if record.step != len(self._records):
            raise ValueError(
                f"Expected step {len(self._records)}, got step {record.step}."
            )
        self._records.append(record)

    def seal(self) -> None:
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    @overload
    def __getitem__(self, idx: int) -> StepRecord: ...

    @overload
    def __getitem__(self, idx: slice) -> Sequence[StepRecord]: ...

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return tuple(self._records[idx])
        return self._records[idx]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StepRecord]:
        return iter(tuple(self._records))

    def __repr__(self) -> str:
        return f"<Trajectory(steps={len(self)}, sealed={self._sealed})>"

    # ------------------------
    # Column views
    # ------------------------
    @property
    def times(self) -> np.ndarray:
        return np.array([r.time_hours for r in self._records], dtype=float)

    @property
    def moisture(self) -> np.ndarray:
        return np.array([r.moisture_percent for r in self._records], dtype=float)

    @property
    def temperature(self) -> np.ndarray:
        return np.array([r.temperature_c for r in self._records], dtype=float)

    @property
    def valve(self) -> np.ndarray:
        return np.array([int(r.valve) for r in self._records], dtype=int)

    def to_dataframe(self) -> pd.DataFrame:
        """Tabular copy of the trajectory, indexed by step."""
        df = pd.DataFrame(
            {
                "time_hours": self.times,
                "moisture_percent": self.moisture,
                "temperature_c": self.temperature,
                "valve": self.valve,
                "reason": [r.reason.value for r in self._records],
            }
        )
        df.index.name = "step"
        return df

    def summary(self) -> TrajectorySummary:
        if not self._records:
            raise ValueError("Cannot summarize an empty trajectory.")
        valve = self.valve
        moisture = self.moisture
        return TrajectorySummary(
            num_steps=len(self),
            irrigation_hours=float(np.count_nonzero(valve == ValveState.ON) * self.step_hours),
            valve_switches=int(np.count_nonzero(np.diff(valve))),
            min_moisture=float(moisture.min()),
            max_moisture=float(moisture.max()),
            mean_temperature=float(self.temperature.mean()),
        )
