"""Form glue between an input surface, the solver and an output surface."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from endereye.config import EndereyeConfig, Language
from endereye.geometry.solver import (
    CalculationError,
    ErrorKind,
    ObservationPoint,
    TriangulationResult,
    solve,
)

log = logging.getLogger(__name__)

FIELD_NAMES = ("x1", "z1", "angle1", "x2", "z2", "angle2")

_MESSAGES: dict[Language, dict[str, str]] = {
    Language.EN: {
        ErrorKind.INVALID_INPUT.value: "Error: please fill in all 6 fields!",
        ErrorKind.POINTS_TOO_CLOSE.value: "Error: the two throw points are too close, pick another spot.",
        ErrorKind.PARALLEL_BEARINGS.value: "Error: the two throws are parallel, no intersection can be computed.",
        "result": "Predicted stronghold (X, Z): ({x}, {z})",
        "distance": "About {distance} blocks from the first throw point (O).",
        "placeholder": "Stronghold coordinates will appear here.",
    },
    Language.ZH: {
        ErrorKind.INVALID_INPUT.value: "错误: 请填写所有6个字段！",
        ErrorKind.POINTS_TOO_CLOSE.value: "错误: 两个投掷点距离太近，请重新选择。",
        ErrorKind.PARALLEL_BEARINGS.value: "错误: 两次投掷方向平行，无法计算交点。",
        "result": "预测要塞坐标 (X, Z): ({x}, {z})",
        "distance": "你距离第一次投掷点(O)约 {distance} 格。",
        "placeholder": "要塞坐标将显示在这里。",
    },
}


class ValidationError(ValueError):
    """One or more form fields are missing or not finite numbers."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"invalid or missing fields: {', '.join(fields)}")


@dataclass(frozen=True)
class RawInputs:
    x1: float
    z1: float
    angle1: float
    x2: float
    z2: float
    angle2: float

    def points(self) -> tuple[ObservationPoint, ObservationPoint]:
        return (
            ObservationPoint(self.x1, self.z1, self.angle1),
            ObservationPoint(self.x2, self.z2, self.angle2),
        )


class InputSource(Protocol):
    def read_fields(self) -> RawInputs:
        """Return the six inputs or raise ValidationError."""


class OutputSink(Protocol):
    def show_result(self, result: TriangulationResult) -> None: ...

    def show_error(self, error: CalculationError) -> None: ...

    def clear(self) -> None: ...


def _parse_number(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_fields(values: Mapping[str, object]) -> RawInputs:
    """Parse the six named fields, raising ValidationError listing every bad one."""
    parsed: dict[str, float] = {}
    bad: list[str] = []
    for name in FIELD_NAMES:
        number = _parse_number(values.get(name))
        if number is None:
            bad.append(name)
        else:
            parsed[name] = number
    if bad:
        raise ValidationError(bad)
    return RawInputs(**parsed)


def message(key: str, language: Language = Language.EN) -> str:
    return _MESSAGES[language][key]


def error_message(kind: ErrorKind, language: Language = Language.EN) -> str:
    """User-facing text for an error kind."""
    return message(kind.value, language)


def format_result(
    result: TriangulationResult,
    config: EndereyeConfig | None = None,
) -> tuple[str, str]:
    """Render a result as (coordinates line, distance line)."""
    config = config or EndereyeConfig()
    coord = config.coordinate_decimals
    coordinates = message("result", config.language).format(
        x=f"{result.x:.{coord}f}",
        z=f"{result.z:.{coord}f}",
    )
    distance = message("distance", config.language).format(
        distance=f"{result.distance_from_first:.{config.distance_decimals}f}",
    )
    return coordinates, distance


def calculate(
    source: InputSource,
    sink: OutputSink,
    config: EndereyeConfig | None = None,
) -> TriangulationResult | CalculationError:
    """Read the form, solve, and route the outcome to the sink."""
    config = config or EndereyeConfig()
    try:
        raw = source.read_fields()
    except ValidationError as exc:
        log.debug("rejected input: %s", exc)
        error = CalculationError(ErrorKind.INVALID_INPUT, str(exc))
        sink.show_error(error)
        return error

    outcome = solve(*raw.points(), **config.solver_options())
    if isinstance(outcome, CalculationError):
        log.info("calculation failed: %s (%s)", outcome.kind.value, outcome.message)
        sink.show_error(outcome)
    else:
        log.info("stronghold at (%.1f, %.1f)", outcome.x, outcome.z)
        sink.show_result(outcome)
    return outcome
