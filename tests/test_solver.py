from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from endereye.geometry.solver import (
    CalculationError,
    ErrorKind,
    ObservationPoint,
    TriangulationResult,
    solve,
    solve_values,
)


def _solved(result: TriangulationResult | CalculationError) -> TriangulationResult:
    assert isinstance(result, TriangulationResult), result
    return result


def test_right_angle_worked_example() -> None:
    # O faces south (+Z) along x = 0; P at (10, 10) faces west (-X) along z = 10.
    result = _solved(solve(ObservationPoint(0, 0, 0), ObservationPoint(10, 10, 90)))
    assert result.x == pytest.approx(0.0, abs=1e-6)
    assert result.z == pytest.approx(10.0, abs=1e-6)
    assert result.distance_from_first == pytest.approx(10.0, abs=1e-6)


def test_east_south_worked_example() -> None:
    # O faces east (+X) along z = 0; P at (20, -10) faces south (+Z) along x = 20.
    result = _solved(solve_values(0, 0, -90, 20, -10, 0))
    assert result.x == pytest.approx(20.0, abs=1e-6)
    assert result.z == pytest.approx(0.0, abs=1e-6)
    assert result.distance_from_first == pytest.approx(20.0, abs=1e-6)


def test_oblique_sight_lines_meet_at_target() -> None:
    target = (-350.0, 1240.0)
    throws = [(12.0, -40.0), (180.0, 25.0)]
    points = []
    for x, z in throws:
        dx, dz = target[0] - x, target[1] - z
        yaw = math.degrees(math.atan2(-dx, dz))
        points.append(ObservationPoint(x, z, yaw))

    result = _solved(solve(*points))
    assert result.x == pytest.approx(target[0], abs=1e-6)
    assert result.z == pytest.approx(target[1], abs=1e-6)
    expected = math.hypot(target[0] - throws[0][0], target[1] - throws[0][1])
    assert result.distance_from_first == pytest.approx(expected, abs=1e-6)


def test_swapping_points_keeps_intersection() -> None:
    p1 = ObservationPoint(0, 0, -30)
    p2 = ObservationPoint(100, 0, 40)
    forward = _solved(solve(p1, p2))
    backward = _solved(solve(p2, p1))

    assert backward.x == pytest.approx(forward.x, abs=1e-6)
    assert backward.z == pytest.approx(forward.z, abs=1e-6)
    assert backward.distance_from_first == pytest.approx(
        math.hypot(forward.x - 100, forward.z), abs=1e-6
    )


def test_points_too_close() -> None:
    result = solve(ObservationPoint(0, 0, 0), ObservationPoint(0.5, 0, 0))
    assert isinstance(result, CalculationError)
    assert result.kind is ErrorKind.POINTS_TOO_CLOSE


def test_separation_threshold_is_inclusive() -> None:
    at_threshold = solve(ObservationPoint(0, 0, 0), ObservationPoint(1, 0, 45))
    assert isinstance(at_threshold, TriangulationResult)

    below = solve(ObservationPoint(0, 0, 0), ObservationPoint(0.999, 0, 45))
    assert isinstance(below, CalculationError)
    assert below.kind is ErrorKind.POINTS_TOO_CLOSE


def test_custom_min_separation() -> None:
    result = solve(ObservationPoint(0, 0, 0), ObservationPoint(5, 0, 45), min_separation=10.0)
    assert isinstance(result, CalculationError)
    assert result.kind is ErrorKind.POINTS_TOO_CLOSE


@pytest.mark.parametrize("second_yaw", [45.0, 225.0, -135.0, 405.0])
def test_parallel_bearings(second_yaw: float) -> None:
    result = solve(ObservationPoint(0, 0, 45), ObservationPoint(100, 0, second_yaw))
    assert isinstance(result, CalculationError)
    assert result.kind is ErrorKind.PARALLEL_BEARINGS


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, None, "north", "10", True])
def test_invalid_input(bad: object) -> None:
    result = solve(ObservationPoint(0, 0, 0), ObservationPoint(10, bad, 90))  # type: ignore[arg-type]
    assert isinstance(result, CalculationError)
    assert result.kind is ErrorKind.INVALID_INPUT


def test_numeric_types_are_accepted() -> None:
    result = solve(
        ObservationPoint(np.int64(0), np.float32(0), 0),
        ObservationPoint(10, 10.0, np.float64(90)),
    )
    assert isinstance(result, TriangulationResult)
    assert result.z == pytest.approx(10.0, abs=1e-6)


def test_overflowing_coordinates_are_rejected() -> None:
    result = solve_values(-1e308, 0, 0, 1e308, 0, 90)
    assert isinstance(result, CalculationError)
    assert result.kind is ErrorKind.INVALID_INPUT


def test_intersection_behind_first_observer(caplog: pytest.LogCaptureFixture) -> None:
    # O faces north (-Z) but the z = 10 line from P crosses x = 0 south of O.
    with caplog.at_level(logging.WARNING, logger="endereye.geometry.solver"):
        result = _solved(solve(ObservationPoint(0, 0, 180), ObservationPoint(10, 10, 90)))

    assert result.x == pytest.approx(0.0, abs=1e-6)
    assert result.z == pytest.approx(10.0, abs=1e-6)
    assert result.distance_from_first == pytest.approx(10.0, abs=1e-6)
    assert "behind" in caplog.text


def test_solve_is_deterministic() -> None:
    p1 = ObservationPoint(-123.25, 456.5, 17.3)
    p2 = ObservationPoint(88.0, -19.75, -61.9)
    assert solve(p1, p2) == solve(p1, p2)
