"""Property-based checks for the colour matrix solver."""

from __future__ import annotations

import numpy as np
import pytest

try:  # pragma: no cover - optional dependency guard
    from hypothesis import HealthCheck, assume, given, settings
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - optional dependency guard
    pytestmark = pytest.mark.skip(reason="Hypothesis is required for property-based tests")
else:
    from camspec.calib import solve_color_matrix

    @st.composite
    def _patch_sets(draw, *, min_size: int = 6, max_size: int = 30):
        n = draw(st.integers(min_value=min_size, max_value=max_size))
        values = draw(
            st.lists(
                st.floats(min_value=0.05, max_value=1.0, allow_nan=False, allow_infinity=False),
                min_size=3 * n,
                max_size=3 * n,
            )
        )
        return np.asarray(values, dtype=np.float64).reshape(n, 3)

    @settings(
        max_examples=60, deadline=None, suppress_health_check=[HealthCheck.filter_too_much]
    )
    @given(_patch_sets())
    def test_identity_property(measured):
        """Reference equal to measurement yields the identity transform."""

        assume(np.linalg.cond(measured) < 1e2)
        result = solve_color_matrix(measured, measured, estimate_wb=False, regularization=0.0)
        np.testing.assert_allclose(result.color_matrix, np.eye(3), atol=1e-4)
        assert result.rms_error < 1e-5

    @settings(
        max_examples=40, deadline=None, suppress_health_check=[HealthCheck.filter_too_much]
    )
    @given(_patch_sets(), st.floats(min_value=0.1, max_value=10.0))
    def test_positive_scaling_keeps_predictions(measured, scale):
        assume(np.linalg.cond(measured) < 1e2)
        result = solve_color_matrix(
            measured * scale, measured, estimate_wb=False, regularization=0.0
        )
        predicted = (measured * scale) @ result.color_matrix.T
        np.testing.assert_allclose(predicted, measured, atol=1e-4)
