"""
Tests for observation matrix intake (core/datasource.py).
"""

import io

import numpy as np
import pytest

from pyols.core.datasource import (
    load_observations,
    observations_from_values,
    parse_observations,
)
from pyols.core.exceptions import DimensionError, ValidationError


class TestParseObservations:

    def test_basic_csv(self):
        obs = parse_observations("1,2,3\n4,5,6\n")
        assert obs.dtype == np.float64
        np.testing.assert_array_equal(obs, [[1, 2, 3], [4, 5, 6]])

    def test_whitespace_around_cells(self):
        obs = parse_observations(" 1.5 , 2 ,3\n4,  5.25,6 \n")
        np.testing.assert_array_equal(obs, [[1.5, 2, 3], [4, 5.25, 6]])

    def test_blank_lines_skipped(self):
        obs = parse_observations("1,2\n\n3,4\n\n")
        assert obs.shape == (2, 2)

    def test_custom_delimiter(self):
        obs = parse_observations("1;2\n3;4\n", delimiter=';')
        np.testing.assert_array_equal(obs, [[1, 2], [3, 4]])

    def test_scientific_notation(self):
        obs = parse_observations("1e3,-2.5E-1\n")
        np.testing.assert_array_equal(obs, [[1000.0, -0.25]])

    def test_short_row_rejected(self):
        with pytest.raises(ValidationError, match="same length"):
            parse_observations("1,2,3\n4,5\n")

    def test_long_row_rejected(self):
        with pytest.raises(ValidationError, match="same length"):
            parse_observations("1,2\n3,4,5\n")

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            parse_observations("1,2\n3,abc\n")

    @pytest.mark.parametrize("cell", ["NA", "N/A", "nan", "NaN", "null", "-"])
    def test_missing_value_markers_are_non_numeric(self, cell):
        with pytest.raises(ValidationError, match="non-numeric"):
            parse_observations(f"1,2\n3,{cell}\n")

    def test_empty_cell_reported(self):
        with pytest.raises(ValidationError, match="missing or empty"):
            parse_observations("1,2,3\n4,,6\n")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="no data"):
            parse_observations("")

    def test_infinite_rejected(self):
        with pytest.raises(ValidationError, match="non-finite"):
            parse_observations("1,inf\n2,3\n")


class TestLoadObservations:

    def test_from_path(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("1,1,2\n2,1,3\n3,2,5\n")
        obs = load_observations(path)
        assert obs.shape == (3, 3)

    def test_from_str_path(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("1,2\n3,4\n")
        assert load_observations(str(path)).shape == (2, 2)

    def test_from_buffer(self):
        obs = load_observations(io.StringIO("7,8\n9,10\n"))
        np.testing.assert_array_equal(obs, [[7, 8], [9, 10]])

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "ragged.csv"
        path.write_text("1,2\n3\n")
        with pytest.raises(ValidationError, match="ragged.csv"):
            load_observations(path)


class TestObservationsFromValues:

    def test_row_major(self):
        obs = observations_from_values([1, 2, 3, 4, 5, 6], rows=2, cols=3)
        np.testing.assert_array_equal(obs, [[1, 2, 3], [4, 5, 6]])

    def test_size_mismatch(self):
        with pytest.raises(DimensionError, match="expected 2 \\* 3 = 6"):
            observations_from_values([1, 2, 3], rows=2, cols=3)

    def test_negative_shape(self):
        with pytest.raises(DimensionError):
            observations_from_values([], rows=-1, cols=0)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="non-finite"):
            observations_from_values([1.0, np.nan], rows=1, cols=2)
