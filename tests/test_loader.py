# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Tests for signal file loading and validation.
"""

import json
import logging

import numpy as np
import pytest

from spectrum_analysis.analyzer import compute_spectrogram
from spectrum_analysis.loader import (
    load_signal,
    parse_csv,
    parse_json,
    parse_txt,
    truncate_signal,
    validate_data
)


class TestParsers:
    def test_csv_uses_last_column_and_skips_header(self):
        content = "time,value\n0.0,1.5\n0.1,-2\n0.2,3e-1\n"
        assert parse_csv(content) == [1.5, -2.0, 0.3]

    def test_txt_splits_on_whitespace(self):
        assert parse_txt("1 2\n3\t4\r\n  5  ") == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_txt_drops_non_finite_tokens(self):
        assert parse_txt("1.0 inf 2.0 -Infinity 1e999 -3.0 nan") == [1.0, 2.0, -3.0]

    def test_csv_drops_non_finite_rows(self):
        assert parse_csv("t,x\n0,1\n1,inf\n2,-1e999\n3,4\n") == [1.0, 4.0]

    def test_json_number_list(self):
        assert parse_json("[1, 2.5, -3]") == [1, 2.5, -3]

    def test_json_signal_property(self):
        assert parse_json(json.dumps({"signal": [1, 2], "data": [3]})) == [1, 2]

    def test_json_data_property(self):
        assert parse_json(json.dumps({"data": [3, 4]})) == [3, 4]

    def test_json_any_numeric_property(self):
        assert parse_json(json.dumps({"name": "x", "samples": [5, 6]})) == [5, 6]

    def test_json_list_of_objects(self):
        content = json.dumps([{"label": "a", "v": 1.0}, {"label": "b", "v": 2.0}])
        assert parse_json(content) == [1.0, 2.0]

    def test_json_without_numbers(self):
        with pytest.raises(ValueError, match="no valid numeric array"):
            parse_json(json.dumps({"name": "x"}))

    def test_malformed_json(self):
        with pytest.raises(ValueError, match="Error parsing JSON"):
            parse_json("{not json")


class TestValidation:
    def test_truncation_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="spectrum_analysis.SignalLoader"):
            result = validate_data(list(range(20)), max_samples=10)
        assert result.size == 10
        assert np.array_equal(result, np.arange(10))
        assert "exceeds maximum" in caplog.text

    def test_default_cap_is_one_million(self):
        signal = np.zeros(1_000_005)
        assert truncate_signal(signal).size == 1_000_000

    def test_filters_invalid_values(self, caplog):
        with caplog.at_level(logging.WARNING, logger="spectrum_analysis.SignalLoader"):
            result = validate_data([1.0, float("nan"), "x", 2.0])
        assert np.array_equal(result, [1.0, 2.0])
        assert "filtered out" in caplog.text

    def test_filters_non_finite_values(self, caplog):
        with caplog.at_level(logging.WARNING, logger="spectrum_analysis.SignalLoader"):
            result = validate_data([1.0, float("inf"), -float("inf"), 10 ** 400, 2.0])
        assert np.array_equal(result, [1.0, 2.0])
        assert "non-finite" in caplog.text

    def test_empty(self):
        with pytest.raises(ValueError, match="empty"):
            validate_data([])

    def test_not_an_array(self):
        with pytest.raises(ValueError, match="expected array"):
            validate_data("1,2,3")


class TestLoadSignal:
    def test_load_csv(self, tmp_path):
        path = tmp_path / "signal.csv"
        path.write_text("t,x\n0,1\n1,2\n2,3\n")
        assert np.array_equal(load_signal(str(path)), [1.0, 2.0, 3.0])

    def test_load_txt(self, tmp_path):
        path = tmp_path / "signal.txt"
        path.write_text("0.5 0.25\n0.125\n")
        assert np.array_equal(load_signal(str(path)), [0.5, 0.25, 0.125])

    def test_load_json_with_cap(self, tmp_path):
        path = tmp_path / "signal.json"
        path.write_text(json.dumps({"signal": list(range(50))}))
        assert load_signal(str(path), max_samples=20).size == 20

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "signal.wav"
        path.write_text("1 2 3")
        with pytest.raises(ValueError, match="Unsupported file type"):
            load_signal(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_signal(str(tmp_path / "missing.csv"))

    def test_no_numeric_data(self, tmp_path):
        path = tmp_path / "signal.txt"
        path.write_text("abc def")
        with pytest.raises(ValueError, match="No valid numeric data"):
            load_signal(str(path))

    def test_infinite_tokens_do_not_reach_analysis(self, tmp_path):
        path = tmp_path / "signal.txt"
        path.write_text("1.0 inf 2.0 -3.0 " * 300)
        signal = load_signal(str(path))
        assert signal.size == 900
        assert np.all(np.isfinite(signal))
        assert np.all(np.isfinite(compute_spectrogram(signal, 100.0).matrix))

    def test_only_infinite_values(self, tmp_path):
        path = tmp_path / "signal.json"
        path.write_text("[Infinity, -Infinity, 1e999]")
        with pytest.raises(ValueError, match="No valid numeric data"):
            load_signal(str(path))
