from __future__ import annotations

import logging
from collections import Counter

import numpy as np
import pandas as pd
import pytest

from vfoldcv.data import DataFrameDataset
from vfoldcv.errors import ConfigurationError
from vfoldcv.resampling.strata import (
    MISSING_LABEL,
    POOLED_LABEL,
    SINGLE_LABEL,
    check_pool,
    make_strata,
    pool_rare,
    resolve_strata,
)


def test_categorical_values_keep_their_categories() -> None:
    values = ["x"] * 40 + ["y"] * 35 + ["z"] * 25
    labels = make_strata(values)

    assert len(labels) == 100
    assert Counter(labels) == {"x": 40, "y": 35, "z": 25}


def test_numeric_with_few_distinct_values_is_categorical() -> None:
    labels = make_strata(np.array([0, 1] * 50))
    assert set(labels) == {"0", "1"}


def test_pandas_categorical_is_used_directly() -> None:
    values = pd.Categorical(["lo", "hi"] * 30, categories=["lo", "hi", "mid"])
    assert set(make_strata(values)) == {"lo", "hi"}


def test_numeric_values_are_quantile_binned() -> None:
    labels = make_strata(np.arange(200, dtype=float), breaks=4)

    counts = Counter(labels)
    assert len(counts) == 4
    assert set(counts.values()) == {50}


def test_quantile_bins_follow_value_order() -> None:
    values = np.arange(200, dtype=float)
    labels = make_strata(values, breaks=4)
    # The lowest quarter of the values shares one bin
    assert len(set(labels[:50])) == 1
    assert labels[0] != labels[-1]


def test_breaks_reduced_when_bins_would_be_too_shallow(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="vfoldcv.resampling.strata"):
        labels = make_strata(np.arange(50, dtype=float), breaks=4)

    assert len(set(labels)) == 2
    assert "2 breaks instead of 4" in caplog.text


def test_single_stratum_when_too_few_rows_for_two_bins(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="vfoldcv.resampling.strata"):
        labels = make_strata(np.arange(30, dtype=float), breaks=4)

    assert set(labels) == {SINGLE_LABEL}
    assert "must be >= 2" in caplog.text


def test_breaks_of_one_gives_single_stratum() -> None:
    labels = make_strata(np.arange(100, dtype=float), breaks=1)
    assert set(labels) == {SINGLE_LABEL}


def test_rare_category_is_pooled_with_smallest_remaining(caplog) -> None:
    values = ["A"] * 50 + ["B"] * 45 + ["C"] * 5
    with caplog.at_level(logging.WARNING, logger="vfoldcv.resampling.strata"):
        labels = make_strata(values)

    assert Counter(labels) == {"A": 50, "B": 50}
    assert "Pooling 1 categories" in caplog.text


def test_several_rare_categories_form_one_pooled_stratum() -> None:
    values = ["A"] * 45 + ["B"] * 41 + ["C"] * 7 + ["D"] * 7
    labels = make_strata(values)

    assert Counter(labels) == {"A": 45, "B": 41, POOLED_LABEL: 14}


def test_all_rare_categories_collapse_to_single_stratum(caplog) -> None:
    values = [f"c{i}" for i in range(20)] * 5
    with caplog.at_level(logging.WARNING, logger="vfoldcv.resampling.strata"):
        labels = make_strata(values)

    assert set(labels) == {SINGLE_LABEL}
    assert "Too little data to stratify" in caplog.text


def test_pool_rare_does_not_modify_input() -> None:
    labels = np.array(["A"] * 19 + ["B"], dtype=object)
    pooled = pool_rare(labels, pool=0.1)

    assert labels[-1] == "B"
    assert set(pooled) == {"A"}


def test_missing_values_get_their_own_category() -> None:
    values = ["x"] * 45 + [None] * 20 + ["y"] * 35
    labels = make_strata(values)

    assert Counter(labels)[MISSING_LABEL] == 20


def test_numeric_missing_values_do_not_get_a_bin() -> None:
    values = np.arange(200, dtype=float)
    values[:20] = np.nan
    labels = make_strata(values, breaks=4)

    assert all(label == MISSING_LABEL for label in labels[:20])
    assert MISSING_LABEL not in set(labels[20:])


@pytest.mark.parametrize("breaks", [0, -1, 2.5, "4", None, True])
def test_invalid_breaks_raise(breaks) -> None:
    with pytest.raises(ConfigurationError, match="breaks"):
        make_strata(np.arange(100, dtype=float), breaks=breaks)


def test_invalid_pool_raises() -> None:
    with pytest.raises(ConfigurationError, match="pool"):
        make_strata(["a", "b"], pool=1.5)


def test_two_dimensional_values_raise() -> None:
    with pytest.raises(ConfigurationError, match="1D"):
        make_strata(np.zeros((4, 2)))


class TestResolveStrata:
    def test_name(self, churn_df) -> None:
        assert resolve_strata(DataFrameDataset(churn_df), "churn") == "churn"

    def test_none(self, churn_df) -> None:
        assert resolve_strata(DataFrameDataset(churn_df), None) is None

    def test_unknown_column(self, churn_df) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_strata(DataFrameDataset(churn_df), "nope")

    def test_single_item_sequence(self, churn_df) -> None:
        assert resolve_strata(DataFrameDataset(churn_df), ["tenure"]) == "tenure"

    def test_callable_selecting_nothing_means_unstratified(self, churn_df) -> None:
        ds = DataFrameDataset(churn_df)
        assert resolve_strata(ds, lambda cols: [c for c in cols if c.startswith("zz")]) is None

    def test_callable_selecting_one_column(self, churn_df) -> None:
        ds = DataFrameDataset(churn_df)
        assert resolve_strata(ds, lambda cols: [c for c in cols if c.startswith("ch") and c != "charges"]) == "churn"

    def test_more_than_one_column(self, churn_df) -> None:
        with pytest.raises(ConfigurationError, match="single column"):
            resolve_strata(DataFrameDataset(churn_df), ["churn", "tenure"])


def test_pooled_stratum_does_not_merge_into_existing_other_category() -> None:
    values = ["other"] * 48 + ["B"] * 40 + ["C"] * 6 + ["D"] * 6
    labels = make_strata(values)

    assert Counter(labels) == {"other": 48, "B": 40, "other1": 12}


def test_rare_category_named_other_can_take_the_pooled_label() -> None:
    values = ["A"] * 45 + ["B"] * 41 + ["other"] * 7 + ["D"] * 7
    labels = make_strata(values)

    assert Counter(labels) == {"A": 45, "B": 41, POOLED_LABEL: 14}


@pytest.mark.parametrize("pool", [1.5, 1.0, -0.1, "0.1", None, True])
def test_check_pool_rejects_invalid(pool) -> None:
    with pytest.raises(ConfigurationError, match="pool"):
        check_pool(pool)
