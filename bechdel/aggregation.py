"""
Subset and aggregation module.
Partitions the movie table by rating and outcome and computes the gross and yearly summaries.
"""

from typing import Dict

import pandas as pd

from loguru import logger

from .data_loader import coerce_gross
from .models import DUBIOUS_RATING, PASS, FAIL


def subsets_by_rating(frame: pd.DataFrame, rating_column: str = 'rating') -> Dict[int, pd.DataFrame]:
	"""One table per rating value present, in ascending rating order."""
	values = sorted(int(v) for v in frame[rating_column].dropna().unique())
	return {v: frame[(frame[rating_column] == v).fillna(False)] for v in values}


def subsets_by_binary(frame: pd.DataFrame, binary_column: str = 'binary') -> Dict[str, pd.DataFrame]:
	"""One table per binary outcome present (PASS first)."""
	present = set(frame[binary_column].dropna())
	return {b: frame[frame[binary_column] == b] for b in (PASS, FAIL) if b in present}


def mean_gross_by_rating(frame: pd.DataFrame, gross_column: str = 'intgross', rating_column: str = 'rating') -> pd.Series:
	"""
	Mean coerced gross per ordinal rating.
	Non-numeric gross values are ignored; the dubious rating is excluded.
	"""
	gross = coerce_gross(frame[gross_column])
	ratings = frame[rating_column]
	keep = ratings.notna() & (ratings != DUBIOUS_RATING)
	means = gross[keep].groupby(ratings[keep].astype(int)).mean()
	means.index.name = rating_column
	means.name = 'mean_gross'
	logger.debug(f"[Aggregate] Mean gross by rating: {means.round(0).to_dict()}")
	return means


def top_by_gross(frame: pd.DataFrame, n: int = 80, gross_column: str = 'intgross') -> pd.DataFrame:
	"""
	The n highest-grossing movies, sorted descending on coerced gross.
	Stable sort: ties keep input order; unparseable gross sorts last.
	"""
	if n <= 0:
		raise ValueError("n must be positive")
	gross = coerce_gross(frame[gross_column])
	positions = gross.reset_index(drop=True).sort_values(ascending=False, kind='mergesort', na_position='last').index
	return frame.iloc[positions[:n]]


def yearly_outcomes(frame: pd.DataFrame, year_column: str = 'year', binary_column: str = 'binary') -> pd.DataFrame:
	"""PASS/FAIL counts per year plus the share of passing movies."""
	counts = pd.crosstab(frame[year_column], frame[binary_column])
	for outcome in (PASS, FAIL):
		if outcome not in counts.columns:
			counts[outcome] = 0
	counts = counts[[PASS, FAIL]]
	counts.columns.name = None
	counts['total'] = counts[PASS] + counts[FAIL]
	counts['pass_share'] = counts[PASS] / counts['total']
	return counts
