"""
Rating encoding module.
Maps Bechdel outcome labels to the ordinal -1..3 scale and derives the binary PASS/FAIL outcome.
"""

from typing import List

import pandas as pd

from loguru import logger

from .models import OK, PASS, FAIL, RATING_BY_OUTCOME

UNKNOWN_LEVEL = 'unknown'

# Legend levels in ordinal order; presentation only
LEVELS: List[str] = [str(r) for r in sorted(RATING_BY_OUTCOME.values())]


class UnknownOutcomeError(ValueError):
	"""Raised when an outcome label is outside the known five-value vocabulary."""


def rating_for(label: str) -> int:
	"""Return the ordinal rating of one outcome label."""
	try:
		return RATING_BY_OUTCOME[label]
	except KeyError:
		raise UnknownOutcomeError(f"Unknown Bechdel outcome label: {label!r}") from None


def binary_for(label: str) -> str:
	"""PASS for 'ok', FAIL for every other known label (dubious included)."""
	rating_for(label)  # validates the label
	return PASS if label == OK else FAIL


def encode_ratings(frame: pd.DataFrame, label_column: str = 'clean_test', on_unknown: str = 'raise') -> pd.DataFrame:
	"""
	Add 'rating' (nullable int) and 'level' (ordered categorical) columns.
	on_unknown='raise' rejects tables with unmapped labels; 'tag' keeps them with a null
	rating and the 'unknown' level.
	"""
	if on_unknown not in ('raise', 'tag'):
		raise ValueError(f"on_unknown must be 'raise' or 'tag', got {on_unknown!r}")
	if label_column not in frame.columns:
		raise KeyError(f"Label column '{label_column}' not found")

	labels = frame[label_column]
	unknown_mask = ~labels.isin(list(RATING_BY_OUTCOME))
	if unknown_mask.any():
		unknown = sorted(labels[unknown_mask].astype(str).unique())
		if on_unknown == 'raise':
			raise UnknownOutcomeError(f"{int(unknown_mask.sum())} rows carry unknown outcome labels: {unknown}")
		logger.warning(f"[Ratings] Tagging {int(unknown_mask.sum())} rows with unknown outcome labels: {unknown}")

	encoded = frame.copy()
	encoded['rating'] = labels.map(RATING_BY_OUTCOME).astype('Int64')
	level = encoded['rating'].astype('string').fillna(UNKNOWN_LEVEL)
	encoded['level'] = pd.Categorical(level, categories=LEVELS + [UNKNOWN_LEVEL], ordered=True)
	logger.debug(f"[Ratings] Rating distribution: {encoded['rating'].value_counts(dropna=False).to_dict()}")
	return encoded


def derive_binary(frame: pd.DataFrame, label_column: str = 'clean_test', binary_column: str = 'binary') -> pd.DataFrame:
	"""
	Fill the binary column from the label when the table does not carry one.
	Existing binary columns are validated instead of overwritten.
	"""
	if binary_column in frame.columns:
		check_binary(frame, label_column, binary_column)
		return frame
	derived = frame.copy()
	derived[binary_column] = frame[label_column].map(
		lambda label: (PASS if label == OK else FAIL) if label in RATING_BY_OUTCOME else pd.NA
	)
	return derived


def check_binary(frame: pd.DataFrame, label_column: str = 'clean_test', binary_column: str = 'binary') -> None:
	"""Raise ValueError when a binary value disagrees with its known outcome label."""
	known = frame[frame[label_column].isin(list(RATING_BY_OUTCOME))]
	expected = known[label_column].map(lambda label: PASS if label == OK else FAIL)
	mismatch = known[binary_column] != expected
	if mismatch.any():
		sample = known.loc[mismatch, [label_column, binary_column]].head(5).to_dict('records')
		raise ValueError(f"{int(mismatch.sum())} rows have a binary outcome inconsistent with their label, e.g. {sample}")
