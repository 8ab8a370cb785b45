"""
Genre expansion module.
Turns the delimited genre field into one row per (movie, genre) pair and counts outcomes per genre.
"""

from typing import Iterable, List

import pandas as pd

from loguru import logger


def split_genres(value, delimiter: str = ',') -> List[str]:
	"""
	Split a delimited genre string into a clean list.
	None/NaN or blank values produce an empty list.
	"""
	if value is None or (isinstance(value, float) and pd.isna(value)):
		return []
	if isinstance(value, list):  # already split
		return [str(item).strip() for item in value if str(item).strip()]
	return [item.strip() for item in str(value).split(delimiter) if item.strip()]


def expand_genres(
	frame: pd.DataFrame,
	genre_column: str = 'Genre',
	title_column: str = 'title',
	binary_column: str = 'binary',
	delimiter: str = ',',
) -> pd.DataFrame:
	"""
	Long table with one row per non-empty genre of each movie.
	The movie_id column is the position of the movie in the input table.
	"""
	wide = pd.DataFrame({
		'movie_id': range(len(frame)),
		'title': frame[title_column].to_numpy(),
		'genre': [split_genres(v, delimiter) for v in frame[genre_column]],
		'binary': frame[binary_column].to_numpy(),
	})
	long = wide.explode('genre', ignore_index=True)
	long = long[long['genre'].notna()].reset_index(drop=True)  # movies without genres explode to NaN
	logger.info(f"[Genres] Expanded {len(frame)} movies into {len(long)} (movie, genre) rows")
	return long[['movie_id', 'title', 'genre', 'binary']]


def genre_outcome_counts(expanded: pd.DataFrame) -> pd.DataFrame:
	"""Outcome frequency per genre as a long (genre, binary, count) table, genres alphabetical."""
	counts = (
		expanded.groupby(['genre', 'binary'])
		.size()
		.reset_index(name='count')
		.sort_values(['genre', 'binary'], kind='mergesort')
		.reset_index(drop=True)
	)
	return counts


def filter_display_genres(counts: pd.DataFrame, allow: Iterable[str]) -> pd.DataFrame:
	"""Restrict a count table to the genres shown in charts; the input table is left intact."""
	allow = list(allow)
	shown = counts[counts['genre'].isin(allow)].reset_index(drop=True)
	logger.debug(f"[Genres] Display filter kept {shown['genre'].nunique()} of {counts['genre'].nunique()} genres")
	return shown
