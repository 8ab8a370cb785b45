"""
Cross-dataset reconciliation module.
Matches movies between two rating sources on exact title and year and tallies agreement.
"""

from typing import Optional

import pandas as pd

# Fuzzy matching is used for diagnostics only; it never changes the exact-match tally
from rapidfuzz import process, fuzz, utils

from loguru import logger

from .models import ReconciliationTally


def match_movies(
	first: pd.DataFrame,
	second: pd.DataFrame,
	title_column: str = 'title',
	year_column: str = 'year',
	first_rating: str = 'rating',
	second_rating: str = 'rating',
) -> pd.DataFrame:
	"""
	Join two movie tables on byte-exact title, then keep rows whose years agree.
	Titles are not normalized: remakes share titles, so the year disambiguates.
	Rows without a title, year or rating cannot be compared and are excluded; repeated
	(title, year) keys in the second source keep their first row so each movie matches once.
	"""
	left = first[[title_column, year_column, first_rating]].dropna()
	right = second[[title_column, year_column, second_rating]].dropna()
	incomplete = (len(first) - len(left), len(second) - len(right))
	deduped = right.drop_duplicates(subset=[title_column, year_column], keep='first')
	duplicates = len(right) - len(deduped)

	left = left.rename(columns={year_column: 'year_first', first_rating: 'rating_first'})
	right = deduped.rename(columns={year_column: 'year_second', second_rating: 'rating_second'})
	joined = left.merge(right, on=title_column, how='inner')
	matched = joined[joined['year_first'] == joined['year_second']]
	matched = matched.rename(columns={'year_first': year_column}).drop(columns=['year_second'])
	matched = matched.reset_index(drop=True)
	logger.debug(
		f"[Reconcile] Excluded {incomplete[0]} first-source and {incomplete[1]} second-source rows "
		f"with missing title/year/rating; dropped {duplicates} duplicate second-source keys"
	)
	logger.info(
		f"[Reconcile] {len(joined)} title matches, {len(matched)} after year agreement "
		f"({len(first) - len(matched)} first-source rows unmatched)"
	)
	return matched


def tally_agreement(matched: pd.DataFrame) -> ReconciliationTally:
	"""Count equal ratings and the direction of every disagreement."""
	first = matched['rating_first'].astype(int)
	second = matched['rating_second'].astype(int)
	tally = ReconciliationTally(
		equal=int((first == second).sum()),
		second_greater=int((second > first).sum()),
		first_greater=int((first > second).sum()),
	)
	logger.info(
		f"[Reconcile] equal={tally.equal} second_greater={tally.second_greater} "
		f"first_greater={tally.first_greater} total={tally.total}"
	)
	return tally


def find_near_misses(
	first: pd.DataFrame,
	second: pd.DataFrame,
	title_column: str = 'title',
	year_column: str = 'year',
	score_cutoff: float = 90.0,
	limit: Optional[int] = None,
) -> pd.DataFrame:
	"""
	List first-source movies without an exact (title, year) match whose title closely
	resembles a same-year title in the second source.
	Scores use rapidfuzz's ratio on case- and punctuation-normalized titles (0..100).
	"""
	exact = set(zip(second[title_column], second[year_column]))
	titles_by_year = second.groupby(year_column)[title_column].apply(list).to_dict()

	rows = []
	for title, year in zip(first[title_column], first[year_column]):
		if (title, year) in exact:
			continue
		candidates = titles_by_year.get(year)
		if not candidates:
			continue
		best = process.extractOne(
			title, candidates, scorer=fuzz.ratio, processor=utils.default_process, score_cutoff=score_cutoff
		)
		if best:
			rows.append({'title_first': title, 'title_second': best[0], year_column: year, 'score': round(best[1], 1)})
			logger.debug(f"[Reconcile] Near miss: '{title}' ~ '{best[0]}' ({year}) score={best[1]:.1f}")

	near = pd.DataFrame(rows, columns=['title_first', 'title_second', year_column, 'score'])
	near = near.sort_values('score', ascending=False, kind='mergesort').reset_index(drop=True)
	if limit is not None:
		near = near.head(limit)
	logger.info(f"[Reconcile] {len(near)} unmatched titles have a near match at cutoff {score_cutoff}")
	return near
