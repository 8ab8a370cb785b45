"""
Tests for genre expansion and outcome counts, including the two-movie walk-through.
"""

import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from bechdel.data_loader import MovieLoader
from bechdel.ratings import encode_ratings, derive_binary
from bechdel.genres import split_genres, expand_genres, genre_outcome_counts, filter_display_genres


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def as_dict(counts):
	return dict(zip(zip(counts['genre'], counts['binary']), counts['count']))


def test_split_genres():
	assert_equal(split_genres("Comedy, Drama"), ['Comedy', 'Drama'], "comma split with trim")
	assert_equal(split_genres("Action"), ['Action'], "single genre")
	assert_equal(split_genres("Comedy, , Drama,"), ['Comedy', 'Drama'], "blank slots dropped")
	assert_equal(split_genres(None), [], "missing value")
	assert_equal(split_genres(float('nan')), [], "NaN value")


def test_two_movie_walkthrough():
	raw = pd.DataFrame({
		'title': ['A', 'B'],
		'year': [2000, 2000],
		'Genre': ['Comedy, Drama', 'Action'],
		'clean_test': ['ok', 'nowomen'],
	})
	movies = MovieLoader().clean(raw)
	assert_equal(len(movies), 2, "cleaning keeps both rows")

	movies = derive_binary(encode_ratings(movies))
	assert_equal(movies['rating'].tolist(), [3, 0], "A->3, B->0")

	expanded = expand_genres(movies)
	pairs = list(zip(expanded['title'], expanded['genre']))
	assert_equal(pairs, [('A', 'Comedy'), ('A', 'Drama'), ('B', 'Action')], "three (movie, genre) rows")

	counts = as_dict(genre_outcome_counts(expanded))
	assert_equal(counts, {('Action', 'FAIL'): 1, ('Comedy', 'PASS'): 1, ('Drama', 'PASS'): 1}, "outcome per genre")


def test_expansion_row_count_invariant():
	frame = pd.DataFrame({
		'title': ['A', 'B', 'C', 'D'],
		'Genre': ['Drama, Romance, War', 'Horror', 'Sci-Fi, Thriller', 'Animation, Comedy, Family, Musical'],
		'binary': ['PASS', 'FAIL', 'FAIL', 'PASS'],
	})
	expanded = expand_genres(frame)
	assert_equal(len(expanded), sum(len(split_genres(g)) for g in frame['Genre']), "one row per non-empty slot")
	for row in expanded.itertuples(index=False):
		assert_true(row.genre in frame['Genre'].iloc[row.movie_id], f"{row.genre} comes from its movie")
	assert_equal(expanded[expanded['title'] == 'D']['genre'].tolist(), ['Animation', 'Comedy', 'Family', 'Musical'], "no fixed slot limit")


def test_display_filter_keeps_source_counts():
	expanded = expand_genres(pd.DataFrame({
		'title': ['A', 'B', 'C'],
		'Genre': ['Comedy, Western', 'Western', 'Drama'],
		'binary': ['PASS', 'FAIL', 'FAIL'],
	}))
	counts = genre_outcome_counts(expanded)
	shown = filter_display_genres(counts, ['Comedy', 'Drama'])
	assert_equal(sorted(shown['genre'].unique()), ['Comedy', 'Drama'], "only allowed genres shown")
	assert_equal(as_dict(counts)[('Western', 'FAIL')], 1, "excluded genres still counted")
	assert_equal(as_dict(counts)[('Western', 'PASS')], 1, "excluded genres still counted")


def main():
	print("Running genres tests...")
	test_split_genres()
	test_two_movie_walkthrough()
	test_expansion_row_count_invariant()
	test_display_filter_keeps_source_counts()
	print("All genres tests passed!")


if __name__ == '__main__':
	main()
