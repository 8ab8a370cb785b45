"""
Tests for exact title+year reconciliation between two rating sources.
"""

import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from bechdel.reconcile import match_movies, tally_agreement, find_near_misses


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def sources():
	first = pd.DataFrame({
		'title': ['A', 'A', 'B', 'C', 'Spider-Man'],
		'year': [2000, 1990, 2001, 2002, 2002],
		'rating': [3, 1, 0, 2, 1],
	})
	second = pd.DataFrame({
		'title': ['A', 'A', 'B', 'C', 'Spiderman'],
		'year': [2000, 1995, 2001, 2002, 2002],
		'rating': [3, 2, 2, 1, 1],
	})
	return first, second


def test_match_requires_title_and_year():
	first, second = sources()
	matched = match_movies(first, second)
	assert_equal(matched['title'].tolist(), ['A', 'B', 'C'], "remake and near-title excluded")
	assert_equal(list(matched.columns), ['title', 'year', 'rating_first', 'rating_second'], "both ratings carried")


def test_tally_buckets_are_exclusive():
	first, second = sources()
	tally = tally_agreement(match_movies(first, second))
	assert_equal((tally.equal, tally.second_greater, tally.first_greater), (1, 1, 1), "one row per bucket")
	assert_equal(tally.total, 3, "buckets sum to matched rows")


def test_titles_match_byte_for_byte():
	first = pd.DataFrame({'title': ['The Matrix'], 'year': [1999], 'rating': [1]})
	second = pd.DataFrame({'title': ['the matrix'], 'year': [1999], 'rating': [1]})
	assert_equal(len(match_movies(first, second)), 0, "no case folding")
	assert_equal(tally_agreement(match_movies(first, second)).total, 0, "empty tally")


def test_near_misses_are_reported_not_counted():
	first, second = sources()
	near = find_near_misses(first, second)
	assert_equal(near['title_first'].tolist(), ['Spider-Man'], "only the close same-year title")
	assert_equal(near['title_second'].tolist(), ['Spiderman'], "best candidate")
	assert_equal(tally_agreement(match_movies(first, second)).total, 3, "tally unchanged")


def test_rows_without_rating_are_excluded():
	first = pd.DataFrame({'title': ['A', 'B'], 'year': [2000, 2001], 'rating': [3, 1]})
	second = pd.DataFrame({'title': ['A', 'B'], 'year': [2000, 2001], 'rating': [3, None]})
	matched = match_movies(first, second)
	assert_equal(matched['title'].tolist(), ['A'], "blank second-source rating not matched")
	tally = tally_agreement(matched)
	assert_equal((tally.equal, tally.total), (1, 1), "only comparable movies tallied")


def test_duplicate_second_source_keys_match_once():
	first = pd.DataFrame({'title': ['A'], 'year': [2000], 'rating': [3]})
	second = pd.DataFrame({'title': ['A', 'A'], 'year': [2000, 2000], 'rating': [3, 2]})
	matched = match_movies(first, second)
	assert_equal(len(matched), 1, "one row per movie")
	assert_equal(matched['rating_second'].tolist(), [3], "first duplicate kept")
	tally = tally_agreement(matched)
	assert_equal((tally.equal, tally.first_greater, tally.total), (1, 0, 1), "movie counted once")


def main():
	print("Running reconciliation tests...")
	test_match_requires_title_and_year()
	test_tally_buckets_are_exclusive()
	test_titles_match_byte_for_byte()
	test_near_misses_are_reported_not_counted()
	test_rows_without_rating_are_excluded()
	test_duplicate_second_source_keys_match_once()
	print("All reconciliation tests passed!")


if __name__ == '__main__':
	main()
